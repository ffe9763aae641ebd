"""
Token authentication for the clinic API.

Kept apart from the views so that DRF can import the class from settings
without pulling in the view modules.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>`` with keys issued by ``/api/auth/login``."""

    keyword = 'Token'
