"""
ASGI config for the clinic project.

The API is plain HTTP; this entrypoint lets it run under an ASGI server.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinic_api.settings")

application = get_asgi_application()
