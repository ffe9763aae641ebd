"""
Administrative dashboard endpoint.

Revenue figures are restricted to administrative roles.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..services.dashboard import dashboard_stats


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def stats(request):
    return Response({'ok': True, 'data': dashboard_stats()})
