"""
Tax definitions.

Reads are open to any authenticated user; the billing writers read the
active rows of the configured category themselves.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from ..models import Tax
from ..permissions import IsAdminRoleToDelete
from ..serializers.billing import TaxSerializer
from ..services.audit import log_action
from ..services.taxes import default_tax, format_tax

logger = logging.getLogger(__name__)


def _apply(tax: Tax, data: dict) -> Tax:
    tax.name = data['name']
    tax.category = data['category']
    tax.type = data['type']
    tax.is_default = data['isDefault']
    tax.is_registered_authority = data['isRegisteredAuthority']
    tax.registration_number = data['registrationNumber']
    tax.registration_date = data['registrationDate']
    tax.ratio = data['ratio']
    tax.active = data['active']
    tax.save()
    return tax


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def taxes_list(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [format_tax(t) for t in Tax.objects.order_by('id')]})
    # POST
    s = TaxSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    with transaction.atomic():
        tax = _apply(Tax(), s.validated_data)
    log_action(user=request.user, action='tax_create', object_type='tax', object_id=tax.id, detail=format_tax(tax))
    return Response({'ok': True, 'data': format_tax(tax)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tax_default(request):
    tax = default_tax()
    return Response({'ok': True, 'data': format_tax(tax) if tax else None})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRoleToDelete])
def tax_detail(request, pk: int):
    tax = get_object_or_404(Tax, pk=pk)
    if request.method == 'GET':
        return Response({'ok': True, 'data': format_tax(tax)})
    if request.method == 'PUT':
        s = TaxSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        with transaction.atomic():
            tax = _apply(tax, s.validated_data)
        log_action(user=request.user, action='tax_update', object_type='tax', object_id=tax.id, detail=format_tax(tax))
        return Response({'ok': True, 'data': format_tax(tax)})
    # DELETE
    tax_id = tax.id
    tax.delete()
    logger.info(f"tax {tax_id} deleted")
    log_action(user=request.user, action='tax_delete', object_type='tax', object_id=tax_id)
    return Response(status=status.HTTP_204_NO_CONTENT)
