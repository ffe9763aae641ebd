"""
Payment ledger endpoints and outstanding dues.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from ..models import Patient, Payment
from ..permissions import IsAdminRoleToDelete
from ..serializers.billing import PaymentSerializer
from ..services import payments as ledger


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def payments_list(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': ledger.list_payments()})
    # POST
    s = PaymentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    payment = ledger.record_payment(
        scope=data['paymentScope'],
        total=data['total'],
        discount=data['discount'],
        paying_amount=data['payingAmount'],
        tax_category=data.get('taxCategory'),
        user=request.user,
    )
    return Response({'ok': True, 'data': ledger.format_payment(payment)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_dues(request):
    return Response({'ok': True, 'data': ledger.list_dues()})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRoleToDelete])
def payment_detail(request, pk: int):
    payment = get_object_or_404(Payment, pk=pk)
    if request.method == 'GET':
        return Response({'ok': True, 'data': ledger.format_payment(payment)})
    if request.method == 'PUT':
        s = PaymentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        payment = ledger.update_payment(
            payment,
            scope=data['paymentScope'],
            total=data['total'],
            discount=data['discount'],
            paying_amount=data['payingAmount'],
            tax_category=data.get('taxCategory'),
            user=request.user,
        )
        return Response({'ok': True, 'data': ledger.format_payment(payment)})
    # DELETE
    ledger.delete_payment(payment, user=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_dues(request, pk: int):
    patient = get_object_or_404(Patient, pk=pk)
    return Response({'ok': True, 'data': ledger.patient_dues(patient.id)})
