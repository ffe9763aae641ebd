"""
Appointment endpoints.

``POST /api/appointments/submit`` books an appointment, bills the selected
services and records the payment in one transaction.  The remaining handlers
read, reschedule/reprice and delete bookings.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from ..permissions import IsAdminRoleToDelete
from ..serializers.billing import AppointmentSubmitSerializer, AppointmentUpdateSerializer, AppointmentListQuerySerializer
from ..services import appointments as booking


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_appointment(request):
    s = AppointmentSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    appointment = booking.submit_appointment(
        patient_id=data['patientId'],
        doctor_id=data['doctorId'],
        schedule_date=data['scheduleDate'],
        schedule_time=data['scheduleTime'],
        service_type_ids=data['serviceTypeIds'],
        discount=data['discount'],
        paying_amount=data['payingAmount'],
        tax_category=data.get('taxCategory'),
        user=request.user,
    )
    return Response({'ok': True, 'data': booking.format_appointment(appointment)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_appointments(request):
    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': booking.list_appointments(on_date=q.validated_data.get('date'))})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def today_appointments(request):
    return Response({'ok': True, 'data': booking.list_today_appointments()})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRoleToDelete])
def appointment_detail(request, pk: int):
    appointment = get_object_or_404(booking.appointments_queryset(), pk=pk)
    if request.method == 'GET':
        return Response({'ok': True, 'data': booking.format_appointment(appointment)})
    if request.method == 'PUT':
        s = AppointmentUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        appointment = booking.update_appointment(
            appointment,
            patient_id=data['patientId'],
            doctor_id=data['doctorId'],
            schedule_date=data['scheduleDate'],
            schedule_time=data['scheduleTime'],
            consultation_cost=data.get('consultationCost'),
            discount=data['discount'],
            paying_amount=data['payingAmount'],
            tax_category=data.get('taxCategory'),
            user=request.user,
        )
        return Response({'ok': True, 'data': booking.format_appointment(appointment)})
    # DELETE
    booking.delete_appointment(appointment, user=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)
