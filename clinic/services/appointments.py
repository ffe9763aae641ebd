"""
Appointment booking and repricing.

:func:`submit_appointment` books a visit together with the services chosen
for it and the payment taken at the desk.  The work happens in stages:

* validating: the patient, the doctor and the requested service types are
  resolved; any failure raises a DRF ``ValidationError`` and nothing is
  written;
* pricing: the consultation fee and the service costs are billed once with
  :func:`clinic.services.billing.compute_billing`;
* persisting: the appointment, its service assignment with one detail per
  service and the payment row are inserted inside one
  ``transaction.atomic()`` block.  A failure at any insert rolls back all of
  them and surfaces as :class:`clinic.exceptions.PersistenceError`.

The single ``BillingResult`` is copied onto every row written, so the three
rows always agree on discount, VAT and grand total.
"""
from __future__ import annotations

import datetime
import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from clinic.exceptions import PersistenceError
from clinic.models import Appointment, Payment, ServiceAssignment, Staff
from clinic.services import assignments, payments
from clinic.services.audit import log_action
from clinic.services.billing import BillingResult, compute_billing, format_money, to_money
from clinic.services.catalog import consultation_fee, find_patient, resolve_doctor, resolve_service_types
from clinic.services.taxes import active_tax_ratios

logger = logging.getLogger(__name__)


def submit_appointment(*, patient_id: int, doctor_id: int, schedule_date: datetime.date,
                       schedule_time: datetime.time, service_type_ids: Iterable[int],
                       discount: Decimal = Decimal('0'), paying_amount: Decimal = Decimal('0'),
                       tax_category: Optional[str] = None, user=None) -> Appointment:
    # Validating
    patient = find_patient(patient_id)
    if patient is None:
        raise ValidationError('patient not found')
    doctor = resolve_doctor(doctor_id)
    service_types = resolve_service_types(service_type_ids)

    # Pricing
    fee = consultation_fee(doctor)
    services_total = to_money(sum((st.cost for st in service_types), Decimal('0')))
    billing = compute_billing(
        [fee, *(st.cost for st in service_types)],
        discount=discount,
        tax_rates=active_tax_ratios(tax_category),
        paying_amount=paying_amount,
    )

    # Persisting
    try:
        with transaction.atomic():
            appointment = _create_appointment(patient, doctor, schedule_date, schedule_time, fee, billing)
            assignment = _create_service_assignment(appointment, services_total, billing)
            assignments.add_details(assignment, service_types)
            payment = payments.write_payment(Payment.SCOPE_APPOINTMENT, billing)
    except Exception as exc:
        logger.exception(f"appointment for patient {patient_id} rolled back")
        raise PersistenceError(f'An error occurred while creating the appointment: {exc}') from exc

    logger.info(
        f"appointment {appointment.id} booked: subtotal={billing.subtotal} vat={billing.tax_amount} "
        f"grand_total={billing.grand_total} balance={billing.balance}"
    )
    log_action(user=user, action='appointment_submit', object_type='appointment', object_id=appointment.id,
               detail={'serviceAssignmentId': assignment.id, 'paymentId': payment.id, **billing.as_dict()})

    appointment.patient = patient
    appointment.doctor = doctor
    appointment.service_assignment = assignment
    appointment.payment = payment
    appointment.billing = billing
    return appointment


def _create_appointment(patient, doctor: Staff, schedule_date, schedule_time, fee: Decimal,
                        billing: BillingResult) -> Appointment:
    return Appointment.objects.create(
        patient=patient,
        doctor=doctor,
        schedule_date=schedule_date,
        schedule_time=schedule_time,
        consultation_cost=fee,
        discount=billing.discount,
        vat=billing.tax_amount,
        grand_total=billing.grand_total,
        paying_amount=billing.paying_amount,
        balance=billing.balance,
    )


def _create_service_assignment(appointment: Appointment, services_total: Decimal,
                               billing: BillingResult) -> ServiceAssignment:
    # total_cost is the services subtotal only; discount, VAT and grand total are
    # the booking's for display.  The balance is owed on the appointment row.
    return ServiceAssignment.objects.create(
        appointment=appointment,
        doctor_id=appointment.doctor_id,
        total_cost=services_total,
        discount=billing.discount,
        vat=billing.tax_amount,
        grand_total=billing.grand_total,
        paying_amount=Decimal('0.00'),
        balance=Decimal('0.00'),
        is_booking=True,
    )


def _booking_assignment(appointment: Appointment) -> Optional[ServiceAssignment]:
    """The assignment written together with the appointment, if it still exists."""
    return appointment.service_assignments.filter(is_booking=True).first()


def update_appointment(appointment: Appointment, *, patient_id: int, doctor_id: int,
                       schedule_date: datetime.date, schedule_time: datetime.time,
                       consultation_cost: Optional[Decimal] = None, discount: Decimal = Decimal('0'),
                       paying_amount: Decimal = Decimal('0'), tax_category: Optional[str] = None,
                       user=None) -> Appointment:
    """Full replace of a booking: reschedule and/or reprice.

    The bill is recomputed over the consultation cost (the doctor's fee when
    not given) plus the cost snapshots of the services booked with the
    appointment.  The booking's service assignment receives the same figures.
    Once that assignment is deleted only the consultation is repriced;
    assignments billed later keep their own figures.
    Payment rows are not linked to appointments and are left untouched.
    """
    patient = find_patient(patient_id)
    if patient is None:
        raise ValidationError('patient not found')
    doctor = resolve_doctor(doctor_id)
    fee = to_money(consultation_cost) if consultation_cost is not None else consultation_fee(doctor)

    assignment = _booking_assignment(appointment)
    booked_costs = list(assignment.details.values_list('cost', flat=True)) if assignment else []
    billing = compute_billing(
        [fee, *booked_costs],
        discount=discount,
        tax_rates=active_tax_ratios(tax_category),
        paying_amount=paying_amount,
    )

    try:
        with transaction.atomic():
            appointment.patient = patient
            appointment.doctor = doctor
            appointment.schedule_date = schedule_date
            appointment.schedule_time = schedule_time
            appointment.consultation_cost = fee
            appointment.discount = billing.discount
            appointment.vat = billing.tax_amount
            appointment.grand_total = billing.grand_total
            appointment.paying_amount = billing.paying_amount
            appointment.balance = billing.balance
            appointment.save()
            if assignment is not None:
                assignment.doctor = doctor
                assignment.discount = billing.discount
                assignment.vat = billing.tax_amount
                assignment.grand_total = billing.grand_total
                assignment.save(update_fields=['doctor', 'discount', 'vat', 'grand_total'])
    except Exception as exc:
        logger.exception(f"update of appointment {appointment.id} rolled back")
        raise PersistenceError(f'An error occurred while updating the appointment: {exc}') from exc

    logger.info(f"appointment {appointment.id} repriced: grand_total={billing.grand_total} balance={billing.balance}")
    log_action(user=user, action='appointment_update', object_type='appointment', object_id=appointment.id,
               detail=billing.as_dict())
    appointment.billing = billing
    return appointment


def delete_appointment(appointment: Appointment, *, user=None) -> None:
    """Delete a booking; its service assignments and their details go with it."""
    appointment_id = appointment.id
    appointment.delete()
    logger.info(f"appointment {appointment_id} deleted")
    log_action(user=user, action='appointment_delete', object_type='appointment', object_id=appointment_id)


def appointments_queryset():
    return Appointment.objects.select_related('patient', 'doctor').order_by('schedule_date', 'schedule_time', 'id')


def list_appointments(*, on_date: Optional[datetime.date] = None) -> list[dict]:
    qs = appointments_queryset()
    if on_date is not None:
        qs = qs.filter(schedule_date=on_date)
    return [format_appointment(a) for a in qs]


def list_today_appointments() -> list[dict]:
    return list_appointments(on_date=timezone.localdate())


def format_appointment(appointment: Appointment) -> dict:
    data = {
        'id': appointment.id,
        'patientId': appointment.patient_id,
        'patientName': appointment.patient.full_name if appointment.patient_id else None,
        'doctorId': appointment.doctor_id,
        'doctorName': appointment.doctor.full_name if appointment.doctor_id else None,
        'scheduleDate': appointment.schedule_date.isoformat(),
        'scheduleTime': appointment.schedule_time.strftime('%H:%M:%S'),
        'consultationCost': format_money(appointment.consultation_cost),
        'discount': format_money(appointment.discount),
        'vat': format_money(appointment.vat),
        'grandTotal': format_money(appointment.grand_total),
        'payingAmount': format_money(appointment.paying_amount),
        'balance': format_money(appointment.balance),
    }
    billing = getattr(appointment, 'billing', None)
    if billing is not None:
        data['billing'] = billing.as_dict()
    assignment = getattr(appointment, 'service_assignment', None)
    if assignment is not None:
        data['serviceAssignmentId'] = assignment.id
    payment = getattr(appointment, 'payment', None)
    if payment is not None:
        data['paymentId'] = payment.id
    return data
