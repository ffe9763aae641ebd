"""
Services billed against an existing appointment.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from clinic.exceptions import PersistenceError
from clinic.models import Appointment, Payment, ServiceAssignment, ServiceAssignmentDetail, ServiceType
from clinic.services import payments
from clinic.services.audit import log_action
from clinic.services.billing import compute_billing, format_money
from clinic.services.catalog import resolve_service_types
from clinic.services.taxes import active_tax_ratios

logger = logging.getLogger(__name__)


def add_details(assignment: ServiceAssignment, service_types: list[ServiceType]) -> list[ServiceAssignmentDetail]:
    """One detail line per service type, holding the catalog cost as of now."""
    return ServiceAssignmentDetail.objects.bulk_create([
        ServiceAssignmentDetail(assignment=assignment, service_type=st, cost=st.cost)
        for st in service_types
    ])


def create_service_assignment(*, appointment_id: int, service_type_ids: Iterable[int],
                              discount: Decimal = Decimal('0'), paying_amount: Decimal = Decimal('0'),
                              tax_category: Optional[str] = None, user=None) -> ServiceAssignment:
    appointment = Appointment.objects.filter(id=appointment_id).first()
    if appointment is None:
        raise ValidationError('appointment not found')
    service_types = resolve_service_types(service_type_ids)

    billing = compute_billing(
        [st.cost for st in service_types],
        discount=discount,
        tax_rates=active_tax_ratios(tax_category),
        paying_amount=paying_amount,
    )

    try:
        with transaction.atomic():
            # the doctor is inherited from the appointment
            assignment = ServiceAssignment.objects.create(
                appointment=appointment,
                doctor_id=appointment.doctor_id,
                total_cost=billing.subtotal,
                discount=billing.discount,
                vat=billing.tax_amount,
                grand_total=billing.grand_total,
                paying_amount=billing.paying_amount,
                balance=billing.balance,
            )
            add_details(assignment, service_types)
            payment = payments.write_payment(Payment.SCOPE_SERVICE, billing)
    except Exception as exc:
        logger.exception(f"service assignment for appointment {appointment_id} rolled back")
        raise PersistenceError(f'Error creating service assignment: {exc}') from exc

    logger.info(f"service assignment {assignment.id} created for appointment {appointment_id}: "
                f"grand_total={billing.grand_total} balance={billing.balance}")
    log_action(user=user, action='service_assignment_create', object_type='service_assignment',
               object_id=assignment.id, detail={'paymentId': payment.id, **billing.as_dict()})
    assignment.payment = payment
    assignment.billing = billing
    return assignment


def list_by_appointment(appointment_id: int) -> list[dict]:
    qs = (ServiceAssignment.objects.filter(appointment_id=appointment_id)
          .select_related('doctor')
          .prefetch_related('details__service_type')
          .order_by('id'))
    return [format_assignment(sa) for sa in qs]


def delete_service_assignment(assignment: ServiceAssignment, *, user=None) -> None:
    assignment_id = assignment.id
    with transaction.atomic():
        assignment.details.all().delete()
        assignment.delete()
    logger.info(f"service assignment {assignment_id} deleted")
    log_action(user=user, action='service_assignment_delete', object_type='service_assignment', object_id=assignment_id)


def format_assignment(sa: ServiceAssignment) -> dict:
    data = {
        'id': sa.id,
        'appointmentId': sa.appointment_id,
        'doctorId': sa.doctor_id,
        'doctorName': sa.doctor.full_name if sa.doctor_id else None,
        'totalCost': format_money(sa.total_cost),
        'discount': format_money(sa.discount),
        'vat': format_money(sa.vat),
        'grandTotal': format_money(sa.grand_total),
        'payingAmount': format_money(sa.paying_amount),
        'balance': format_money(sa.balance),
        'isBooking': sa.is_booking,
        'details': [{
            'id': d.id,
            'serviceTypeId': d.service_type_id,
            'serviceTypeName': d.service_type.name if d.service_type_id else None,
            'cost': format_money(d.cost),
        } for d in sa.details.all()],
    }
    payment = getattr(sa, 'payment', None)
    if payment is not None:
        data['paymentId'] = payment.id
    return data
