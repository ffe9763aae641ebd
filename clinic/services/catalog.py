"""
Lookups into the staff directory and the service catalog.

The billing writers only read from these tables.  Lookups return model
instances (or ``None``) and leave the decision about what is an error to
the caller, except :func:`resolve_service_types` which applies the
unknown-id policy configured in ``settings.CLINIC_BILLING``.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.conf import settings
from rest_framework.exceptions import ValidationError

from clinic.models import Patient, Staff, ServiceType

logger = logging.getLogger(__name__)


def find_patient(patient_id: int) -> Optional[Patient]:
    return Patient.objects.filter(id=patient_id).first()


def find_staff(staff_id: int) -> Optional[Staff]:
    return Staff.objects.select_related('staff_type', 'specialization').filter(id=staff_id).first()


def resolve_doctor(doctor_id: int) -> Staff:
    doctor = find_staff(doctor_id)
    if doctor is None:
        logger.warning(f"rejected booking: staff {doctor_id} does not exist")
        raise ValidationError('doctor not found')
    if not doctor.is_doctor:
        logger.warning(f"rejected booking: staff {doctor_id} is not a doctor")
        raise ValidationError('not a doctor')
    return doctor


def consultation_fee(doctor: Staff) -> Decimal:
    """Fee of the doctor's specialization, 0 when the doctor has none."""
    if doctor.specialization_id is None:
        return Decimal('0.00')
    return doctor.specialization.consultation_cost


def ignore_unknown_service_type_ids() -> bool:
    return bool(settings.CLINIC_BILLING.get('IGNORE_UNKNOWN_SERVICE_TYPE_IDS', True))


def resolve_service_types(ids: Iterable[int], *, ignore_unknown: Optional[bool] = None) -> list[ServiceType]:
    """Load the requested service types in request order.

    With ``ignore_unknown`` (the configured default) ids missing from the
    catalog are dropped and the rest are billed; otherwise any missing id
    rejects the whole request.  An empty result is always rejected.
    """
    if ignore_unknown is None:
        ignore_unknown = ignore_unknown_service_type_ids()
    requested = list(dict.fromkeys(int(i) for i in ids))
    found = {st.id: st for st in ServiceType.objects.filter(id__in=requested)}
    missing = [i for i in requested if i not in found]
    if missing:
        if not ignore_unknown:
            raise ValidationError(f'unknown service types: {missing}')
        logger.info(f"dropping unknown service type ids {missing}")
    service_types = [found[i] for i in requested if i in found]
    if not service_types:
        raise ValidationError('no valid services selected')
    return service_types
