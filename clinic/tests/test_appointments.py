from datetime import date, time
from decimal import Decimal

import pytest
from django.db import DatabaseError
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIClient

from clinic.exceptions import PersistenceError
from clinic.models import Appointment, AuditEvent, Payment, ServiceAssignment, ServiceAssignmentDetail, Tax
from clinic.services import appointments as booking
from clinic.services.assignments import create_service_assignment, delete_service_assignment

pytestmark = pytest.mark.django_db


def submit(patient, doctor, service_type_ids, **kwargs):
    params = dict(
        patient_id=patient.id,
        doctor_id=doctor.id,
        schedule_date=date(2026, 3, 2),
        schedule_time=time(9, 30),
        service_type_ids=service_type_ids,
    )
    params.update(kwargs)
    return booking.submit_appointment(**params)


def payload(patient, doctor, service_type_ids, **extra):
    data = {
        'patientId': patient.id,
        'doctorId': doctor.id,
        'scheduleDate': '2026-03-02',
        'scheduleTime': '09:30',
        'serviceTypeIds': service_type_ids,
    }
    data.update(extra)
    return data


def test_submit_writes_appointment_assignment_and_payment(patient, doctor, ecg, vat):
    appt = submit(patient, doctor, [ecg.id], discount=Decimal('20'), paying_amount=Decimal('150'))

    appt.refresh_from_db()
    assert appt.consultation_cost == Decimal('200.00')
    assert appt.discount == Decimal('20.00')
    assert appt.vat == Decimal('23.00')
    assert appt.grand_total == Decimal('253.00')
    assert appt.paying_amount == Decimal('150.00')
    assert appt.balance == Decimal('103.00')

    sa = ServiceAssignment.objects.get(appointment=appt)
    assert sa.doctor_id == doctor.id
    assert sa.total_cost == Decimal('50.00')
    assert sa.vat == appt.vat
    assert sa.grand_total == appt.grand_total
    assert list(sa.details.values_list('service_type_id', 'cost')) == [(ecg.id, Decimal('50.00'))]

    payment = Payment.objects.get()
    assert payment.scope == Payment.SCOPE_APPOINTMENT
    assert payment.total == Decimal('250.00')
    assert payment.vat == appt.vat
    assert payment.grand_total == appt.grand_total
    assert payment.balance == Decimal('103.00')

    assert AuditEvent.objects.filter(action='appointment_submit', object_id=appt.id).exists()


def test_every_active_row_of_the_category_counts(patient, doctor, ecg):
    Tax.objects.create(name='VAT A', category='VAT', ratio=Decimal('5'))
    Tax.objects.create(name='VAT B', category='VAT', ratio=Decimal('3'))
    Tax.objects.create(name='Old VAT', category='VAT', ratio=Decimal('50'), active=False)
    Tax.objects.create(name='Excise', category='Excise', ratio=Decimal('25'))

    appt = submit(patient, doctor, [ecg.id])

    # (200 + 50) * 8%
    assert appt.billing.tax_amount == Decimal('20.00')
    assert appt.billing.grand_total == Decimal('270.00')


def test_no_active_tax_rows_bill_no_tax(patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id])
    assert appt.billing.tax_amount == Decimal('0.00')
    assert appt.billing.grand_total == Decimal('250.00')


def test_non_doctor_is_rejected_and_nothing_is_written(patient, nurse, ecg):
    with pytest.raises(ValidationError) as excinfo:
        submit(patient, nurse, [ecg.id])
    assert 'not a doctor' in str(excinfo.value.detail)
    assert Appointment.objects.count() == 0
    assert Payment.objects.count() == 0


def test_missing_doctor_and_patient_are_rejected(patient, doctor, ecg):
    with pytest.raises(ValidationError, match='doctor not found'):
        booking.submit_appointment(patient_id=patient.id, doctor_id=9999, schedule_date=date(2026, 3, 2),
                                   schedule_time=time(9, 30), service_type_ids=[ecg.id])
    with pytest.raises(ValidationError, match='patient not found'):
        booking.submit_appointment(patient_id=9999, doctor_id=doctor.id, schedule_date=date(2026, 3, 2),
                                   schedule_time=time(9, 30), service_type_ids=[ecg.id])
    assert Appointment.objects.count() == 0


def test_unknown_service_type_ids_are_dropped(patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id, 999])

    sa = ServiceAssignment.objects.get(appointment=appt)
    assert sa.total_cost == Decimal('50.00')
    assert sa.details.count() == 1


def test_unknown_service_type_ids_rejected_in_strict_mode(settings, patient, doctor, ecg):
    settings.CLINIC_BILLING = {**settings.CLINIC_BILLING, 'IGNORE_UNKNOWN_SERVICE_TYPE_IDS': False}
    with pytest.raises(ValidationError, match='unknown service types'):
        submit(patient, doctor, [ecg.id, 999])
    assert Appointment.objects.count() == 0


def test_no_valid_services_is_rejected(patient, doctor):
    with pytest.raises(ValidationError, match='no valid services selected'):
        submit(patient, doctor, [999])
    with pytest.raises(ValidationError, match='no valid services selected'):
        submit(patient, doctor, [])


def test_failure_before_payment_rolls_everything_back(monkeypatch, patient, doctor, ecg, vat):
    def broken_write(scope, billing):
        raise DatabaseError('payments table is locked')

    monkeypatch.setattr('clinic.services.payments.write_payment', broken_write)

    with pytest.raises(PersistenceError) as excinfo:
        submit(patient, doctor, [ecg.id])

    assert 'payments table is locked' in str(excinfo.value.detail)
    assert Appointment.objects.count() == 0
    assert ServiceAssignment.objects.count() == 0
    assert ServiceAssignmentDetail.objects.count() == 0
    assert Payment.objects.count() == 0


def test_doctor_without_specialization_has_no_fee(patient, doctor, ecg):
    doctor.specialization = None
    doctor.save()
    appt = submit(patient, doctor, [ecg.id])
    assert appt.consultation_cost == Decimal('0.00')
    assert appt.billing.subtotal == Decimal('50.00')


def test_update_reprices_over_booked_services(patient, doctor, ecg, vat):
    appt = submit(patient, doctor, [ecg.id], paying_amount=Decimal('100'))

    updated = booking.update_appointment(
        appt,
        patient_id=patient.id,
        doctor_id=doctor.id,
        schedule_date=date(2026, 3, 9),
        schedule_time=time(11, 0),
        consultation_cost=Decimal('150'),
        discount=Decimal('0'),
        paying_amount=Decimal('220'),
    )

    updated.refresh_from_db()
    assert updated.schedule_date == date(2026, 3, 9)
    assert updated.consultation_cost == Decimal('150.00')
    # (150 + 50) * 1.10
    assert updated.grand_total == Decimal('220.00')
    assert updated.balance == Decimal('0.00')
    sa = ServiceAssignment.objects.get(appointment=updated)
    assert sa.grand_total == Decimal('220.00')
    # the booking payment row is not rewritten
    assert Payment.objects.get().grand_total == Decimal('275.00')


def test_booking_assignment_is_marked(patient, doctor, ecg, xray):
    appt = submit(patient, doctor, [ecg.id])
    extra = create_service_assignment(appointment_id=appt.id, service_type_ids=[xray.id])

    assert ServiceAssignment.objects.get(appointment=appt, is_booking=True).total_cost == Decimal('50.00')
    extra.refresh_from_db()
    assert extra.is_booking is False


def test_update_after_booking_assignment_deleted_reprices_consultation_only(patient, doctor, ecg, xray):
    appt = submit(patient, doctor, [ecg.id])
    extra = create_service_assignment(appointment_id=appt.id, service_type_ids=[xray.id],
                                      paying_amount=Decimal('20'))
    delete_service_assignment(ServiceAssignment.objects.get(appointment=appt, is_booking=True))

    updated = booking.update_appointment(
        appt,
        patient_id=patient.id,
        doctor_id=doctor.id,
        schedule_date=date(2026, 3, 2),
        schedule_time=time(9, 30),
    )

    updated.refresh_from_db()
    assert updated.grand_total == Decimal('200.00')
    assert updated.balance == Decimal('200.00')
    extra.refresh_from_db()
    assert extra.total_cost == Decimal('120.00')
    assert extra.grand_total == Decimal('120.00')
    assert extra.balance == Decimal('100.00')
    assert extra.balance == extra.grand_total - extra.paying_amount


def test_catalog_price_change_does_not_touch_booked_costs(patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id])
    ecg.cost = Decimal('999.00')
    ecg.save()

    detail = ServiceAssignmentDetail.objects.get(assignment__appointment=appt)
    assert detail.cost == Decimal('50.00')

    updated = booking.update_appointment(
        appt,
        patient_id=patient.id,
        doctor_id=doctor.id,
        schedule_date=date(2026, 3, 2),
        schedule_time=time(9, 30),
    )
    assert updated.billing.subtotal == Decimal('250.00')
    assert updated.grand_total == Decimal('250.00')


def test_delete_removes_assignments(patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id])
    booking.delete_appointment(appt)
    assert Appointment.objects.count() == 0
    assert ServiceAssignment.objects.count() == 0
    assert ServiceAssignmentDetail.objects.count() == 0


# --- HTTP ---------------------------------------------------------------

def test_submit_endpoint_returns_created_booking(api_client, patient, doctor, ecg, vat):
    r = api_client.post('/api/appointments/submit',
                        payload(patient, doctor, [ecg.id], discount='20', payingAmount='150'), format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert r.data['ok'] is True
    assert data['patientName'] == 'Rania Aziz'
    assert data['doctorName'] == 'Dr. Omar Saleh'
    assert data['grandTotal'] == '253.00'
    assert data['balance'] == '103.00'
    assert data['billing']['taxAmount'] == '23.00'
    assert data['serviceAssignmentId'] == ServiceAssignment.objects.get().id
    assert data['paymentId'] == Payment.objects.get().id


def test_submit_endpoint_validation_error_shape(api_client, patient, nurse, ecg):
    r = api_client.post('/api/appointments/submit', payload(patient, nurse, [ecg.id]), format='json')
    assert r.status_code == 400
    assert r.data == {'ok': False, 'error': {'code': 'api_error', 'message': 'not a doctor'}}


def test_submit_endpoint_rejects_malformed_body(api_client, patient, doctor):
    r = api_client.post('/api/appointments/submit', {'patientId': patient.id}, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert 'doctorId' in r.data['error']['message']


def test_submit_endpoint_rollback_is_a_500(api_client, monkeypatch, patient, doctor, ecg):
    def broken_write(scope, billing):
        raise DatabaseError('disk full')

    monkeypatch.setattr('clinic.services.payments.write_payment', broken_write)
    r = api_client.post('/api/appointments/submit', payload(patient, doctor, [ecg.id]), format='json')

    assert r.status_code == 500
    assert r.data['error']['code'] == 'persistence_error'
    assert 'disk full' in r.data['error']['message']
    assert Appointment.objects.count() == 0


def test_submit_requires_authentication(patient, doctor, ecg):
    r = APIClient().post('/api/appointments/submit', payload(patient, doctor, [ecg.id]), format='json')
    assert r.status_code in (401, 403)
    assert Appointment.objects.count() == 0


def test_list_and_today(api_client, patient, doctor, ecg):
    today = timezone.localdate()
    submit(patient, doctor, [ecg.id], schedule_date=today)
    submit(patient, doctor, [ecg.id], schedule_date=date(2020, 1, 1))

    r = api_client.get('/api/appointments')
    assert r.status_code == 200
    assert len(r.data['data']) == 2

    r = api_client.get('/api/appointments/today')
    assert [a['scheduleDate'] for a in r.data['data']] == [today.isoformat()]

    r = api_client.get('/api/appointments', {'date': '2020-01-01'})
    assert len(r.data['data']) == 1


def test_detail_and_update_endpoints(api_client, patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id])

    r = api_client.get(f'/api/appointments/{appt.id}')
    assert r.status_code == 200
    assert r.data['data']['consultationCost'] == '200.00'

    r = api_client.put(f'/api/appointments/{appt.id}',
                       payload(patient, doctor, [], scheduleTime='14:00', payingAmount='250'), format='json')
    assert r.status_code == 200
    assert r.data['data']['scheduleTime'] == '14:00:00'
    assert r.data['data']['balance'] == '0.00'

    assert api_client.get('/api/appointments/9999').status_code == 404


def test_only_admins_delete_appointments(api_client, admin_client, patient, doctor, ecg):
    appt = submit(patient, doctor, [ecg.id])

    r = api_client.delete(f'/api/appointments/{appt.id}')
    assert r.status_code == 403
    assert Appointment.objects.filter(id=appt.id).exists()

    r = admin_client.delete(f'/api/appointments/{appt.id}')
    assert r.status_code == 204
    assert not Appointment.objects.filter(id=appt.id).exists()


def test_non_admin_delete_of_missing_appointment_is_forbidden(api_client):
    r = api_client.delete('/api/appointments/9999')
    assert r.status_code == 403
    assert r.data['error']['message'] == 'only administrators can delete records'
