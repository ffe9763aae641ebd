from datetime import date, time
from decimal import Decimal

import pytest
from django.db import DatabaseError
from rest_framework.exceptions import ValidationError

from clinic.exceptions import PersistenceError
from clinic.models import Payment, ServiceAssignment, ServiceAssignmentDetail
from clinic.services import assignments
from clinic.services.appointments import submit_appointment

pytestmark = pytest.mark.django_db


@pytest.fixture
def appointment(patient, doctor, ecg):
    return submit_appointment(patient_id=patient.id, doctor_id=doctor.id, schedule_date=date(2026, 3, 2),
                              schedule_time=time(9, 30), service_type_ids=[ecg.id])


def test_services_are_billed_without_consultation_fee(appointment, ecg, xray, vat):
    sa = assignments.create_service_assignment(
        appointment_id=appointment.id,
        service_type_ids=[ecg.id, xray.id],
        discount=Decimal('10'),
        paying_amount=Decimal('100'),
    )

    sa.refresh_from_db()
    assert sa.doctor_id == appointment.doctor_id
    assert sa.total_cost == Decimal('170.00')
    # (170 - 10) * 10%
    assert sa.vat == Decimal('16.00')
    assert sa.grand_total == Decimal('176.00')
    assert sa.balance == Decimal('76.00')
    assert sa.details.count() == 2

    payment = Payment.objects.filter(scope=Payment.SCOPE_SERVICE).get()
    assert payment.total == Decimal('170.00')
    assert payment.grand_total == sa.grand_total


def test_missing_appointment_is_rejected(ecg):
    with pytest.raises(ValidationError, match='appointment not found'):
        assignments.create_service_assignment(appointment_id=9999, service_type_ids=[ecg.id])


def test_assignment_rolls_back_when_payment_fails(monkeypatch, appointment, xray):
    def broken_write(scope, billing):
        raise DatabaseError('boom')

    monkeypatch.setattr('clinic.services.payments.write_payment', broken_write)
    before = ServiceAssignment.objects.count()

    with pytest.raises(PersistenceError, match='Error creating service assignment'):
        assignments.create_service_assignment(appointment_id=appointment.id, service_type_ids=[xray.id])

    assert ServiceAssignment.objects.count() == before
    assert not ServiceAssignmentDetail.objects.filter(service_type=xray).exists()


def test_create_list_and_delete_over_http(api_client, admin_client, appointment, xray):
    r = api_client.post('/api/service-assignments',
                        {'appointmentId': appointment.id, 'serviceTypeIds': [xray.id, 999], 'payingAmount': '20'},
                        format='json')
    assert r.status_code == 201
    assert r.data['message'] == 'Service assignment created successfully'
    assert r.data['data']['totalCost'] == '120.00'
    assert r.data['data']['balance'] == '100.00'
    assignment_id = r.data['assignmentId']

    r = api_client.get(f'/api/service-assignments/by-appointment/{appointment.id}')
    assert r.status_code == 200
    # the booking assignment comes first
    assert [a['id'] for a in r.data['data']][-1] == assignment_id
    assert r.data['data'][-1]['details'][0]['serviceTypeName'] == 'Chest X-Ray'

    assert api_client.delete(f'/api/service-assignments/{assignment_id}').status_code == 403
    assert admin_client.delete(f'/api/service-assignments/{assignment_id}').status_code == 204
    assert not ServiceAssignment.objects.filter(id=assignment_id).exists()
