from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from clinic.models import Patient, Service, ServiceType, Specialization, Staff, StaffType, Tax, User


@pytest.fixture
def specialization(db):
    return Specialization.objects.create(name='Cardiology', consultation_cost=Decimal('200.00'))


@pytest.fixture
def doctor(specialization):
    doctor_type = StaffType.objects.create(name='Doctor', is_doctor=True)
    return Staff.objects.create(full_name='Dr. Omar Saleh', staff_type=doctor_type, specialization=specialization)


@pytest.fixture
def nurse(db):
    nurse_type = StaffType.objects.create(name='Nurse', is_doctor=False)
    return Staff.objects.create(full_name='Maya Nasser', staff_type=nurse_type)


@pytest.fixture
def patient(db):
    return Patient.objects.create(full_name='Rania Aziz', phone_number='0500000001', gender='Female')


@pytest.fixture
def ecg(db):
    service = Service.objects.create(name='Cardiology Tests')
    return ServiceType.objects.create(service=service, name='ECG', cost=Decimal('50.00'))


@pytest.fixture
def xray(db):
    service = Service.objects.create(name='Radiology')
    return ServiceType.objects.create(service=service, name='Chest X-Ray', cost=Decimal('120.00'))


@pytest.fixture
def vat(db):
    return Tax.objects.create(name='VAT', category='VAT', ratio=Decimal('10'), is_default=True, active=True)


@pytest.fixture
def receptionist(db):
    return User.objects.create_user(username='desk1', password='P@ssw0rd1', role='receptionist')


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='P@ssw0rd1', role='admin')


@pytest.fixture
def api_client(receptionist):
    c = APIClient()
    c.force_authenticate(user=receptionist)
    return c


@pytest.fixture
def admin_client(admin_user):
    c = APIClient()
    c.force_authenticate(user=admin_user)
    return c
