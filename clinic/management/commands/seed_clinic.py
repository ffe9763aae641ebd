"""
Management command to seed a clinic with demo catalog data.

Idempotent: rows are matched by name and only created when missing, so the
command can be re-run against a database that is already in use.
"""
from decimal import Decimal

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction

from clinic.models import Patient, Service, ServiceType, Specialization, Staff, StaffType, Tax, User

SPECIALIZATIONS = [
    ('General Practice', Decimal('150.00')),
    ('Cardiology', Decimal('300.00')),
    ('Dermatology', Decimal('200.00')),
]

SERVICES = {
    'Laboratory': [('Complete Blood Count', Decimal('45.00')), ('Lipid Panel', Decimal('60.00'))],
    'Radiology': [('Chest X-Ray', Decimal('120.00')), ('Abdominal Ultrasound', Decimal('180.00'))],
    'Cardiology Tests': [('ECG', Decimal('75.00'))],
}

USERS = [
    ('admin1', 'admin'),
    ('desk1', 'receptionist'),
]


class Command(BaseCommand):
    help = "Seed specializations, staff, the service catalog, taxes and demo users (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--password', default='123456', help='password set on the demo users')
        parser.add_argument('--vat', default='10', help='ratio of the default VAT row, in percent')

    @transaction.atomic
    def handle(self, *args, **opts):
        specializations = self.create_specializations()
        self.create_staff(specializations)
        self.create_catalog()
        self.create_taxes(Decimal(opts['vat']))
        self.create_patients()
        self.create_users(opts['password'])
        self.stdout.write(self.style.SUCCESS('Clinic data ensured.'))

    def create_specializations(self):
        result = {}
        for name, cost in SPECIALIZATIONS:
            spec, _ = Specialization.objects.get_or_create(name=name, defaults={'consultation_cost': cost})
            result[name] = spec
        self.stdout.write(f"specializations: {len(result)}")
        return result

    def create_staff(self, specializations):
        doctor_type, _ = StaffType.objects.get_or_create(name='Doctor', defaults={'is_doctor': True})
        nurse_type, _ = StaffType.objects.get_or_create(name='Nurse', defaults={'is_doctor': False})
        reception_type, _ = StaffType.objects.get_or_create(name='Receptionist', defaults={'is_doctor': False})
        rows = [
            ('Dr. Amal Haddad', doctor_type, specializations['General Practice']),
            ('Dr. Omar Saleh', doctor_type, specializations['Cardiology']),
            ('Dr. Lina Farah', doctor_type, specializations['Dermatology']),
            ('Maya Nasser', nurse_type, None),
            ('Sami Khoury', reception_type, None),
        ]
        for full_name, staff_type, spec in rows:
            Staff.objects.get_or_create(
                full_name=full_name,
                defaults={'staff_type': staff_type, 'specialization': spec},
            )
        self.stdout.write(f"staff: {Staff.objects.count()}")

    def create_catalog(self):
        for service_name, types in SERVICES.items():
            service, _ = Service.objects.get_or_create(name=service_name)
            for type_name, cost in types:
                ServiceType.objects.get_or_create(service=service, name=type_name, defaults={'cost': cost})
        self.stdout.write(f"service types: {ServiceType.objects.count()}")

    def create_taxes(self, vat: Decimal):
        Tax.objects.get_or_create(
            name='VAT',
            category='VAT',
            defaults={'ratio': vat, 'is_default': True, 'active': True},
        )
        self.stdout.write(f"taxes: {Tax.objects.count()}")

    def create_patients(self):
        rows = [
            ('Rania Aziz', '0500000001', 'Female'),
            ('Karim Mansour', '0500000002', 'Male'),
        ]
        for full_name, phone, gender in rows:
            Patient.objects.get_or_create(full_name=full_name, defaults={'phone_number': phone, 'gender': gender})
        self.stdout.write(f"patients: {Patient.objects.count()}")

    def create_users(self, password: str):
        for username, role in USERS:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={'role': role, 'password': make_password(password), 'is_active': True},
            )
            if not created:
                u.password = make_password(password)
                u.role = role
                u.is_active = True
                u.save(update_fields=['password', 'role', 'is_active'])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
