"""
Database models for the clinic backend.

These models capture the concepts the billing workflow reads and writes:
patients, staff and their specializations, the service catalog, tax
definitions, appointments, service assignments and payments.  Money is
stored as ``decimal(18,2)`` and tax ratios as ``decimal(18,4)``.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.db import models

MONEY = {'max_digits': 18, 'decimal_places': 2, 'default': Decimal('0.00')}


class User(AbstractUser):
    """API user with a role used for permission checks.

    A user may be linked to the staff member they act as; receptionists
    and administrators usually are, service accounts are not.
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('doctor', 'Doctor'),
        ('receptionist', 'Receptionist'),
    ]
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='receptionist')
    staff = models.ForeignKey(
        'Staff', null=True, blank=True, on_delete=models.SET_NULL, related_name='users'
    )

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    full_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=16)
    blood_type = models.CharField(max_length=8, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.full_name


class Specialization(models.Model):
    """A medical specialization; carries the consultation fee billed per visit."""
    name = models.CharField(max_length=255)
    consultation_cost = models.DecimalField(**MONEY)
    description = models.TextField(blank=True)

    def __str__(self) -> str:
        return self.name


class StaffType(models.Model):
    name = models.CharField(max_length=100)
    is_doctor = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.name


class Staff(models.Model):
    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Inactive', 'Inactive'),
    ]
    full_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='Active')
    staff_type = models.ForeignKey(StaffType, on_delete=models.PROTECT, related_name='staff')
    specialization = models.ForeignKey(
        Specialization, null=True, blank=True, on_delete=models.SET_NULL, related_name='staff'
    )

    class Meta:
        verbose_name_plural = 'staff'

    @property
    def is_doctor(self) -> bool:
        return bool(self.staff_type_id and self.staff_type.is_doctor)

    def __str__(self) -> str:
        return self.full_name


class Service(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    def __str__(self) -> str:
        return self.name


class ServiceType(models.Model):
    """A billable item of the service catalog (e.g. an X-ray under Radiology)."""
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name='service_types')
    name = models.CharField(max_length=255)
    cost = models.DecimalField(**MONEY)
    description = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.cost})"


class Tax(models.Model):
    """A named tax definition.

    ``ratio`` holds the percentage (5 means 5%).  Every active row of the
    billed category contributes to the rate, so two active VAT rows of 5 and
    3 bill 8%.
    """
    TYPE_CHOICES = [
        ('Percentage', 'Percentage'),
        ('Symbol', 'Symbol'),
    ]
    name = models.CharField(max_length=100)
    category = models.CharField(max_length=100, db_index=True)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default='Percentage')
    is_default = models.BooleanField(default=False)
    is_registered_authority = models.BooleanField(default=False)
    registration_number = models.CharField(max_length=100, blank=True)
    registration_date = models.DateField(null=True, blank=True)
    ratio = models.DecimalField(max_digits=18, decimal_places=4, default=Decimal('0'))
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        verbose_name_plural = 'taxes'

    def __str__(self) -> str:
        return f"{self.name} {self.ratio}% ({'active' if self.active else 'inactive'})"


class Appointment(models.Model):
    """A booked visit and the consultation side of its bill."""
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    doctor = models.ForeignKey(Staff, on_delete=models.PROTECT, related_name='appointments')
    schedule_date = models.DateField(db_index=True)
    schedule_time = models.TimeField()
    consultation_cost = models.DecimalField(**MONEY)
    discount = models.DecimalField(**MONEY)
    vat = models.DecimalField(**MONEY)
    grand_total = models.DecimalField(**MONEY)
    paying_amount = models.DecimalField(**MONEY)
    balance = models.DecimalField(**MONEY)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'balance'], name='clinic_appt_patient_bal_idx'),
        ]

    def __str__(self) -> str:
        return f"Appointment #{self.pk} p={self.patient_id} d={self.doctor_id} {self.schedule_date}"


class ServiceAssignment(models.Model):
    """A bundle of services billed against one appointment."""
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name='service_assignments')
    doctor = models.ForeignKey(Staff, on_delete=models.PROTECT, related_name='service_assignments')
    total_cost = models.DecimalField(**MONEY)
    discount = models.DecimalField(**MONEY)
    vat = models.DecimalField(**MONEY)
    grand_total = models.DecimalField(**MONEY)
    paying_amount = models.DecimalField(**MONEY)
    balance = models.DecimalField(**MONEY)
    # written together with the appointment; its services are part of the appointment bill
    is_booking = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"ServiceAssignment #{self.pk} for appointment {self.appointment_id}"


class ServiceAssignmentDetail(models.Model):
    """One service line; ``cost`` is the catalog price at assignment time."""
    assignment = models.ForeignKey(ServiceAssignment, on_delete=models.CASCADE, related_name='details')
    service_type = models.ForeignKey(ServiceType, on_delete=models.PROTECT, related_name='assignment_details')
    cost = models.DecimalField(**MONEY)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.service_type_id} @ {self.cost}"


class Payment(models.Model):
    """A free-standing ledger row; not linked to the record that produced it."""
    SCOPE_APPOINTMENT = 'Appointment'
    SCOPE_SERVICE = 'Service'
    SCOPE_ALL = 'All'
    SCOPE_CHOICES = (
        (SCOPE_APPOINTMENT, 'Appointment'),
        (SCOPE_SERVICE, 'Service'),
        (SCOPE_ALL, 'All'),
    )
    scope = models.CharField(max_length=16, choices=SCOPE_CHOICES, default=SCOPE_ALL)
    total = models.DecimalField(**MONEY)
    discount = models.DecimalField(**MONEY)
    vat = models.DecimalField(**MONEY)
    grand_total = models.DecimalField(**MONEY)
    paying_amount = models.DecimalField(**MONEY)
    balance = models.DecimalField(**MONEY)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['balance'], name='clinic_payment_balance_idx'),
        ]

    def __str__(self) -> str:
        return f"Payment #{self.pk} {self.scope} total={self.grand_total} balance={self.balance}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]
