"""
Django admin registrations.

The staff directory, service catalog and tax table are maintained here;
billing rows are exposed read-mostly for inspection.
"""

from django.contrib import admin

from .models import (
    User,
    Patient,
    Specialization,
    StaffType,
    Staff,
    Service,
    ServiceType,
    Tax,
    Appointment,
    ServiceAssignment,
    ServiceAssignmentDetail,
    Payment,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'staff', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'last_name')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'phone_number', 'gender', 'created_at')
    search_fields = ('full_name', 'phone_number', 'email')


@admin.register(Specialization)
class SpecializationAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'consultation_cost')
    search_fields = ('name',)


@admin.register(StaffType)
class StaffTypeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'is_doctor')


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'staff_type', 'specialization', 'status')
    list_filter = ('staff_type', 'status')
    search_fields = ('full_name', 'phone_number', 'email')


class ServiceTypeInline(admin.TabularInline):
    model = ServiceType
    extra = 0


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ('id', 'name')
    search_fields = ('name',)
    inlines = [ServiceTypeInline]


@admin.register(ServiceType)
class ServiceTypeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'service', 'cost')
    list_filter = ('service',)
    search_fields = ('name', 'service__name')


@admin.register(Tax)
class TaxAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'category', 'type', 'ratio', 'active', 'is_default')
    list_filter = ('category', 'active')
    search_fields = ('name', 'registration_number')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'schedule_date', 'schedule_time', 'grand_total', 'balance')
    list_filter = ('schedule_date', 'doctor')
    search_fields = ('id', 'patient__full_name', 'doctor__full_name')


class ServiceAssignmentDetailInline(admin.TabularInline):
    model = ServiceAssignmentDetail
    extra = 0


@admin.register(ServiceAssignment)
class ServiceAssignmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'appointment', 'doctor', 'is_booking', 'total_cost', 'grand_total', 'balance')
    search_fields = ('id', 'appointment__id')
    inlines = [ServiceAssignmentDetailInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'scope', 'total', 'vat', 'grand_total', 'paying_amount', 'balance', 'created_at')
    list_filter = ('scope',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'user__username')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
