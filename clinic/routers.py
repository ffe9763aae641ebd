"""
URL mappings for the clinic billing API.

Paths carry no trailing slash.
"""
from django.urls import path, include

from .auth_views import login_view, logout_view
from .views import appointments, dashboard, health, payments, service_assignments, taxes


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/login', login_view, name='login'),
    path('api/auth/logout', logout_view, name='logout'),
    # Appointments
    path('api/appointments', appointments.list_appointments, name='appointment-list'),
    path('api/appointments/submit', appointments.submit_appointment, name='appointment-submit'),
    path('api/appointments/today', appointments.today_appointments, name='appointment-today'),
    path('api/appointments/<int:pk>', appointments.appointment_detail, name='appointment-detail'),
    # Services billed on an appointment
    path('api/service-assignments', service_assignments.create_service_assignment, name='service-assignment-create'),
    path('api/service-assignments/by-appointment/<int:appointment_id>',
         service_assignments.assignments_by_appointment, name='service-assignment-by-appointment'),
    path('api/service-assignments/<int:pk>', service_assignments.delete_service_assignment,
         name='service-assignment-delete'),
    # Payments and dues
    path('api/payments', payments.payments_list, name='payment-list'),
    path('api/payments/dues', payments.payment_dues, name='payment-dues'),
    path('api/payments/<int:pk>', payments.payment_detail, name='payment-detail'),
    path('api/patients/<int:pk>/dues', payments.patient_dues, name='patient-dues'),
    # Dashboard
    path('api/dashboard/stats', dashboard.stats, name='dashboard-stats'),
    # Taxes
    path('api/taxes', taxes.taxes_list, name='tax-list'),
    path('api/taxes/default', taxes.tax_default, name='tax-default'),
    path('api/taxes/<int:pk>', taxes.tax_detail, name='tax-detail'),
]
