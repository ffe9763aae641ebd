"""
Front-desk overview figures.

Revenue is what was actually taken at the desk: the sum of
``Payment.paying_amount`` over every payment row.
"""
from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Optional

from django.db.models import Avg, Count, Sum
from django.utils import timezone

from clinic.models import Appointment, Patient, Payment, Staff
from clinic.services.billing import format_money

RECENT_APPOINTMENTS = 5
OVERVIEW_DAYS = 10


def revenue_totals() -> dict:
    agg = Payment.objects.aggregate(total=Sum('paying_amount'), average=Avg('paying_amount'), count=Count('id'))
    return {
        'totalRevenue': format_money(agg['total'] or Decimal('0')),
        'averageRevenue': format_money(agg['average'] or Decimal('0')),
        'paymentCount': agg['count'],
    }


def recent_appointments(limit: int = RECENT_APPOINTMENTS) -> list[dict]:
    qs = (Appointment.objects.select_related('patient', 'doctor')
          .order_by('-schedule_date', '-schedule_time', '-id')[:limit])
    return [{
        'id': a.id,
        'patientName': a.patient.full_name,
        'doctorName': a.doctor.full_name,
        'scheduleDate': a.schedule_date.isoformat(),
        'scheduleTime': a.schedule_time.strftime('%H:%M:%S'),
    } for a in qs]


def appointments_overview(today: datetime.date, days: int = OVERVIEW_DAYS) -> list[dict]:
    """Appointment count per day for the last ``days`` days, oldest first; empty days count 0."""
    start = today - datetime.timedelta(days=days - 1)
    counts = dict(
        Appointment.objects.filter(schedule_date__gte=start, schedule_date__lte=today)
        .values_list('schedule_date')
        .annotate(n=Count('id'))
    )
    overview = []
    for offset in range(days):
        day = start + datetime.timedelta(days=offset)
        overview.append({'date': day.isoformat(), 'label': day.strftime('%d %b'), 'count': counts.get(day, 0)})
    return overview


def dashboard_stats(today: Optional[datetime.date] = None) -> dict:
    today = today or timezone.localdate()
    return {
        'totalPatients': Patient.objects.count(),
        'totalDoctors': Staff.objects.filter(staff_type__is_doctor=True).count(),
        'totalAppointments': Appointment.objects.count(),
        'appointmentsToday': Appointment.objects.filter(schedule_date=today).count(),
        **revenue_totals(),
        'recentAppointments': recent_appointments(),
        'appointmentsOverview': appointments_overview(today),
    }
