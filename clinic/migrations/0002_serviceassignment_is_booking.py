from django.db import migrations, models


def mark_booking_assignments(apps, schema_editor):
    ServiceAssignment = apps.get_model('clinic', 'ServiceAssignment')
    Appointment = apps.get_model('clinic', 'Appointment')
    for appointment_id in Appointment.objects.values_list('id', flat=True):
        first = ServiceAssignment.objects.filter(appointment_id=appointment_id).order_by('id').first()
        if first is not None and first.paying_amount == 0 and first.balance == 0:
            ServiceAssignment.objects.filter(id=first.id).update(is_booking=True)


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='serviceassignment',
            name='is_booking',
            field=models.BooleanField(default=False),
        ),
        migrations.RunPython(mark_booking_assignments, migrations.RunPython.noop),
    ]
