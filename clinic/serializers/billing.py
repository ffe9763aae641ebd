import bleach
from rest_framework import serializers

from clinic.models import Payment, Tax

MONEY = {'max_digits': 18, 'decimal_places': 2, 'min_value': 0}


class AppointmentSubmitSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    scheduleDate = serializers.DateField()
    scheduleTime = serializers.TimeField()
    serviceTypeIds = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)
    discount = serializers.DecimalField(required=False, default=0, **MONEY)
    payingAmount = serializers.DecimalField(required=False, default=0, **MONEY)
    taxCategory = serializers.CharField(required=False, allow_blank=True, max_length=100)


class AppointmentUpdateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    scheduleDate = serializers.DateField()
    scheduleTime = serializers.TimeField()
    consultationCost = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    discount = serializers.DecimalField(required=False, default=0, **MONEY)
    payingAmount = serializers.DecimalField(required=False, default=0, **MONEY)
    taxCategory = serializers.CharField(required=False, allow_blank=True, max_length=100)


class AppointmentListQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class ServiceAssignmentCreateSerializer(serializers.Serializer):
    appointmentId = serializers.IntegerField(min_value=1)
    serviceTypeIds = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)
    discount = serializers.DecimalField(required=False, default=0, **MONEY)
    payingAmount = serializers.DecimalField(required=False, default=0, **MONEY)
    taxCategory = serializers.CharField(required=False, allow_blank=True, max_length=100)


class PaymentSerializer(serializers.Serializer):
    paymentScope = serializers.ChoiceField(choices=[c[0] for c in Payment.SCOPE_CHOICES], default=Payment.SCOPE_ALL)
    total = serializers.DecimalField(**MONEY)
    discount = serializers.DecimalField(required=False, default=0, **MONEY)
    payingAmount = serializers.DecimalField(required=False, default=0, **MONEY)
    taxCategory = serializers.CharField(required=False, allow_blank=True, max_length=100)


class TaxSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    category = serializers.CharField(max_length=100)
    type = serializers.ChoiceField(choices=[c[0] for c in Tax.TYPE_CHOICES], default='Percentage')
    isDefault = serializers.BooleanField(required=False, default=False)
    isRegisteredAuthority = serializers.BooleanField(required=False, default=False)
    registrationNumber = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    registrationDate = serializers.DateField(required=False, allow_null=True, default=None)
    ratio = serializers.DecimalField(max_digits=18, decimal_places=4, min_value=0)
    active = serializers.BooleanField(required=False, default=True)

    def validate_name(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('name is required')
        return v

    def validate_category(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('category is required')
        return v

    def validate_registrationNumber(self, v):
        return bleach.clean((v or '').strip(), strip=True)
