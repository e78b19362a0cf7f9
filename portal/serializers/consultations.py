from rest_framework import serializers

CONSULTATION_STATUSES = ['pending', 'confirmed', 'completed', 'cancelled']


class ConsultationCreateSerializer(serializers.Serializer):
    doctorId = serializers.IntegerField(min_value=1)
    treatmentId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    consultationDate = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(max_length=4000, required=False, allow_blank=True)
    medicalCondition = serializers.CharField(max_length=255, required=False, allow_blank=True)

class ConsultationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CONSULTATION_STATUSES)

class ConsultationReportSerializer(serializers.Serializer):
    file = serializers.FileField()
    notes = serializers.CharField(max_length=4000, required=False, allow_blank=True)
