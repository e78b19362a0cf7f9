from rest_framework import serializers


class RecordUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    recordType = serializers.CharField(max_length=64, required=False, allow_blank=True)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    consultationId = serializers.IntegerField(min_value=1, required=False)

class PassportSubmitSerializer(serializers.Serializer):
    passportImage = serializers.FileField()
    selfieImage = serializers.FileField()
    passportNumber = serializers.CharField(max_length=32)
    passportCountry = serializers.CharField(max_length=64)
    passportExpiry = serializers.DateField()

class PassportReviewSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['approved', 'rejected'])
    note = serializers.CharField(max_length=255, required=False, allow_blank=True)

class PassportListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['pending', 'approved', 'rejected'], required=False)
