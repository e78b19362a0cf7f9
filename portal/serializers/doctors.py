from rest_framework import serializers


class DoctorProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    specialization = serializers.CharField(max_length=128, required=False)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    bio = serializers.CharField(max_length=4000, required=False, allow_blank=True)
    yearsExperience = serializers.IntegerField(min_value=0, max_value=80, required=False)
    consultationFee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    slots = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    languages = serializers.ListField(child=serializers.CharField(max_length=32), required=False)
    education = serializers.CharField(max_length=4000, required=False, allow_blank=True)
    certifications = serializers.ListField(child=serializers.CharField(max_length=128), required=False)
    imageUrl = serializers.URLField(required=False, allow_blank=True)

    FIELD_MAP = {
        'name': 'name', 'specialization': 'specialization', 'hospitalName': 'hospital_name', 'bio': 'bio',
        'yearsExperience': 'years_experience', 'consultationFee': 'consultation_fee', 'slots': 'slots',
        'phone': 'phone', 'languages': 'languages', 'education': 'education',
        'certifications': 'certifications', 'imageUrl': 'image_url',
    }

    def model_changes(self) -> dict:
        return {self.FIELD_MAP[k]: v for k, v in self.validated_data.items() if k in self.FIELD_MAP}

class DoctorVerifySerializer(serializers.Serializer):
    verified = serializers.BooleanField()
