from rest_framework import serializers


class TreatmentQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False)
    category = serializers.CharField(max_length=100, required=False)
    city = serializers.CharField(max_length=100, required=False)
    featured = serializers.BooleanField(required=False, allow_null=True, default=None)

class StayQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False)
    city = serializers.CharField(max_length=100, required=False)
    priceRange = serializers.ChoiceField(choices=['budget', 'mid', 'luxury'], required=False)

class TourPackageQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False)
    city = serializers.CharField(max_length=100, required=False)
    category = serializers.CharField(max_length=100, required=False)

class DoctorQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False)
    specialization = serializers.CharField(max_length=128, required=False)
    hospitalId = serializers.IntegerField(min_value=1, required=False)
    verified = serializers.BooleanField(required=False, allow_null=True, default=True)

class HospitalSearchSerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100)
    radius = serializers.IntegerField(min_value=1, required=False)
    specialization = serializers.CharField(max_length=128, required=False)
    q = serializers.CharField(max_length=64, required=False)

class ReviewSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=2000, required=False, allow_blank=True)

class CommunicationRequestSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000)

class CountryQuerySerializer(serializers.Serializer):
    action = serializers.CharField(max_length=32)
    country = serializers.CharField(max_length=8, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
