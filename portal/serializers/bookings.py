from rest_framework import serializers

BOOKING_STATUSES = ['pending', 'confirmed', 'cancelled', 'completed']


class BookingCreateSerializer(serializers.Serializer):
    tourPackageId = serializers.IntegerField(min_value=1, required=False)
    consultationId = serializers.IntegerField(min_value=1, required=False)
    stayId = serializers.IntegerField(min_value=1, required=False)
    nights = serializers.IntegerField(min_value=1, required=False)
    paymentMethod = serializers.ChoiceField(choices=['stripe', 'razorpay', 'crypto'])
    passportNumber = serializers.CharField(max_length=32, required=False, allow_blank=True)
    passportExpiry = serializers.DateField(required=False, allow_null=True)
    passportCountry = serializers.CharField(max_length=64, required=False, allow_blank=True)
    pickupAddress = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    dropAddress = serializers.CharField(max_length=1000, required=False, allow_blank=True)

    def validate(self, attrs):
        chosen = [k for k in ('tourPackageId', 'consultationId', 'stayId') if attrs.get(k)]
        if len(chosen) != 1:
            raise serializers.ValidationError('Choose exactly one of tourPackageId, consultationId or stayId')
        if attrs.get('stayId') and not attrs.get('nights'):
            raise serializers.ValidationError({'nights': 'Required when booking a stay'})
        return attrs

class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BOOKING_STATUSES)
