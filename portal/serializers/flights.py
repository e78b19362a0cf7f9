from rest_framework import serializers

FLIGHT_CLASSES = ['economy', 'premium_economy', 'business', 'first']


class FlightSearchSerializer(serializers.Serializer):
    from_ = serializers.CharField(max_length=100)
    to = serializers.CharField(max_length=100)
    departureDate = serializers.DateField()
    passengers = serializers.IntegerField(min_value=1, max_value=9, required=False, default=1)
    flightClass = serializers.ChoiceField(choices=FLIGHT_CLASSES, required=False, default='economy')

    def get_fields(self):
        # "from" is a keyword, so the field is declared as from_
        fields = super().get_fields()
        fields['from'] = fields.pop('from_')
        return fields

class SeatMapQuerySerializer(serializers.Serializer):
    flightId = serializers.CharField(max_length=64)

class PassengerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=128)
    age = serializers.IntegerField(min_value=0, max_value=120)
    gender = serializers.ChoiceField(choices=['male', 'female', 'other'])
    passportNumber = serializers.CharField(max_length=32, required=False, allow_blank=True)
    nationality = serializers.CharField(max_length=64, required=False, allow_blank=True)

class FlightSelectionSerializer(serializers.Serializer):
    flightId = serializers.CharField(max_length=64)
    flightClass = serializers.ChoiceField(choices=FLIGHT_CLASSES, required=False, default='economy')
    seats = serializers.ListField(child=serializers.CharField(max_length=8), required=False, default=list)
    meals = serializers.ListField(child=serializers.CharField(max_length=32), required=False, default=list)
    services = serializers.ListField(child=serializers.CharField(max_length=32), required=False, default=list)

class FlightQuoteSerializer(FlightSelectionSerializer):
    passengers = serializers.IntegerField(min_value=1, max_value=9)

class FlightBookSerializer(FlightSelectionSerializer):
    passengers = PassengerSerializer(many=True, allow_empty=False)
    returnDate = serializers.DateField(required=False, allow_null=True)
