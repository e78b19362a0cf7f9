from rest_framework import serializers


class BookingRefSerializer(serializers.Serializer):
    bookingId = serializers.IntegerField(min_value=1)

class StripeConfirmSerializer(BookingRefSerializer):
    paymentIntentId = serializers.CharField(max_length=128)

class RazorpayVerifySerializer(BookingRefSerializer):
    razorpay_order_id = serializers.CharField(max_length=128)
    razorpay_payment_id = serializers.CharField(max_length=128)
    razorpay_signature = serializers.CharField(max_length=256)

class CryptoCreateSerializer(BookingRefSerializer):
    cryptoCurrency = serializers.CharField(max_length=8, required=False, default='USDT')
