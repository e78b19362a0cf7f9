"""
Payment endpoints.

Provider failures surface as ``PaymentProviderError`` and map to 502.
All write endpoints share the ``payment`` throttle scope.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..exceptions import PaymentProviderError
from ..models import Booking
from ..permissions import IsAdminRole
from ..serializers.payments import (
    BookingRefSerializer,
    StripeConfirmSerializer,
    RazorpayVerifySerializer,
    CryptoCreateSerializer,
)
from ..services import payments
from ..services.bookings import booking_to_dict


def _payment_call(fn, *args, **kwargs):
    """Run a payment service call, returning (result, error_response)."""
    try:
        return fn(*args, **kwargs), None
    except PermissionError as e:
        return None, Response({'ok': False, 'detail': str(e)}, status=403)
    except PaymentProviderError as e:
        return None, Response({'ok': False, 'detail': str(e), 'provider': e.provider}, status=502)
    except ValueError as e:
        return None, Response({'ok': False, 'detail': str(e)}, status=400)


def _booking_or_404(booking_id: int):
    try:
        return Booking.objects.get(id=booking_id), None
    except Booking.DoesNotExist:
        return None, Response({'ok': False, 'detail': 'Booking not found'}, status=404)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def stripe_create_intent(request):
    s = BookingRefSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking, err = _booking_or_404(s.validated_data['bookingId'])
    if err:
        return err
    data, err = _payment_call(payments.create_stripe_intent, request.user, booking)
    if err:
        return err
    return Response({'ok': True, **data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def stripe_confirm(request):
    s = StripeConfirmSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking, err = _booking_or_404(s.validated_data['bookingId'])
    if err:
        return err
    booking, err = _payment_call(payments.confirm_stripe_payment, request.user, booking,
                                 s.validated_data['paymentIntentId'])
    if err:
        return err
    return Response({'ok': True, 'data': booking_to_dict(booking)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def razorpay_create_order(request):
    s = BookingRefSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking, err = _booking_or_404(s.validated_data['bookingId'])
    if err:
        return err
    order, err = _payment_call(payments.create_razorpay_order, request.user, booking)
    if err:
        return err
    return Response({'ok': True, **payments.as_dict(order)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def razorpay_verify(request):
    s = RazorpayVerifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    booking, err = _booking_or_404(v['bookingId'])
    if err:
        return err
    booking, err = _payment_call(payments.verify_razorpay_payment, request.user, booking,
                                 order_id=v['razorpay_order_id'], payment_id=v['razorpay_payment_id'],
                                 signature=v['razorpay_signature'])
    if err:
        return err
    return Response({'ok': True, 'data': booking_to_dict(booking)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def crypto_create(request):
    s = CryptoCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking, err = _booking_or_404(s.validated_data['bookingId'])
    if err:
        return err
    result, err = _payment_call(payments.create_crypto_payment, request.user, booking,
                                s.validated_data['cryptoCurrency'])
    if err:
        return err
    return Response({'ok': True, **payments.as_dict(result)})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def crypto_confirm(request):
    s = BookingRefSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking, err = _booking_or_404(s.validated_data['bookingId'])
    if err:
        return err
    booking, err = _payment_call(payments.confirm_crypto_payment, request.user, booking)
    if err:
        return err
    return Response({'ok': True, 'data': booking_to_dict(booking)})


for _view in (stripe_create_intent, stripe_confirm, razorpay_create_order, razorpay_verify, crypto_create):
    _view.cls.throttle_scope = 'payment'
