from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Booking, Consultation, Stay, TourPackage
from ..permissions import IsAdminRole
from ..serializers.bookings import BookingCreateSerializer, BookingStatusSerializer
from ..services import bookings


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def booking_list_create(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': bookings.list_bookings(request.user)})

    s = BookingCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    items = {}
    try:
        if v.get('tourPackageId'):
            items['tour_package'] = TourPackage.objects.get(id=v['tourPackageId'])
        elif v.get('consultationId'):
            items['consultation'] = Consultation.objects.select_related('doctor').get(id=v['consultationId'])
        else:
            items['stay'] = Stay.objects.get(id=v['stayId'])
    except (TourPackage.DoesNotExist, Consultation.DoesNotExist, Stay.DoesNotExist):
        return Response({'ok': False, 'detail': 'Booked item not found'}, status=404)
    try:
        b = bookings.create_booking(
            request.user,
            payment_method=v['paymentMethod'],
            nights=v.get('nights'),
            passport_number=v.get('passportNumber', ''),
            passport_expiry=v.get('passportExpiry'),
            passport_country=v.get('passportCountry', ''),
            pickup_address=v.get('pickupAddress', ''),
            drop_address=v.get('dropAddress', ''),
            **items,
        )
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': bookings.booking_to_dict(b)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def booking_detail(request, booking_id: int):
    try:
        b = bookings.get_booking_for(request.user, booking_id)
    except Booking.DoesNotExist:
        return Response({'ok': False, 'detail': 'Booking not found'}, status=404)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    return Response({'ok': True, 'data': bookings.booking_to_dict(b)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def booking_cancel(request, booking_id: int):
    try:
        b = Booking.objects.get(id=booking_id)
    except Booking.DoesNotExist:
        return Response({'ok': False, 'detail': 'Booking not found'}, status=404)
    try:
        bookings.cancel_booking(request.user, b)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'bookingStatus': b.booking_status})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def admin_booking_list(request):
    return Response({'ok': True, 'data': bookings.list_all_bookings()})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_booking_status(request, booking_id: int):
    s = BookingStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        b = Booking.objects.get(id=booking_id)
    except Booking.DoesNotExist:
        return Response({'ok': False, 'detail': 'Booking not found'}, status=404)
    try:
        bookings.set_booking_status(request.user, b, s.validated_data['status'])
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'bookingStatus': b.booking_status})
