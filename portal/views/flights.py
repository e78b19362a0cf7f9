"""
Flight search and booking wizard.

Offers and seat maps live in the cache between steps; quote and book
replay the client's selections against them so the server owns the price.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..serializers.flights import (
    FlightSearchSerializer,
    SeatMapQuerySerializer,
    FlightQuoteSerializer,
    FlightBookSerializer,
)
from ..services import flights


@api_view(['POST'])
@permission_classes([AllowAny])
def flight_search(request):
    s = FlightSearchSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    try:
        data = flights.search(v['from'], v['to'], v['departureDate'], v['passengers'], v['flightClass'])
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def flight_seats(request):
    q = SeatMapQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    try:
        data = flights.get_seat_map(q.validated_data['flightId'])
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def flight_meals(request):
    return Response({'ok': True, 'data': {'meals': flights.get_meals()}})


@api_view(['GET'])
@permission_classes([AllowAny])
def flight_services(request):
    return Response({'ok': True, 'data': {
        'services': flights.get_services(),
        'categories': flights.services_by_category(),
    }})


@api_view(['POST'])
@permission_classes([AllowAny])
def flight_quote(request):
    s = FlightQuoteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    try:
        selection = flights.build_selection(
            v['flightId'], v['passengers'], v['flightClass'],
            seat_numbers=v['seats'], meal_ids=v['meals'], service_ids=v['services'],
        )
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': {
        'flightId': v['flightId'],
        'seats': [seat['number'] for seat in selection.seats],
        'meals': [m['id'] for m in selection.meals],
        'services': [svc['id'] for svc in selection.services],
        'price': selection.price(),
    }})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def flight_book(request):
    s = FlightBookSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    try:
        booking = flights.book(
            request.user, v['flightId'], [dict(p) for p in v['passengers']], v['flightClass'],
            seat_numbers=v['seats'], meal_ids=v['meals'], service_ids=v['services'],
            return_date=v.get('returnDate'),
        )
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': flights.booking_to_dict(booking)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def flight_bookings(request):
    return Response({'ok': True, 'data': flights.list_bookings(request.user)})
