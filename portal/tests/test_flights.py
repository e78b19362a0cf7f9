import datetime
import random
import re

import pytest

from portal.models import FlightBooking
from portal.services import flights

DEPARTURE = datetime.date(2030, 5, 1)


def _search(passengers=1, seed=7):
    result = flights.search('Nairobi', 'Chennai', DEPARTURE, passengers, rng=random.Random(seed))
    return result['flights'][0]


def _available(flight_id, n):
    seats = flights.get_seat_map(flight_id, rng=random.Random(3))['seats']
    return [s for s in seats if s['available']][:n]


def test_search_returns_eight_cached_offers():
    result = flights.search('Nairobi', 'Chennai', DEPARTURE, 2, 'business', rng=random.Random(1))
    assert result['totalResults'] == 8
    assert result['searchParams']['flightClass'] == 'business'
    for i, offer in enumerate(result['flights']):
        assert flights.get_offer(offer['id']) == offer
        assert offer['departure']['time'].startswith(f'2030-05-01T{6 + i * 2:02d}:')
        assert offer['stops'] in (0, 1)
        assert offer['aircraft'] in flights.AIRCRAFT_TYPES


def test_offer_prices_follow_class_multipliers():
    offer = _search()
    economy = offer['prices']['economy']
    assert 5000 <= economy <= 20000
    assert abs(offer['prices']['premium_economy'] - economy * 1.5) <= 1.5
    assert abs(offer['prices']['business'] - economy * 3) <= 2
    assert abs(offer['prices']['first'] - economy * 5) <= 3


def test_unknown_offer_is_expired():
    with pytest.raises(ValueError, match='expired'):
        flights.get_offer('flight_1_0_nope')


@pytest.mark.parametrize('row,letter,expected_class,fee,seat_type', [
    (1, 'A', 'first', 5000, 'window'),
    (3, 'B', 'first', 5000, 'middle'),
    (4, 'C', 'business', 2000, 'aisle'),
    (8, 'F', 'business', 2000, 'window'),
    (9, 'B', 'premium_economy', 500, 'middle'),
    (12, 'D', 'premium_economy', 500, 'aisle'),
    (13, 'A', 'economy', 200, 'window'),
    (20, 'C', 'economy', 200, 'aisle'),
    (20, 'B', 'economy', 0, 'middle'),
    (20, 'K', 'economy', 200, 'window'),
])
def test_classify_seat(row, letter, expected_class, fee, seat_type):
    seat = flights.classify_seat(row, letter)
    assert seat['class'] == expected_class
    assert seat['extraFee'] == fee
    assert seat['type'] == seat_type


def test_seat_features():
    assert flights.classify_seat(5, 'A')['features'] == ['Window View', 'Extra Legroom', 'Lie-flat Bed']
    assert flights.classify_seat(7, 'C')['features'] == ['Easy Access', 'Lie-flat Bed']
    assert flights.classify_seat(30, 'B')['features'] == []


@pytest.mark.parametrize('aircraft,rows,per_row', [
    ('Boeing 737', 32, 6),
    ('Airbus A320', 30, 6),
    ('Boeing 777', 42, 10),
    ('Airbus A330', 38, 8),
    ('Concorde', 32, 6),
])
def test_seat_map_dimensions(aircraft, rows, per_row):
    seats = flights.generate_seat_map(aircraft, random.Random(0))
    assert len(seats) == rows * per_row
    assert max(s['row'] for s in seats) == rows


def test_seat_map_is_stable_per_offer():
    offer = _search()
    first = flights.get_seat_map(offer['id'], rng=random.Random(1))
    second = flights.get_seat_map(offer['id'], rng=random.Random(2))
    assert first['seats'] == second['seats']
    assert first['aircraft'] == offer['aircraft']
    assert first['seatMapLayout']['rows'] == flights.SEAT_LAYOUTS[offer['aircraft']][0]


def test_selecting_more_seats_than_passengers_is_rejected():
    offer = _search(passengers=1)
    a, b = _available(offer['id'], 2)
    selection = flights.FlightSelection(offer, passengers=1)
    assert selection.toggle_seat(a) is True
    with pytest.raises(ValueError, match='Seat limit reached'):
        selection.toggle_seat(b)
    # re-selecting deselects, which frees the slot
    assert selection.toggle_seat(a) is False
    assert selection.toggle_seat(b) is True


def test_unavailable_seat_is_rejected():
    selection = flights.FlightSelection(_search(), passengers=1)
    with pytest.raises(ValueError, match='not available'):
        selection.toggle_seat({'number': '1A', 'available': False, 'extraFee': 5000})


def test_meal_limit():
    selection = flights.FlightSelection(_search(), passengers=2)
    veg = flights.MEALS[0]
    selection.add_meal(veg)
    selection.add_meal(veg)
    with pytest.raises(ValueError, match='Meal limit reached'):
        selection.add_meal(flights.MEALS[1])
    assert selection.remove_meal('meal_1') is True
    assert len(selection.meals) == 1


def test_price_is_base_fare_plus_extras():
    offer = _search(passengers=2)
    seats = _available(offer['id'], 2)
    selection = flights.build_selection(offer['id'], 2, 'economy',
                                        seat_numbers=[s['number'] for s in seats],
                                        meal_ids=['meal_1', 'meal_2'], service_ids=['service_1', 'service_5'])
    price = selection.price()
    assert price['baseFare'] == offer['prices']['economy'] * 2
    assert price['seatFees'] == sum(s['extraFee'] for s in seats)
    assert price['mealFees'] == 800 + 1000
    assert price['serviceFees'] == 1500 + 300
    assert price['total'] == price['baseFare'] + price['seatFees'] + price['mealFees'] + price['serviceFees']


def test_build_selection_rejects_duplicates_and_unknown_items():
    offer = _search(passengers=2)
    seat = _available(offer['id'], 1)[0]
    with pytest.raises(ValueError, match='only once'):
        flights.build_selection(offer['id'], 2, seat_numbers=[seat['number'], seat['number']])
    with pytest.raises(ValueError, match='Unknown meal'):
        flights.build_selection(offer['id'], 2, meal_ids=['meal_99'])


def test_services_grouped_by_category():
    groups = flights.services_by_category()
    assert [g['category'] for g in groups] == ['baggage', 'boarding', 'comfort', 'insurance', 'convenience']
    assert groups[0]['title'] == 'Baggage Services'


def test_reference_format():
    assert re.fullmatch(r'MT\d{13}[A-Z0-9]{4}', flights.generate_reference())


# ----------------------------------------------------------------------
# API
# ----------------------------------------------------------------------
def _api_search(client, passengers=1):
    r = client.post('/api/flights/search', {
        'from': 'Nairobi', 'to': 'Chennai', 'departureDate': '2030-05-01',
        'passengers': passengers, 'flightClass': 'economy',
    }, format='json')
    assert r.status_code == 200
    return r.data['data']['flights'][0]


@pytest.mark.django_db
def test_quote_recomputes_price_server_side(api_client):
    client = api_client
    offer = _api_search(client)
    r = client.post('/api/flights/quote', {
        'flightId': offer['id'], 'passengers': 1, 'meals': ['meal_3'], 'services': ['service_2'], 'total': 1,
    }, format='json')
    assert r.status_code == 200
    assert r.data['data']['price']['total'] == offer['prices']['economy'] + 900 + 500


@pytest.mark.django_db
def test_quote_seat_limit_message(api_client):
    client = api_client
    offer = _api_search(client)
    seats = client.get('/api/flights/seats', {'flightId': offer['id']}).data['data']['seats']
    free = [s['number'] for s in seats if s['available']][:2]
    r = client.post('/api/flights/quote', {'flightId': offer['id'], 'passengers': 1, 'seats': free}, format='json')
    assert r.status_code == 400
    assert 'Seat limit reached' in r.data['detail']


@pytest.mark.django_db
def test_book_and_list(patient, auth_client):
    client = auth_client(patient)
    offer = _api_search(client, passengers=2)
    r = client.post('/api/flights/book', {
        'flightId': offer['id'],
        'flightClass': 'business',
        'passengers': [
            {'name': 'Pat One', 'age': 40, 'gender': 'female'},
            {'name': 'Pat Two', 'age': 12, 'gender': 'male'},
        ],
        'meals': ['meal_4'],
    }, format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['bookingStatus'] == 'confirmed'
    assert data['passengerCount'] == 2
    assert data['baseFare'] == offer['prices']['business'] * 2
    assert data['totalPrice'] == data['baseFare'] + 850
    assert data['bookingReference'].startswith('MT')

    r = client.get('/api/flights/bookings')
    assert [b['id'] for b in r.data['data']] == [data['id']]
    assert FlightBooking.objects.get(id=data['id']).user == patient


@pytest.mark.django_db
def test_book_with_expired_offer(patient, auth_client):
    r = auth_client(patient).post('/api/flights/book', {
        'flightId': 'flight_1_0_gone',
        'passengers': [{'name': 'Pat', 'age': 40, 'gender': 'female'}],
    }, format='json')
    assert r.status_code == 400
    assert r.data['detail'] == flights.OFFER_EXPIRED


@pytest.mark.django_db
def test_meals_and_services_endpoints(api_client):
    client = api_client
    r = client.get('/api/flights/meals')
    assert len(r.data['data']['meals']) == 4
    r = client.get('/api/flights/services')
    assert len(r.data['data']['services']) == 5
    assert len(r.data['data']['categories']) == 5
