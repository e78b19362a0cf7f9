"""
Mock flight provider and flight booking bookkeeping.

Offers are fabricated per search and cached for ``FLIGHT_OFFER_TTL``
seconds so the seat map and the final booking are priced against the
same offer the traveller saw.  Seat, meal and service selections are
validated with ``FlightSelection``; totals are always recomputed here
and client-side totals are ignored.
"""
from __future__ import annotations

import datetime
import logging
import random
import string
import time
import uuid
from typing import Optional, Iterable

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from portal.models import FlightBooking
from portal.services.audit import log_action

logger = logging.getLogger(__name__)

AIRLINES = ['Air India', 'IndiGo', 'SpiceJet', 'Vistara', 'GoAir', 'AirAsia']
AIRCRAFT_TYPES = ['Boeing 737', 'Airbus A320', 'Boeing 777', 'Airbus A330']
AMENITIES = ['WiFi', 'In-flight Entertainment', 'Meals', 'Power Outlets']
FLIGHT_CLASSES = ('economy', 'premium_economy', 'business', 'first')
PRICE_MULTIPLIERS = {'economy': 1, 'premium_economy': 1.5, 'business': 3, 'first': 5}
OFFERS_PER_SEARCH = 8

SEAT_LAYOUTS = {
    'Boeing 737': (32, ['A', 'B', 'C', 'D', 'E', 'F']),
    'Airbus A320': (30, ['A', 'B', 'C', 'D', 'E', 'F']),
    'Boeing 777': (42, ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'J', 'K']),
    'Airbus A330': (38, ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']),
}
DEFAULT_AIRCRAFT = 'Boeing 737'
WINDOW_LETTERS = {'A', 'F', 'K'}
AISLE_LETTERS = {'C', 'D', 'G', 'H'}

MEALS = [
    {'id': 'meal_1', 'name': 'Vegetarian Meal', 'description': 'Fresh vegetarian cuisine with seasonal vegetables',
     'price': 800, 'dietary': ['Vegetarian'], 'image': '/api/placeholder/150/100'},
    {'id': 'meal_2', 'name': 'Non-Vegetarian Meal', 'description': 'Choice of chicken or mutton with rice and bread',
     'price': 1000, 'dietary': ['Non-Vegetarian'], 'image': '/api/placeholder/150/100'},
    {'id': 'meal_3', 'name': 'Vegan Meal', 'description': 'Plant-based meal with organic ingredients',
     'price': 900, 'dietary': ['Vegan'], 'image': '/api/placeholder/150/100'},
    {'id': 'meal_4', 'name': 'Jain Meal', 'description': 'Specially prepared Jain vegetarian meal',
     'price': 850, 'dietary': ['Jain', 'Vegetarian'], 'image': '/api/placeholder/150/100'},
]

SERVICES = [
    {'id': 'service_1', 'name': 'Extra Baggage', 'description': 'Additional 10kg checked baggage',
     'price': 1500, 'category': 'baggage'},
    {'id': 'service_2', 'name': 'Priority Boarding', 'description': 'Board the aircraft before other passengers',
     'price': 500, 'category': 'boarding'},
    {'id': 'service_3', 'name': 'Lounge Access',
     'description': 'Access to airport lounge with complimentary food and drinks',
     'price': 2000, 'category': 'comfort'},
    {'id': 'service_4', 'name': 'Travel Insurance', 'description': 'Comprehensive travel insurance coverage',
     'price': 800, 'category': 'insurance'},
    {'id': 'service_5', 'name': 'Fast Track Security', 'description': 'Skip regular security queues',
     'price': 300, 'category': 'convenience'},
]

SERVICE_CATEGORY_TITLES = {
    'baggage': 'Baggage Services',
    'boarding': 'Boarding Services',
    'comfort': 'Comfort & Lounge',
    'insurance': 'Insurance & Protection',
    'convenience': 'Convenience Services',
}

OFFER_EXPIRED = 'Flight offer expired, please search again'


def _offer_key(flight_id: str) -> str:
    return f"flights:offer:{flight_id}"


def _seats_key(flight_id: str) -> str:
    return f"flights:seats:{flight_id}"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


# ---------------------------------------------------------------------
# Offers
# ---------------------------------------------------------------------
def _make_offer(i: int, from_city: str, to_city: str, departure_date: datetime.date, rng: random.Random) -> dict:
    airline = rng.choice(AIRLINES)
    base_price = 5000 + rng.random() * 15000
    duration = 2 + rng.random() * 8
    hours, minutes = int(duration), int((duration % 1) * 60)
    departure = datetime.datetime.combine(departure_date, datetime.time(6 + i * 2, rng.randrange(60)))
    arrival = departure + datetime.timedelta(hours=hours, minutes=minutes)
    return {
        'id': f"flight_{i + 1}_{_epoch_ms()}_{uuid.uuid4().hex[:6]}",
        'airline': airline,
        'flightNumber': f"{airline[:2].upper()}{rng.randint(1000, 9999)}",
        'aircraft': rng.choice(AIRCRAFT_TYPES),
        'from': from_city,
        'to': to_city,
        'departure': {
            'time': departure.isoformat(),
            'airport': f"{from_city} Airport",
            'terminal': f"Terminal {rng.randint(1, 3)}",
        },
        'arrival': {
            'time': arrival.isoformat(),
            'airport': f"{to_city} Airport",
            'terminal': f"Terminal {rng.randint(1, 3)}",
        },
        'duration': f"{hours}h {minutes}m",
        'stops': 1 if rng.random() > 0.7 else 0,
        'prices': {cls: round(base_price * mult) for cls, mult in PRICE_MULTIPLIERS.items()},
        'availability': {
            'economy': rng.randint(20, 119),
            'premium_economy': rng.randint(10, 59),
            'business': rng.randint(5, 24),
            'first': rng.randint(1, 8),
        },
        'baggage': {'cabin': '7kg', 'checked': '20kg' if rng.random() > 0.5 else '15kg'},
        'amenities': [a for a in AMENITIES if rng.random() > 0.3],
        'cancellation': 'Free' if rng.random() > 0.5 else 'Paid',
        'rating': round(3.5 + rng.random() * 1.5, 1),
    }


def search(from_city: str, to_city: str, departure_date: datetime.date, passengers: int=1,
           flight_class: str='economy', *, rng: Optional[random.Random]=None) -> dict:
    if flight_class not in FLIGHT_CLASSES:
        raise ValueError(f'Unknown flight class: {flight_class}')
    if passengers < 1:
        raise ValueError('At least one passenger is required')
    rng = rng or random.Random()
    flights = [_make_offer(i, from_city, to_city, departure_date, rng) for i in range(OFFERS_PER_SEARCH)]
    cache.set_many({_offer_key(f['id']): f for f in flights}, settings.FLIGHT_OFFER_TTL)
    logger.info("flight search %s->%s on %s: %d offers", from_city, to_city, departure_date, len(flights))
    return {
        'flights': flights,
        'searchParams': {
            'from': from_city,
            'to': to_city,
            'departureDate': departure_date.isoformat(),
            'passengers': passengers,
            'flightClass': flight_class,
        },
        'totalResults': len(flights),
    }


def get_offer(flight_id: str) -> dict:
    offer = cache.get(_offer_key(flight_id))
    if offer is None:
        raise ValueError(OFFER_EXPIRED)
    return offer


# ---------------------------------------------------------------------
# Seat maps
# ---------------------------------------------------------------------
def classify_seat(row: int, letter: str) -> dict:
    """Class, type, extra fee and features of one seat, from its position."""
    is_window = letter in WINDOW_LETTERS
    is_aisle = letter in AISLE_LETTERS
    if row <= 3:
        seat_class, fee = 'first', 5000
    elif row <= 8:
        seat_class, fee = 'business', 2000
    elif row <= 12:
        seat_class, fee = 'premium_economy', 500
    else:
        seat_class, fee = 'economy', 200 if (is_window or is_aisle) else 0
    features = []
    if is_window:
        features.append('Window View')
    if is_aisle:
        features.append('Easy Access')
    if row <= 5:
        features.append('Extra Legroom')
    if row <= 8:
        features.append('Lie-flat Bed')
    return {
        'class': seat_class,
        'type': 'window' if is_window else ('aisle' if is_aisle else 'middle'),
        'extraFee': fee,
        'features': features,
    }


def generate_seat_map(aircraft: str, rng: Optional[random.Random]=None) -> list[dict]:
    rng = rng or random.Random()
    rows, letters = SEAT_LAYOUTS.get(aircraft, SEAT_LAYOUTS[DEFAULT_AIRCRAFT])
    seats = []
    for row in range(1, rows + 1):
        for letter in letters:
            seat = {'number': f"{row}{letter}", 'row': row, 'letter': letter}
            seat.update(classify_seat(row, letter))
            seat['available'] = rng.random() > 0.3
            seats.append(seat)
    return seats


def get_seat_map(flight_id: str, *, rng: Optional[random.Random]=None) -> dict:
    offer = get_offer(flight_id)
    seats = cache.get(_seats_key(flight_id))
    if seats is None:
        seats = generate_seat_map(offer['aircraft'], rng)
        cache.set(_seats_key(flight_id), seats, settings.FLIGHT_OFFER_TTL)
    return {
        'flightId': flight_id,
        'aircraft': offer['aircraft'],
        'seats': seats,
        'seatMapLayout': {
            'rows': max(s['row'] for s in seats),
            'seatsPerRow': sorted({s['letter'] for s in seats}),
        },
    }


# ---------------------------------------------------------------------
# Meals & services
# ---------------------------------------------------------------------
def get_meals() -> list[dict]:
    return [dict(m) for m in MEALS]


def get_services() -> list[dict]:
    return [dict(s) for s in SERVICES]


def services_by_category() -> list[dict]:
    groups: dict[str, list] = {}
    for s in SERVICES:
        groups.setdefault(s['category'], []).append(dict(s))
    return [{'category': c, 'title': SERVICE_CATEGORY_TITLES.get(c, c), 'services': items} for c, items in groups.items()]


def _lookup(catalog: list[dict], item_id: str, kind: str) -> dict:
    for item in catalog:
        if item['id'] == item_id:
            return dict(item)
    raise ValueError(f'Unknown {kind}: {item_id}')


# ---------------------------------------------------------------------
# Selection bookkeeping
# ---------------------------------------------------------------------
class FlightSelection:
    """Seats, meals and services chosen for one offer.

    Seat selection toggles and is capped at the passenger count.  Meals
    may repeat but their total is capped at the passenger count too.
    Services toggle with no cap.
    """

    def __init__(self, offer: dict, passengers: int, flight_class: str='economy'):
        if flight_class not in FLIGHT_CLASSES:
            raise ValueError(f'Unknown flight class: {flight_class}')
        if passengers < 1:
            raise ValueError('At least one passenger is required')
        self.offer = offer
        self.passengers = passengers
        self.flight_class = flight_class
        self.seats: list[dict] = []
        self.meals: list[dict] = []
        self.services: list[dict] = []

    def toggle_seat(self, seat: dict) -> bool:
        """Select or deselect a seat; returns True when the seat is now selected."""
        if not seat.get('available'):
            raise ValueError(f"Seat {seat.get('number')} is not available")
        for i, s in enumerate(self.seats):
            if s['number'] == seat['number']:
                del self.seats[i]
                return False
        if len(self.seats) >= self.passengers:
            raise ValueError(f'Seat limit reached: you can only select {self.passengers} seat(s)')
        self.seats.append(seat)
        return True

    def add_meal(self, meal: dict) -> None:
        if len(self.meals) >= self.passengers:
            raise ValueError(f'Meal limit reached: you can only select {self.passengers} meal(s)')
        self.meals.append(meal)

    def remove_meal(self, meal_id: str) -> bool:
        for i, m in enumerate(self.meals):
            if m['id'] == meal_id:
                del self.meals[i]
                return True
        return False

    def toggle_service(self, service: dict) -> bool:
        for i, s in enumerate(self.services):
            if s['id'] == service['id']:
                del self.services[i]
                return False
        self.services.append(service)
        return True

    def price(self) -> dict:
        base_fare = int(self.offer['prices'][self.flight_class]) * self.passengers
        seat_fees = sum(int(s['extraFee']) for s in self.seats)
        meal_fees = sum(int(m['price']) for m in self.meals)
        service_fees = sum(int(s['price']) for s in self.services)
        return {
            'baseFare': base_fare,
            'seatFees': seat_fees,
            'mealFees': meal_fees,
            'serviceFees': service_fees,
            'total': base_fare + seat_fees + meal_fees + service_fees,
        }


def build_selection(flight_id: str, passengers: int, flight_class: str='economy', *,
                    seat_numbers: Iterable[str]=(), meal_ids: Iterable[str]=(),
                    service_ids: Iterable[str]=()) -> FlightSelection:
    """Replay a client's selections against the cached offer and seat map."""
    offer = get_offer(flight_id)
    selection = FlightSelection(offer, passengers, flight_class)

    seat_numbers = list(seat_numbers)
    if len(set(seat_numbers)) != len(seat_numbers):
        raise ValueError('Each seat can be selected only once')
    if seat_numbers:
        by_number = {s['number']: s for s in get_seat_map(flight_id)['seats']}
        for number in seat_numbers:
            seat = by_number.get(number)
            if seat is None:
                raise ValueError(f'Unknown seat: {number}')
            selection.toggle_seat(seat)

    for meal_id in meal_ids:
        selection.add_meal(_lookup(MEALS, meal_id, 'meal'))

    for service_id in dict.fromkeys(service_ids):
        selection.toggle_service(_lookup(SERVICES, service_id, 'service'))

    return selection


# ---------------------------------------------------------------------
# Booking
# ---------------------------------------------------------------------
def generate_reference() -> str:
    suffix = ''.join(random.choices(string.ascii_uppercase + string.digits, k=4))
    return f"MT{_epoch_ms()}{suffix}"


@transaction.atomic
def book(user, flight_id: str, passengers: list[dict], flight_class: str='economy', *,
         seat_numbers: Iterable[str]=(), meal_ids: Iterable[str]=(), service_ids: Iterable[str]=(),
         return_date: Optional[datetime.date]=None) -> FlightBooking:
    if not passengers:
        raise ValueError('At least one passenger is required')
    for p in passengers:
        if not (str(p.get('name') or '').strip() and p.get('age') is not None and p.get('gender')):
            raise ValueError('Each passenger needs a name, age and gender')

    selection = build_selection(flight_id, len(passengers), flight_class,
                                seat_numbers=seat_numbers, meal_ids=meal_ids, service_ids=service_ids)
    offer = selection.offer
    departure_date = datetime.datetime.fromisoformat(offer['departure']['time']).date()
    if return_date and return_date < departure_date:
        raise ValueError('Return date cannot be before departure')
    totals = selection.price()

    booking = FlightBooking.objects.create(
        user=user,
        airline=offer['airline'],
        flight_number=offer['flightNumber'],
        aircraft=offer['aircraft'],
        departure_city=offer['from'],
        arrival_city=offer['to'],
        departure_date=departure_date,
        return_date=return_date,
        passenger_count=len(passengers),
        flight_class=flight_class,
        base_fare=totals['baseFare'],
        seat_fees=totals['seatFees'],
        meal_fees=totals['mealFees'],
        service_fees=totals['serviceFees'],
        total_price=totals['total'],
        booking_status='confirmed',
        booking_reference=generate_reference(),
        passengers=passengers,
        seats=[{'number': s['number'], 'class': s['class'], 'extraFee': s['extraFee']} for s in selection.seats],
        meals=[{'id': m['id'], 'name': m['name'], 'price': m['price']} for m in selection.meals],
        services=[{'id': s['id'], 'name': s['name'], 'price': s['price']} for s in selection.services],
    )
    log_action(user=user, action='flight_book', object_type='flight_booking', object_id=booking.id,
               detail={'reference': booking.booking_reference, 'total': booking.total_price})
    logger.info("flight booking %s for user %s total=%s", booking.booking_reference, user.id, booking.total_price)
    return booking


def booking_to_dict(b: FlightBooking) -> dict:
    return {
        'id': b.id,
        'bookingReference': b.booking_reference,
        'airline': b.airline,
        'flightNumber': b.flight_number,
        'aircraft': b.aircraft,
        'departureCity': b.departure_city,
        'arrivalCity': b.arrival_city,
        'departureDate': b.departure_date.isoformat(),
        'returnDate': b.return_date.isoformat() if b.return_date else None,
        'passengerCount': b.passenger_count,
        'flightClass': b.flight_class,
        'baseFare': b.base_fare,
        'seatFees': b.seat_fees,
        'mealFees': b.meal_fees,
        'serviceFees': b.service_fees,
        'totalPrice': b.total_price,
        'bookingStatus': b.booking_status,
        'passengers': b.passengers,
        'seats': b.seats,
        'meals': b.meals,
        'services': b.services,
        'createdAt': b.created_at.isoformat(),
    }


def list_bookings(user) -> list[dict]:
    return [booking_to_dict(b) for b in FlightBooking.objects.filter(user=user).order_by('-created_at', '-id')]
