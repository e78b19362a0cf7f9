import datetime
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction

from portal.models import Booking, Consultation, TourPackage, Stay
from portal.permissions import is_admin
from portal.services.audit import log_action

User = get_user_model()

BOOKING_STATUSES = tuple(s for s, _ in Booking.BOOKING_STATUS_CHOICES)
PAYMENT_METHODS = tuple(m for m, _ in Booking.PAYMENT_METHOD_CHOICES)


def booking_to_dict(b: Booking, *, with_user: bool=False) -> dict:
    item = None
    if b.tour_package_id:
        item = {'type': 'tour', 'id': b.tour_package_id, 'title': b.tour_package.title}
    elif b.consultation_id:
        item = {'type': 'consultation', 'id': b.consultation_id, 'title': b.consultation.doctor.name}
    elif b.stay_id:
        item = {'type': 'stay', 'id': b.stay_id, 'title': b.stay.name, 'nights': b.nights}
    data = {
        'id': b.id,
        'item': item,
        'passportNumber': b.passport_number,
        'passportExpiry': b.passport_expiry.isoformat() if b.passport_expiry else None,
        'passportCountry': b.passport_country,
        'pickupAddress': b.pickup_address,
        'dropAddress': b.drop_address,
        'totalAmount': float(b.total_amount),
        'currency': b.currency,
        'paymentStatus': b.payment_status,
        'paymentMethod': b.payment_method or None,
        'paymentTransactionId': b.payment_transaction_id or None,
        'bookingStatus': b.booking_status,
        'cryptoCurrency': b.crypto_currency or None,
        'cryptoAmount': float(b.crypto_amount) if b.crypto_amount is not None else None,
        'cryptoAddress': b.crypto_address or None,
        'createdAt': b.created_at.isoformat(),
    }
    if with_user:
        data['userName'] = b.user.get_full_name() or b.user.username
        data['userEmail'] = b.user.email
    return data


def _select(qs):
    return qs.select_related('user', 'tour_package', 'stay', 'consultation', 'consultation__doctor')


@transaction.atomic
def create_booking(user: User, *, payment_method: str, tour_package: Optional[TourPackage]=None,
                   consultation: Optional[Consultation]=None, stay: Optional[Stay]=None,
                   nights: Optional[int]=None, passport_number: str='',
                   passport_expiry: Optional[datetime.date]=None, passport_country: str='',
                   pickup_address: str='', drop_address: str='', currency: str='USD') -> Booking:
    """Create a pending booking for exactly one item; the total is priced here."""
    chosen = [x for x in (tour_package, consultation, stay) if x is not None]
    if len(chosen) != 1:
        raise ValueError('Choose exactly one of a tour package, a consultation or a stay')
    if payment_method not in PAYMENT_METHODS:
        raise ValueError(f'Unsupported payment method: {payment_method}')

    if tour_package is not None:
        total = tour_package.price
        nights = None
    elif consultation is not None:
        if consultation.user_id != user.id:
            raise PermissionError('You can only book your own consultations')
        total = consultation.doctor.consultation_fee
        nights = None
    else:
        if not nights or nights < 1:
            raise ValueError('A stay needs at least one night')
        total = stay.price_per_night * nights

    b = Booking.objects.create(
        user=user,
        tour_package=tour_package,
        consultation=consultation,
        stay=stay,
        nights=nights,
        passport_number=(passport_number or '').strip().upper(),
        passport_expiry=passport_expiry,
        passport_country=(passport_country or '').strip(),
        pickup_address=(pickup_address or '').strip(),
        drop_address=(drop_address or '').strip(),
        total_amount=Decimal(total).quantize(Decimal('0.01')),
        currency=currency,
        payment_method=payment_method,
        payment_status=Booking.PAYMENT_PENDING,
        booking_status='pending',
    )
    log_action(user=user, action='booking_create', object_type='booking', object_id=b.id,
               detail={'item': b.item_type, 'total': str(b.total_amount), 'method': payment_method})
    return b


def get_booking_for(user: User, booking_id: int) -> Booking:
    """Fetch a booking the user may see (owner or admin)."""
    b = _select(Booking.objects).get(id=booking_id)
    if b.user_id != user.id and not is_admin(user):
        raise PermissionError('You do not have access to this booking')
    return b


def list_bookings(user: User) -> list[dict]:
    qs = _select(Booking.objects.filter(user=user))
    return [booking_to_dict(b) for b in qs.order_by('-created_at', '-id')]


def list_all_bookings(limit: Optional[int]=None) -> list[dict]:
    qs = _select(Booking.objects.all()).order_by('-created_at', '-id')
    if limit:
        qs = qs[:limit]
    return [booking_to_dict(b, with_user=True) for b in qs]


def set_booking_status(admin: User, booking: Booking, status: str) -> Booking:
    # any known status may be set; transitions are not checked
    if status not in BOOKING_STATUSES:
        raise ValueError(f'Unknown booking status: {status}')
    old = booking.booking_status
    booking.booking_status = status
    booking.save(update_fields=['booking_status', 'updated_at'])
    log_action(user=admin, action='booking_status', object_type='booking', object_id=booking.id,
               detail={'from': old, 'to': status})
    return booking


def cancel_booking(user: User, booking: Booking) -> Booking:
    if booking.user_id != user.id:
        raise PermissionError('You can only cancel your own bookings')
    if booking.payment_status == Booking.PAYMENT_PAID:
        raise ValueError('Paid bookings cannot be cancelled here')
    booking.booking_status = 'cancelled'
    booking.save(update_fields=['booking_status', 'updated_at'])
    log_action(user=user, action='booking_cancel', object_type='booking', object_id=booking.id)
    return booking
