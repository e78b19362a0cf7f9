"""
Payment provider wrappers: Stripe, Razorpay and manual crypto transfers.

Each provider call moves a ``Booking`` through its payment status and is
recorded in the audit trail.  Successful payments add a revenue row to
``AnalyticsEntry`` for the admin dashboard.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP

import requests
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from portal.exceptions import PaymentProviderError
from portal.models import Booking, AnalyticsEntry
from portal.services.audit import log_action
from portal.services.documents import has_approved_passport

logger = logging.getLogger(__name__)

EXCHANGE_RATES = {
    'BTC': Decimal('45000'),
    'ETH': Decimal('2500'),
    'USDT': Decimal('1'),
    'USDC': Decimal('1'),
}


@dataclass
class RazorpayOrder:
    order_id: str
    key_id: str
    amount: int
    currency: str


@dataclass
class CryptoInstructions:
    payment_reference: str
    crypto_currency: str
    crypto_amount: float
    wallet_address: str
    usd_amount: float
    exchange_rate: float
    instructions: str


def _minor_units(amount: Decimal, factor: Decimal = Decimal('1')) -> int:
    return int((Decimal(amount) * factor * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def ensure_payable(user, booking: Booking) -> None:
    if booking.user_id != user.id:
        raise PermissionError('You can only pay for your own bookings')
    if booking.payment_status == Booking.PAYMENT_PAID:
        raise ValueError('Booking is already paid')
    if booking.booking_status == 'cancelled':
        raise ValueError('Booking is cancelled')
    if settings.PAYMENT_REQUIRE_PASSPORT_APPROVAL and not has_approved_passport(user):
        raise PermissionError('Passport verification must be approved before payment')


def _request(provider: str, method: str, url: str, **kwargs) -> dict:
    try:
        r = requests.request(method, url, timeout=settings.PAYMENT_TIMEOUT, **kwargs)
    except requests.RequestException as e:
        logger.warning("%s request failed: %s", provider, e)
        raise PaymentProviderError(provider, 'provider unreachable') from e
    try:
        data = r.json()
    except ValueError:
        data = {}
    if r.status_code >= 400:
        err = data.get('error') if isinstance(data, dict) else None
        message = (err or {}).get('message') or (err or {}).get('description') or f'HTTP {r.status_code}'
        logger.warning("%s error %s: %s", provider, r.status_code, message)
        raise PaymentProviderError(provider, message, r.status_code)
    return data


@transaction.atomic
def mark_paid(booking: Booking, *, transaction_id: str, actor=None) -> Booking:
    """Flag a booking as paid and record the revenue, at most once per booking."""
    # re-read under a row lock; the caller may hold a stale copy
    booking = Booking.objects.select_for_update().get(pk=booking.pk)
    if booking.payment_status == Booking.PAYMENT_PAID:
        raise ValueError('Booking is already paid')
    booking.payment_status = Booking.PAYMENT_PAID
    booking.payment_transaction_id = transaction_id or booking.payment_transaction_id
    booking.save(update_fields=['payment_status', 'payment_transaction_id', 'updated_at'])
    AnalyticsEntry.objects.create(
        date=timezone.localdate(),
        revenue=booking.total_amount,
        cost=Decimal('0'),
        profit=booking.total_amount,
        source=booking.payment_method or 'unknown',
    )
    log_action(user=actor or booking.user, action='payment_paid', object_type='booking', object_id=booking.id,
               detail={'method': booking.payment_method, 'transactionId': booking.payment_transaction_id})
    logger.info("booking %s paid via %s", booking.id, booking.payment_method)
    return booking


def _record_pending(booking: Booking, method: str, transaction_id: str, **extra) -> None:
    booking.payment_method = method
    booking.payment_transaction_id = transaction_id
    # switching provider drops any earlier pending state
    extra.setdefault('payment_status', Booking.PAYMENT_PENDING)
    fields = ['payment_method', 'payment_transaction_id', 'updated_at']
    for k, v in extra.items():
        setattr(booking, k, v)
        fields.append(k)
    booking.save(update_fields=fields)


# ---------------------------------------------------------------------
# Stripe
# ---------------------------------------------------------------------
def _stripe_auth():
    if not settings.STRIPE_SECRET_KEY:
        raise PaymentProviderError('stripe', 'Stripe is not configured')
    return (settings.STRIPE_SECRET_KEY, '')


def create_stripe_intent(user, booking: Booking) -> dict:
    ensure_payable(user, booking)
    data = _request('stripe', 'POST', f"{settings.STRIPE_API_BASE}/v1/payment_intents", auth=_stripe_auth(), data={
        'amount': _minor_units(booking.total_amount),
        'currency': booking.currency.lower(),
        'metadata[booking_id]': str(booking.id),
        'automatic_payment_methods[enabled]': 'true',
    })
    intent_id = data.get('id')
    client_secret = data.get('client_secret')
    if not intent_id or not client_secret:
        raise PaymentProviderError('stripe', 'invalid response: missing id/client_secret')
    _record_pending(booking, 'stripe', intent_id)
    log_action(user=user, action='payment_create', object_type='booking', object_id=booking.id,
               detail={'method': 'stripe', 'intent': intent_id})
    return {'clientSecret': client_secret, 'paymentIntentId': intent_id}


def confirm_stripe_payment(user, booking: Booking, payment_intent_id: str) -> Booking:
    ensure_payable(user, booking)
    if booking.payment_method != 'stripe' or booking.payment_transaction_id != payment_intent_id:
        raise ValueError('Payment intent does not belong to this booking')
    data = _request('stripe', 'GET', f"{settings.STRIPE_API_BASE}/v1/payment_intents/{payment_intent_id}",
                    auth=_stripe_auth())
    if data.get('status') != 'succeeded':
        log_action(user=user, action='payment_incomplete', object_type='booking', object_id=booking.id,
                   detail={'method': 'stripe', 'status': data.get('status')})
        raise ValueError(f"Payment not completed (status: {data.get('status')})")
    return mark_paid(booking, transaction_id=payment_intent_id, actor=user)


# ---------------------------------------------------------------------
# Razorpay
# ---------------------------------------------------------------------
def _razorpay_auth():
    if not (settings.RAZORPAY_KEY_ID and settings.RAZORPAY_KEY_SECRET):
        raise PaymentProviderError('razorpay', 'Razorpay is not configured')
    return (settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)


def create_razorpay_order(user, booking: Booking) -> RazorpayOrder:
    ensure_payable(user, booking)
    amount = _minor_units(booking.total_amount, settings.USD_INR_RATE)
    data = _request('razorpay', 'POST', f"{settings.RAZORPAY_API_BASE}/v1/orders", auth=_razorpay_auth(), json={
        'amount': amount,
        'currency': 'INR',
        'receipt': f"booking_{booking.id}",
        'notes': {'booking_id': str(booking.id)},
    })
    order_id = data.get('id')
    if not order_id:
        raise PaymentProviderError('razorpay', 'invalid response: missing order id')
    _record_pending(booking, 'razorpay', order_id)
    log_action(user=user, action='payment_create', object_type='booking', object_id=booking.id,
               detail={'method': 'razorpay', 'order': order_id})
    return RazorpayOrder(order_id=order_id, key_id=settings.RAZORPAY_KEY_ID,
                         amount=int(data.get('amount') or amount), currency=data.get('currency') or 'INR')


def razorpay_signature(order_id: str, payment_id: str, secret: str) -> str:
    return hmac.new(secret.encode('utf-8'), f"{order_id}|{payment_id}".encode('utf-8'), hashlib.sha256).hexdigest()


def verify_razorpay_payment(user, booking: Booking, *, order_id: str, payment_id: str, signature: str) -> Booking:
    ensure_payable(user, booking)
    if booking.payment_method != 'razorpay' or booking.payment_transaction_id != order_id:
        raise ValueError('Order does not belong to this booking')
    expected = razorpay_signature(order_id, payment_id, settings.RAZORPAY_KEY_SECRET)
    if not hmac.compare_digest(expected, signature or ''):
        log_action(user=user, action='payment_signature_invalid', object_type='booking', object_id=booking.id,
                   detail={'method': 'razorpay', 'order': order_id})
        raise ValueError('Invalid payment signature')
    return mark_paid(booking, transaction_id=payment_id, actor=user)


# ---------------------------------------------------------------------
# Crypto
# ---------------------------------------------------------------------
def create_crypto_payment(user, booking: Booking, crypto_currency: str='USDT') -> CryptoInstructions:
    ensure_payable(user, booking)
    crypto_currency = (crypto_currency or 'USDT').upper()
    wallet = settings.CRYPTO_WALLETS.get(crypto_currency)
    rate = EXCHANGE_RATES.get(crypto_currency)
    if not wallet or rate is None:
        raise ValueError(f'Unsupported cryptocurrency: {crypto_currency}')

    crypto_amount = (booking.total_amount / rate).quantize(Decimal('0.00000001'))
    reference = f"crypto_{booking.id}_{int(time.time() * 1000)}"
    _record_pending(booking, 'crypto', reference,
                    payment_status=Booking.PAYMENT_PENDING_CRYPTO,
                    crypto_currency=crypto_currency,
                    crypto_amount=crypto_amount,
                    crypto_address=wallet)
    log_action(user=user, action='payment_create', object_type='booking', object_id=booking.id,
               detail={'method': 'crypto', 'currency': crypto_currency, 'amount': str(crypto_amount)})
    return CryptoInstructions(
        payment_reference=reference,
        crypto_currency=crypto_currency,
        crypto_amount=float(crypto_amount),
        wallet_address=wallet,
        usd_amount=float(booking.total_amount),
        exchange_rate=float(rate),
        instructions=(f"Send exactly {crypto_amount:.8f} {crypto_currency} to the provided wallet address. "
                      "Payment will be confirmed within 1-6 confirmations."),
    )


def confirm_crypto_payment(admin, booking: Booking) -> Booking:
    if booking.payment_method != 'crypto' or booking.payment_status != Booking.PAYMENT_PENDING_CRYPTO:
        raise ValueError('Booking has no pending crypto payment')
    return mark_paid(booking, transaction_id=booking.payment_transaction_id, actor=admin)


def as_dict(result) -> dict:
    return asdict(result)
