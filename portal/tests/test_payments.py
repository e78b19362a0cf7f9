import datetime
from decimal import Decimal

import pytest
import requests

from portal.models import AnalyticsEntry, AuditEvent, Booking, PassportVerification, TourPackage
from portal.services import payments

pytestmark = pytest.mark.django_db


class FakeResponse:
    def __init__(self, status_code, data):
        self.status_code = status_code
        self._data = data

    def json(self):
        return self._data


class FakeProvider:
    """Stands in for ``requests.request``; replies are consumed in order."""

    def __init__(self):
        self.calls = []
        self.replies = []

    def __call__(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def provider(monkeypatch):
    fake = FakeProvider()
    monkeypatch.setattr(payments.requests, 'request', fake)
    return fake


@pytest.fixture(autouse=True)
def provider_settings(settings):
    settings.STRIPE_SECRET_KEY = 'sk_test_123'
    settings.STRIPE_API_BASE = 'https://stripe.test'
    settings.RAZORPAY_KEY_ID = 'rzp_test_key'
    settings.RAZORPAY_KEY_SECRET = 'rzp_secret'
    settings.RAZORPAY_API_BASE = 'https://razorpay.test'
    settings.USD_INR_RATE = Decimal('83')
    settings.PAYMENT_REQUIRE_PASSPORT_APPROVAL = False


@pytest.fixture
def booking(patient):
    package = TourPackage.objects.create(title='Ayurveda Recovery Retreat', city='Bengaluru', price=Decimal('450.25'))
    return Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('450.25'),
                                  payment_method='stripe')


# ----------------------------------------------------------------------
# Stripe
# ----------------------------------------------------------------------
def test_stripe_intent_and_confirm(patient, booking, provider, auth_client):
    client = auth_client(patient)
    provider.replies.append(FakeResponse(200, {'id': 'pi_1', 'client_secret': 'pi_1_secret'}))
    r = client.post('/api/payments/stripe/intent', {'bookingId': booking.id}, format='json')
    assert r.status_code == 200
    assert r.data['clientSecret'] == 'pi_1_secret'
    assert provider.calls[0]['url'] == 'https://stripe.test/v1/payment_intents'
    assert provider.calls[0]['data']['amount'] == 45025
    assert provider.calls[0]['data']['currency'] == 'usd'

    provider.replies.append(FakeResponse(200, {'id': 'pi_1', 'status': 'succeeded'}))
    r = client.post('/api/payments/stripe/confirm', {'bookingId': booking.id, 'paymentIntentId': 'pi_1'},
                    format='json')
    assert r.status_code == 200
    assert r.data['data']['paymentStatus'] == 'paid'
    entry = AnalyticsEntry.objects.get()
    assert entry.revenue == Decimal('450.25')
    assert AuditEvent.objects.filter(action='payment_paid', object_id=booking.id).exists()


def test_stripe_incomplete_payment(patient, booking, provider):
    booking.payment_transaction_id = 'pi_2'
    booking.save()
    provider.replies.append(FakeResponse(200, {'id': 'pi_2', 'status': 'requires_payment_method'}))
    with pytest.raises(ValueError, match='requires_payment_method'):
        payments.confirm_stripe_payment(patient, booking, 'pi_2')
    booking.refresh_from_db()
    assert booking.payment_status == Booking.PAYMENT_PENDING


def test_stripe_error_maps_to_502(patient, booking, provider, auth_client):
    provider.replies.append(FakeResponse(402, {'error': {'message': 'Your card was declined.'}}))
    r = auth_client(patient).post('/api/payments/stripe/intent', {'bookingId': booking.id}, format='json')
    assert r.status_code == 502
    assert 'declined' in r.data['detail']


def test_stripe_unreachable(patient, booking, provider):
    provider.replies.append(requests.ConnectionError('boom'))
    with pytest.raises(payments.PaymentProviderError):
        payments.create_stripe_intent(patient, booking)


def test_stripe_not_configured(patient, booking, settings):
    settings.STRIPE_SECRET_KEY = ''
    with pytest.raises(payments.PaymentProviderError, match='not configured'):
        payments.create_stripe_intent(patient, booking)


# ----------------------------------------------------------------------
# Razorpay
# ----------------------------------------------------------------------
def test_razorpay_order_amount_in_paise(patient, booking, provider):
    provider.replies.append(FakeResponse(200, {'id': 'order_1', 'amount': 3737075, 'currency': 'INR'}))
    order = payments.create_razorpay_order(patient, booking)
    assert order.order_id == 'order_1'
    assert order.key_id == 'rzp_test_key'
    # 450.25 USD * 83 = 37370.75 INR
    assert provider.calls[0]['json']['amount'] == 3737075
    booking.refresh_from_db()
    assert booking.payment_method == 'razorpay'
    assert booking.payment_transaction_id == 'order_1'


def test_razorpay_signature_verification(patient, booking, auth_client):
    booking.payment_method = 'razorpay'
    booking.payment_transaction_id = 'order_9'
    booking.save()
    client = auth_client(patient)

    forged = {'bookingId': booking.id, 'razorpay_order_id': 'order_9', 'razorpay_payment_id': 'pay_9',
              'razorpay_signature': 'deadbeef'}
    r = client.post('/api/payments/razorpay/verify', forged, format='json')
    assert r.status_code == 400
    booking.refresh_from_db()
    assert booking.payment_status == Booking.PAYMENT_PENDING

    good = dict(forged, razorpay_signature=payments.razorpay_signature('order_9', 'pay_9', 'rzp_secret'))
    r = client.post('/api/payments/razorpay/verify', good, format='json')
    assert r.status_code == 200
    assert r.data['data']['paymentStatus'] == 'paid'
    assert r.data['data']['paymentTransactionId'] == 'pay_9'


def test_razorpay_signature_is_hmac_sha256():
    # HMAC-SHA256("secret", "order_1|pay_1")
    sig = payments.razorpay_signature('order_1', 'pay_1', 'secret')
    assert len(sig) == 64
    assert sig == payments.razorpay_signature('order_1', 'pay_1', 'secret')
    assert sig != payments.razorpay_signature('order_1', 'pay_2', 'secret')


# ----------------------------------------------------------------------
# Crypto
# ----------------------------------------------------------------------
@pytest.mark.parametrize('currency,rate', [('BTC', '45000'), ('ETH', '2500'), ('USDT', '1'), ('usdc', '1')])
def test_crypto_amount_is_amount_over_rate(patient, booking, currency, rate):
    result = payments.create_crypto_payment(patient, booking, currency)
    expected = (Decimal('450.25') / Decimal(rate)).quantize(Decimal('0.00000001'))
    assert result.crypto_amount == float(expected)
    assert result.crypto_currency == currency.upper()
    assert result.payment_reference.startswith(f'crypto_{booking.id}_')
    booking.refresh_from_db()
    assert booking.payment_status == Booking.PAYMENT_PENDING_CRYPTO
    assert booking.crypto_amount == expected


def test_crypto_unsupported_currency(patient, booking, auth_client):
    r = auth_client(patient).post('/api/payments/crypto', {'bookingId': booking.id, 'cryptoCurrency': 'DOGE'},
                                  format='json')
    assert r.status_code == 400


def test_admin_confirms_crypto(patient, admin_user, booking, auth_client):
    payments.create_crypto_payment(patient, booking, 'USDT')
    assert auth_client(patient).post('/api/admin/payments/crypto/confirm', {'bookingId': booking.id},
                                     format='json').status_code == 403
    r = auth_client(admin_user).post('/api/admin/payments/crypto/confirm', {'bookingId': booking.id}, format='json')
    assert r.status_code == 200
    assert r.data['data']['paymentStatus'] == 'paid'


# ----------------------------------------------------------------------
# Gating
# ----------------------------------------------------------------------
def test_paid_booking_cannot_be_paid_again(patient, booking):
    booking.payment_status = Booking.PAYMENT_PAID
    booking.save()
    with pytest.raises(ValueError, match='already paid'):
        payments.create_crypto_payment(patient, booking)


def test_only_owner_can_pay(other_patient, booking, auth_client):
    r = auth_client(other_patient).post('/api/payments/crypto', {'bookingId': booking.id}, format='json')
    assert r.status_code == 403


def test_passport_approval_gate(patient, booking, settings):
    settings.PAYMENT_REQUIRE_PASSPORT_APPROVAL = True
    with pytest.raises(PermissionError):
        payments.create_crypto_payment(patient, booking)
    PassportVerification.objects.create(
        user=patient, passport_image='passports/p.png', selfie_image='passports/s.png',
        passport_number='K1234567', passport_country='Kenya',
        passport_expiry=datetime.date(2035, 1, 1), verification_status=PassportVerification.STATUS_APPROVED,
    )
    assert payments.create_crypto_payment(patient, booking).crypto_currency == 'USDT'


# ----------------------------------------------------------------------
# Switching provider and double confirmation
# ----------------------------------------------------------------------
def test_switching_from_crypto_to_stripe_resets_pending_state(patient, admin_user, booking, provider):
    payments.create_crypto_payment(patient, booking, 'BTC')
    provider.replies.append(FakeResponse(200, {'id': 'pi_1', 'client_secret': 'pi_1_secret'}))
    payments.create_stripe_intent(patient, booking)
    booking.refresh_from_db()
    assert booking.payment_method == 'stripe'
    assert booking.payment_status == Booking.PAYMENT_PENDING

    with pytest.raises(ValueError, match='no pending crypto payment'):
        payments.confirm_crypto_payment(admin_user, booking)
    booking.refresh_from_db()
    assert booking.payment_status == Booking.PAYMENT_PENDING
    assert not AnalyticsEntry.objects.exists()


def test_stale_copy_cannot_pay_twice(patient, booking, provider):
    booking.payment_method = 'stripe'
    booking.payment_transaction_id = 'pi_1'
    booking.save()
    stale = Booking.objects.get(pk=booking.pk)

    provider.replies.append(FakeResponse(200, {'id': 'pi_1', 'status': 'succeeded'}))
    payments.confirm_stripe_payment(patient, booking, 'pi_1')

    provider.replies.append(FakeResponse(200, {'id': 'pi_1', 'status': 'succeeded'}))
    with pytest.raises(ValueError, match='already paid'):
        payments.confirm_stripe_payment(patient, stale, 'pi_1')
    assert AnalyticsEntry.objects.count() == 1
