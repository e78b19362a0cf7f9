from decimal import Decimal

import pytest

from portal.models import Booking, Consultation, Stay, TourPackage

pytestmark = pytest.mark.django_db


@pytest.fixture
def package():
    return TourPackage.objects.create(title='Mysore Palace Day Trip', city='Bengaluru', category='Heritage',
                                      price=Decimal('80.00'))


@pytest.fixture
def stay():
    return Stay.objects.create(name='Greams Residency', city='Chennai', price_per_night=Decimal('45.50'))


def test_tour_package_total_is_package_price(patient, package, auth_client):
    r = auth_client(patient).post('/api/bookings', {
        'tourPackageId': package.id, 'paymentMethod': 'stripe', 'passportNumber': 'k1234567',
    }, format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['totalAmount'] == 80.0
    assert data['paymentStatus'] == 'pending'
    assert data['bookingStatus'] == 'pending'
    assert data['item'] == {'type': 'tour', 'id': package.id, 'title': 'Mysore Palace Day Trip'}
    assert data['passportNumber'] == 'K1234567'


def test_stay_total_is_nightly_rate_times_nights(patient, stay, auth_client):
    r = auth_client(patient).post('/api/bookings', {
        'stayId': stay.id, 'nights': 3, 'paymentMethod': 'razorpay', 'totalAmount': 1,
    }, format='json')
    assert r.status_code == 201
    assert r.data['data']['totalAmount'] == 136.5


def test_stay_needs_nights(patient, stay, auth_client):
    r = auth_client(patient).post('/api/bookings', {'stayId': stay.id, 'paymentMethod': 'crypto'}, format='json')
    assert r.status_code == 400


def test_exactly_one_item(patient, stay, package, auth_client):
    client = auth_client(patient)
    r = client.post('/api/bookings', {'stayId': stay.id, 'nights': 1, 'tourPackageId': package.id,
                                      'paymentMethod': 'stripe'}, format='json')
    assert r.status_code == 400
    r = client.post('/api/bookings', {'paymentMethod': 'stripe'}, format='json')
    assert r.status_code == 400


def test_consultation_total_is_doctor_fee(patient, doctor, auth_client):
    c = Consultation.objects.create(user=patient, doctor=doctor)
    r = auth_client(patient).post('/api/bookings', {'consultationId': c.id, 'paymentMethod': 'stripe'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['totalAmount'] == 80.0


def test_cannot_book_someone_elses_consultation(patient, other_patient, doctor, auth_client):
    c = Consultation.objects.create(user=patient, doctor=doctor)
    r = auth_client(other_patient).post('/api/bookings', {'consultationId': c.id, 'paymentMethod': 'stripe'},
                                        format='json')
    assert r.status_code == 403


def test_missing_item_is_404(patient, auth_client):
    r = auth_client(patient).post('/api/bookings', {'tourPackageId': 999, 'paymentMethod': 'stripe'}, format='json')
    assert r.status_code == 404


def test_list_own_bookings_newest_first(patient, other_patient, package, auth_client):
    first = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'))
    second = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'))
    Booking.objects.create(user=other_patient, tour_package=package, total_amount=Decimal('80'))
    r = auth_client(patient).get('/api/bookings')
    assert [b['id'] for b in r.data['data']] == [second.id, first.id]


def test_booking_detail_is_owner_only(patient, other_patient, admin_user, package, auth_client):
    b = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'))
    assert auth_client(patient).get(f'/api/bookings/{b.id}').status_code == 200
    assert auth_client(other_patient).get(f'/api/bookings/{b.id}').status_code == 403
    assert auth_client(admin_user).get(f'/api/bookings/{b.id}').status_code == 200


def test_cancel_unpaid_only(patient, package, auth_client):
    client = auth_client(patient)
    b = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'))
    r = client.post(f'/api/bookings/{b.id}/cancel')
    assert r.status_code == 200
    assert r.data['bookingStatus'] == 'cancelled'

    paid = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'),
                                  payment_status=Booking.PAYMENT_PAID)
    r = client.post(f'/api/bookings/{paid.id}/cancel')
    assert r.status_code == 400


def test_admin_sets_any_status(patient, admin_user, package, auth_client):
    b = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'),
                               booking_status='completed')
    client = auth_client(admin_user)
    r = client.post(f'/api/admin/bookings/{b.id}/status', {'status': 'pending'}, format='json')
    assert r.status_code == 200
    b.refresh_from_db()
    assert b.booking_status == 'pending'

    r = client.get('/api/admin/bookings')
    assert r.data['data'][0]['userEmail'] == patient.email


def test_patient_cannot_set_status(patient, package, auth_client):
    b = Booking.objects.create(user=patient, tour_package=package, total_amount=Decimal('80'))
    r = auth_client(patient).post(f'/api/admin/bookings/{b.id}/status', {'status': 'confirmed'}, format='json')
    assert r.status_code == 403
