import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

PASSWORD = 'Str0ng!Passw0rd'


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and cached flight offers live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    from portal.models import User

    def _make(username, role='patient', **extra):
        extra.setdefault('email', f'{username}@example.com')
        return User.objects.create_user(username=username, password=PASSWORD, role=role, **extra)
    return _make


@pytest.fixture
def patient(make_user):
    return make_user('patient1', first_name='Pat')


@pytest.fixture
def other_patient(make_user):
    return make_user('patient2')


@pytest.fixture
def doctor_user(make_user):
    return make_user('doctor1', role='doctor', first_name='Dee')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin1', role='admin')


@pytest.fixture
def doctor(doctor_user):
    from decimal import Decimal
    from portal.models import Doctor, Hospital
    h = Hospital.objects.create(name='Apollo Hospitals Greams Road', city='Chennai',
                                latitude=13.0604, longitude=80.2496, specializations=['Cardiology'])
    return Doctor.objects.create(user=doctor_user, name='Dr. Priya Raman', specialization='Cardiology',
                                 hospital=h, consultation_fee=Decimal('80.00'), verified=True)


@pytest.fixture
def auth_client():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def api_client():
    return APIClient()
