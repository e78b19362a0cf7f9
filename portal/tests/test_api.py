"""
Integration tests for the MediTravel API.

These tests exercise registration and login, the public catalog,
consultation booking with role checks, and the admin dashboard.  The
tests use Django REST Framework's APIClient within the APITestCase base
class.

To run the tests:

```
pytest -q portal/tests
```
"""
from decimal import Decimal

from rest_framework.test import APITestCase, APIClient
from rest_framework import status

from portal.models import User, Hospital, Doctor, Treatment, Stay, TourPackage, Consultation, AnalyticsEntry, Booking

PASSWORD = 'Str0ng!Passw0rd'


class MediTravelAPITests(APITestCase):
    def setUp(self) -> None:
        """Set up users, a hospital with doctors and a small catalog."""
        self.patient = User.objects.create_user(username='patient1', email='p1@example.com',
                                                password=PASSWORD, role='patient', first_name='Pat')
        self.doctor_user = User.objects.create_user(username='doctor1', email='d1@example.com',
                                                    password=PASSWORD, role='doctor')
        self.admin = User.objects.create_user(username='admin1', email='a1@example.com',
                                              password=PASSWORD, role='admin')

        self.hospital = Hospital.objects.create(name='KIMS Hospitals', city='Hyderabad',
                                                latitude=17.4399, longitude=78.4983,
                                                specializations=['Cardiology', 'Orthopedics'])
        self.doctor = Doctor.objects.create(user=self.doctor_user, name='Dr. Sanjay Reddy',
                                            specialization='Cardiology', hospital=self.hospital,
                                            consultation_fee=Decimal('65.00'), verified=True)
        self.unverified = Doctor.objects.create(name='Dr. New Joiner', specialization='Cardiology',
                                                hospital=self.hospital, verified=False)

        Treatment.objects.create(title='Wellness Packages', city='Hyderabad', category='Wellness',
                                 price_inr=Decimal('45650'), price_usd=Decimal('550'))
        Treatment.objects.create(title='Cardiac Surgery', city='Chennai', category='Cardiology', featured=True,
                                 price_inr=Decimal('456500'), price_usd=Decimal('5500'))
        Treatment.objects.create(title='Bone Marrow Transplant', city='Chennai', category='Oncology', featured=True,
                                 price_inr=Decimal('1660000'), price_usd=Decimal('20000'))

        Stay.objects.create(name='Budget Inn', city='Chennai', price_per_night=Decimal('35'), rating=Decimal('3.9'),
                            hospital_proximity_km=Decimal('1.5'))
        Stay.objects.create(name='Mid Suites', city='Chennai', price_per_night=Decimal('80'), rating=Decimal('4.5'),
                            hospital_proximity_km=Decimal('4.0'))
        Stay.objects.create(name='Grand Palace', city='Chennai', price_per_night=Decimal('250'), rating=Decimal('4.9'),
                            hospital_proximity_km=Decimal('9.0'))
        TourPackage.objects.create(title='Charminar Walk', city='Hyderabad', category='Heritage', price=Decimal('50'))

        self.client = APIClient()

    def _login(self, username: str, password: str = PASSWORD):
        return self.client.post('/api/auth/login', {'username': username, 'password': password}, format='json')

    def authenticate(self, user: User) -> None:
        resp = self._login(user.username)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {resp.data['token']}")

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def test_login_returns_tokens_and_role(self) -> None:
        resp = self._login('patient1')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['role'], 'patient')
        self.assertTrue(resp.data['token'])
        self.assertTrue(resp.data['jwt_access'])
        self.assertTrue(resp.data['jwt_refresh'])

    def test_login_with_email(self) -> None:
        resp = self._login('p1@example.com')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['user']['username'], 'patient1')

    def test_login_with_wrong_password(self) -> None:
        resp = self._login('patient1', 'nope')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data['ok'])

    def test_register_patient(self) -> None:
        resp = self.client.post('/api/auth/register', {
            'email': 'new@example.com', 'password': PASSWORD, 'name': 'New Patient', 'country': 'Kenya',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['role'], 'patient')
        user = User.objects.get(email='new@example.com')
        self.assertEqual(user.username, 'new@example.com')
        self.assertEqual(user.country, 'Kenya')

    def test_register_rejects_duplicate_email(self) -> None:
        resp = self.client.post('/api/auth/register', {
            'email': 'P1@example.com', 'password': PASSWORD, 'name': 'Someone',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_register_rejects_weak_password(self) -> None:
        resp = self.client.post('/api/auth/register', {
            'email': 'weak@example.com', 'password': '12345', 'name': 'Weak',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email='weak@example.com').exists())

    def test_profile_update(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post('/api/user/profile/update', {'name': 'Patricia', 'phone': '+44 7700 900000'},
                                format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['name'], 'Patricia')
        resp = self.client.get('/api/user/profile')
        self.assertEqual(resp.data['data']['phone'], '+44 7700 900000')

    def test_change_password_requires_current_password(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post('/api/user/change-password',
                                {'oldPassword': 'wrong', 'newPassword': 'An0ther!Passw0rd'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        resp = self.client.post('/api/user/change-password',
                                {'oldPassword': PASSWORD, 'newPassword': 'An0ther!Passw0rd'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.patient.refresh_from_db()
        self.assertTrue(self.patient.check_password('An0ther!Passw0rd'))

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def test_treatments_featured_first_then_title(self) -> None:
        resp = self.client.get('/api/treatments')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        titles = [t['title'] for t in resp.data['data']]
        self.assertEqual(titles, ['Bone Marrow Transplant', 'Cardiac Surgery', 'Wellness Packages'])

    def test_treatments_filters(self) -> None:
        resp = self.client.get('/api/treatments', {'city': 'Chennai', 'featured': 'true', 'q': 'cardiac'})
        self.assertEqual([t['title'] for t in resp.data['data']], ['Cardiac Surgery'])
        resp = self.client.get('/api/treatments', {'featured': 'false'})
        self.assertEqual([t['title'] for t in resp.data['data']], ['Wellness Packages'])

    def test_stays_price_range_and_proximity(self) -> None:
        resp = self.client.get('/api/stays', {'priceRange': 'mid'})
        self.assertEqual([s['name'] for s in resp.data['data']], ['Mid Suites'])
        self.assertEqual(resp.data['data'][0]['proximity'], 'Nearby')
        resp = self.client.get('/api/stays')
        self.assertEqual([s['name'] for s in resp.data['data']], ['Grand Palace', 'Mid Suites', 'Budget Inn'])
        self.assertEqual(resp.data['data'][2]['proximity'], 'Very Close')
        self.assertEqual(resp.data['data'][0]['proximity'], 'Moderate Distance')

    def test_tour_packages_by_city(self) -> None:
        resp = self.client.get('/api/tour-packages', {'city': 'Hyderabad'})
        self.assertEqual(len(resp.data['data']), 1)
        resp = self.client.get('/api/tour-packages', {'city': 'Mumbai'})
        self.assertEqual(resp.data['data'], [])

    def test_public_doctor_list_shows_verified_only(self) -> None:
        resp = self.client.get('/api/doctors')
        self.assertEqual([d['id'] for d in resp.data['data']], [self.doctor.id])
        resp = self.client.get('/api/doctors', {'verified': 'false'})
        self.assertEqual([d['id'] for d in resp.data['data']], [self.unverified.id])

    def test_doctor_detail_and_review_updates_rating(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post(f'/api/doctors/{self.doctor.id}/reviews', {'rating': 4, 'comment': 'Kind'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        other = User.objects.create_user(username='patient9', password=PASSWORD)
        self.client.force_authenticate(other)
        self.client.post(f'/api/doctors/{self.doctor.id}/reviews', {'rating': 5}, format='json')
        resp = self.client.get(f'/api/doctors/{self.doctor.id}')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['rating'], 4.5)
        self.assertEqual(len(resp.data['data']['reviews']), 2)
        self.assertEqual(resp.data['data']['hospital']['name'], 'KIMS Hospitals')

    def test_review_rating_out_of_range(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post(f'/api/doctors/{self.doctor.id}/reviews', {'rating': 6}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_doctor_detail_not_found(self) -> None:
        resp = self.client.get('/api/doctors/999999')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_hospital_doctors(self) -> None:
        resp = self.client.get(f'/api/hospitals/{self.hospital.id}/doctors')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data['data']['doctors']), 2)

    def test_communication_request(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post(f'/api/doctors/{self.doctor.id}/contact', {'message': 'Can I fly 3 days after?'},
                                format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'pending')

    # ------------------------------------------------------------------
    # Consultations
    # ------------------------------------------------------------------
    def test_patient_books_consultation_and_doctor_sees_it(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.post('/api/consultations', {'doctorId': self.doctor.id, 'notes': 'Chest pain'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['data']['status'], 'pending')

        self.client.credentials()
        self.authenticate(self.doctor_user)
        resp = self.client.get('/api/doctor/consultations')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data['data']), 1)
        self.assertEqual(resp.data['data'][0]['patientEmail'], 'p1@example.com')

    def test_doctor_cannot_book_consultation(self) -> None:
        self.authenticate(self.doctor_user)
        resp = self.client.post('/api/consultations', {'doctorId': self.doctor.id}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_only_consulting_doctor_updates_status(self) -> None:
        c = Consultation.objects.create(user=self.patient, doctor=self.doctor)
        self.authenticate(self.patient)
        resp = self.client.post(f'/api/consultations/{c.id}/status', {'status': 'confirmed'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.client.credentials()
        self.authenticate(self.doctor_user)
        resp = self.client.post(f'/api/consultations/{c.id}/status', {'status': 'confirmed'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        c.refresh_from_db()
        self.assertEqual(c.status, 'confirmed')

    # ------------------------------------------------------------------
    # Dashboards
    # ------------------------------------------------------------------
    def test_doctor_profile_created_on_first_visit(self) -> None:
        user = User.objects.create_user(username='doctor2', password=PASSWORD, role='doctor', first_name='Asha')
        self.client.force_authenticate(user)
        resp = self.client.get('/api/doctor/profile')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['specialization'], 'General Medicine')
        self.assertEqual(resp.data['data']['consultationFee'], 50.0)
        self.assertFalse(resp.data['data']['verified'])

        resp = self.client.post('/api/doctor/profile', {'bio': 'Cardiologist', 'yearsExperience': 9}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['yearsExperience'], 9)

    def test_patient_cannot_open_doctor_dashboard(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.get('/api/doctor/profile')
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_dashboard_totals(self) -> None:
        AnalyticsEntry.objects.create(date='2024-01-01', revenue=Decimal('100'), cost=Decimal('30'), profit=Decimal('70'))
        AnalyticsEntry.objects.create(date='2024-01-02', revenue=Decimal('50'), cost=Decimal('10'), profit=Decimal('40'))
        Booking.objects.create(user=self.patient, total_amount=Decimal('50'))
        self.authenticate(self.admin)
        resp = self.client.get('/api/admin/dashboard')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data['data']
        self.assertEqual(data['totalRevenue'], 150.0)
        self.assertEqual(data['totalCost'], 40.0)
        self.assertEqual(data['totalProfit'], 110.0)
        self.assertEqual(data['totalBookings'], 1)
        self.assertEqual(data['totalUsers'], 3)
        self.assertEqual(data['recentBookings'][0]['userEmail'], 'p1@example.com')

    def test_admin_dashboard_forbidden_for_patient(self) -> None:
        self.authenticate(self.patient)
        resp = self.client.get('/api/admin/dashboard')
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_verifies_doctor(self) -> None:
        self.authenticate(self.admin)
        resp = self.client.post(f'/api/admin/doctors/{self.unverified.id}/verify', {'verified': True}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.unverified.refresh_from_db()
        self.assertTrue(self.unverified.verified)
