from decimal import Decimal

import pytest

from portal.models import Consultation, Doctor, Treatment

pytestmark = pytest.mark.django_db


def test_patient_dashboard_counts_and_latest(patient, other_patient, doctor, auth_client):
    Doctor.objects.create(name='Dr. Unverified', specialization='Dermatology', consultation_fee=Decimal('40'))
    knee = Treatment.objects.create(title='Knee Replacement', category='Orthopedics', city='Chennai',
                                    price_inr=Decimal('350000'), price_usd=Decimal('4200'))
    Treatment.objects.create(title='Hair Transplant', category='Cosmetic', city='Mumbai',
                             price_inr=Decimal('90000'), price_usd=Decimal('1100'))
    for i in range(6):
        Consultation.objects.create(user=patient, doctor=doctor, treatment=knee if i == 5 else None,
                                    notes=f'visit {i}')
    Consultation.objects.create(user=other_patient, doctor=doctor)

    r = auth_client(patient).get('/api/dashboard')
    assert r.status_code == 200
    data = r.data['data']
    assert data['consultations'] == 6
    assert data['treatments'] == 2
    assert data['doctors'] == 1
    recent = data['recentConsultations']
    assert [c['notes'] for c in recent] == ['visit 5', 'visit 4', 'visit 3', 'visit 2', 'visit 1']
    assert recent[0]['doctorName'] == 'Dr. Priya Raman'
    assert recent[0]['hospital'] == 'Apollo Hospitals Greams Road'
    assert recent[0]['treatmentTitle'] == 'Knee Replacement'


def test_patient_dashboard_requires_login(api_client):
    assert api_client.get('/api/dashboard').status_code == 401
