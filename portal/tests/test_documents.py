import datetime
import os

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from portal.models import MedicalRecord, PassportVerification

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


def _png(name='p.png', size=16):
    return SimpleUploadedFile(name, b'\x89PNG' + b'0' * size, content_type='image/png')


def _passport_payload(**overrides):
    data = {
        'passportImage': _png('passport.png'),
        'selfieImage': _png('selfie.png'),
        'passportNumber': 'k1234567',
        'passportCountry': 'Kenya',
        'passportExpiry': (timezone.localdate() + datetime.timedelta(days=365)).isoformat(),
    }
    data.update(overrides)
    return data


# ----------------------------------------------------------------------
# Medical records
# ----------------------------------------------------------------------
def test_upload_list_delete_record(patient, auth_client):
    client = auth_client(patient)
    pdf = SimpleUploadedFile('scan.pdf', b'%PDF-1.4 test', content_type='application/pdf')
    r = client.post('/api/records', {'file': pdf, 'recordType': 'lab', 'description': 'Blood work'},
                    format='multipart')
    assert r.status_code == 201
    record = MedicalRecord.objects.get()
    assert record.file_name == 'scan.pdf'
    assert record.file_type == 'application/pdf'
    path = record.file.path

    r = client.get('/api/records')
    assert [x['id'] for x in r.data['data']] == [record.id]

    r = client.delete(f'/api/records/{record.id}')
    assert r.status_code == 200
    assert not MedicalRecord.objects.exists()
    assert not os.path.exists(path)


def test_record_type_and_size_limits(patient, auth_client, settings):
    client = auth_client(patient)
    exe = SimpleUploadedFile('x.exe', b'MZ', content_type='application/octet-stream')
    assert client.post('/api/records', {'file': exe}, format='multipart').status_code == 400

    settings.UPLOAD_MAX_MB = 0.0001
    big = SimpleUploadedFile('big.pdf', b'0' * 1024, content_type='application/pdf')
    r = client.post('/api/records', {'file': big}, format='multipart')
    assert r.status_code == 400
    assert 'too large' in r.data['detail']


def test_cannot_delete_someone_elses_record(patient, other_patient, auth_client):
    auth_client(patient).post('/api/records', {'file': _png()}, format='multipart')
    record = MedicalRecord.objects.get()
    assert auth_client(other_patient).delete(f'/api/records/{record.id}').status_code == 403
    assert MedicalRecord.objects.exists()


# ----------------------------------------------------------------------
# Passport verification
# ----------------------------------------------------------------------
def test_submit_and_read_status(patient, auth_client):
    client = auth_client(patient)
    assert client.get('/api/passport').data['data'] is None
    r = client.post('/api/passport', _passport_payload(), format='multipart')
    assert r.status_code == 201
    assert r.data['data']['verificationStatus'] == 'pending'
    assert r.data['data']['passportNumber'] == 'K1234567'
    assert client.get('/api/passport').data['data']['id'] == r.data['data']['id']


def test_expired_passport_rejected(patient, auth_client):
    payload = _passport_payload(passportExpiry=timezone.localdate().isoformat())
    r = auth_client(patient).post('/api/passport', payload, format='multipart')
    assert r.status_code == 400


def test_passport_must_be_image(patient, auth_client):
    pdf = SimpleUploadedFile('passport.pdf', b'%PDF', content_type='application/pdf')
    r = auth_client(patient).post('/api/passport', _passport_payload(passportImage=pdf), format='multipart')
    assert r.status_code == 400


def test_passport_image_size_limit(patient, auth_client, settings):
    settings.IMAGE_UPLOAD_MAX_MB = 0.0001
    r = auth_client(patient).post('/api/passport', _passport_payload(selfieImage=_png(size=2048)),
                                  format='multipart')
    assert r.status_code == 400


def test_admin_reviews_passport(patient, admin_user, auth_client):
    auth_client(patient).post('/api/passport', _passport_payload(), format='multipart')
    v = PassportVerification.objects.get()
    admin = auth_client(admin_user)

    r = admin.get('/api/admin/passports', {'status': 'pending'})
    assert [x['id'] for x in r.data['data']] == [v.id]

    r = admin.post(f'/api/admin/passports/{v.id}/review', {'status': 'approved', 'note': 'Looks good'}, format='json')
    assert r.status_code == 200
    v.refresh_from_db()
    assert v.verification_status == 'approved'
    assert v.reviewed_by == admin_user
    assert v.reviewed_at is not None


def test_avatar_upload(patient, auth_client):
    r = auth_client(patient).post('/api/user/avatar', {'avatar': _png('me.png')}, format='multipart')
    assert r.status_code == 200
    patient.refresh_from_db()
    assert patient.avatar.name.endswith('.png')
