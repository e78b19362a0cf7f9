import datetime
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction

from portal.models import Consultation, Doctor, Treatment
from portal.permissions import is_admin
from portal.services.audit import log_action
from portal.services.uploads import validate_upload

User = get_user_model()


def _is_patient(user: User) -> bool:
    return getattr(user, 'role', '') == User.ROLE_PATIENT

def _is_doctor_of(user: User, consultation: Consultation) -> bool:
    return getattr(user, 'role', '') == User.ROLE_DOCTOR and consultation.doctor.user_id == user.id

def check_consultation_access(user: User, consultation: Consultation) -> bool:
    if not (user and user.is_authenticated):
        return False
    if is_admin(user):
        return True
    if consultation.user_id == user.id:
        return True
    return _is_doctor_of(user, consultation)


def consultation_to_dict(c: Consultation, *, with_patient: bool=False) -> dict:
    data = {
        'id': c.id,
        'userId': c.user_id,
        'doctorId': c.doctor_id,
        'doctorName': c.doctor.name,
        'specialization': c.doctor.specialization,
        'hospital': c.doctor.hospital.name if c.doctor.hospital_id else c.doctor.hospital_name,
        'treatmentId': c.treatment_id,
        'treatmentTitle': c.treatment.title if c.treatment_id else None,
        'consultationDate': c.consultation_date.isoformat() if c.consultation_date else None,
        'notes': c.notes,
        'medicalCondition': c.medical_condition,
        'reportUrl': c.report.url if c.report else None,
        'status': c.status,
        'createdAt': c.created_at.isoformat(),
    }
    if with_patient:
        data['patientName'] = c.user.get_full_name() or c.user.username
        data['patientEmail'] = c.user.email
    return data


def book_consultation(user: User, doctor: Doctor, *, treatment: Optional[Treatment]=None,
                      consultation_date: Optional[datetime.datetime]=None, notes: str='',
                      medical_condition: str='') -> Consultation:
    if not _is_patient(user):
        raise PermissionError('Only patients can book consultations')
    c = Consultation.objects.create(
        user=user, doctor=doctor, treatment=treatment, consultation_date=consultation_date,
        notes=(notes or '').strip(), medical_condition=(medical_condition or '').strip(),
        status=Consultation.STATUS_PENDING,
    )
    log_action(user=user, action='consultation_book', object_type='consultation', object_id=c.id,
               detail={'doctorId': doctor.id})
    return c


def list_consultations(user: User) -> list[dict]:
    qs = Consultation.objects.select_related('doctor', 'doctor__hospital', 'treatment', 'user')
    with_patient = True
    if is_admin(user):
        pass
    elif getattr(user, 'role', '') == User.ROLE_DOCTOR:
        qs = qs.filter(doctor__user=user)
    else:
        qs = qs.filter(user=user)
        with_patient = False
    return [consultation_to_dict(c, with_patient=with_patient) for c in qs.order_by('-created_at', '-id')]


@transaction.atomic
def upload_report(user: User, consultation: Consultation, f, notes: Optional[str]=None) -> Consultation:
    if consultation.user_id != user.id:
        raise PermissionError('Only the patient can upload a report for this consultation')
    validate_upload(f)
    if consultation.report:
        consultation.report.delete(save=False)
    consultation.report = f
    fields = ['report', 'updated_at']
    if notes is not None:
        consultation.notes = notes.strip()
        fields.append('notes')
    consultation.save(update_fields=fields)
    log_action(user=user, action='consultation_report', object_type='consultation', object_id=consultation.id,
               detail={'name': getattr(f, 'name', '')})
    return consultation


def update_status(user: User, consultation: Consultation, status: str) -> Consultation:
    if status not in dict(Consultation.STATUS_CHOICES):
        raise ValueError(f'Unknown status: {status}')
    if not (is_admin(user) or _is_doctor_of(user, consultation)):
        raise PermissionError('Only the consulting doctor or an admin can change the status')
    old = consultation.status
    consultation.status = status
    consultation.save(update_fields=['status', 'updated_at'])
    log_action(user=user, action='consultation_status', object_type='consultation', object_id=consultation.id,
               detail={'from': old, 'to': status})
    return consultation
