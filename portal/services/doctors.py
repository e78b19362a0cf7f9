from decimal import Decimal

from django.contrib.auth import get_user_model

from portal.models import Doctor
from portal.services.audit import log_action

User = get_user_model()

EDITABLE_FIELDS = (
    'name', 'specialization', 'hospital_name', 'bio', 'years_experience', 'consultation_fee',
    'slots', 'phone', 'languages', 'education', 'certifications', 'image_url',
)


def get_or_create_profile(user: User) -> Doctor:
    if getattr(user, 'role', '') != User.ROLE_DOCTOR:
        raise PermissionError('Only doctors have a doctor profile')
    doctor, created = Doctor.objects.get_or_create(
        user=user,
        defaults={
            'name': user.get_full_name() or user.username,
            'specialization': 'General Medicine',
            'consultation_fee': Decimal('50'),
            'years_experience': 0,
            'verified': False,
        },
    )
    if created:
        log_action(user=user, action='doctor_profile_create', object_type='doctor', object_id=doctor.id)
    return doctor


def update_profile(user: User, changes: dict) -> Doctor:
    doctor = get_or_create_profile(user)
    fields = [f for f in EDITABLE_FIELDS if f in changes]
    for f in fields:
        setattr(doctor, f, changes[f])
    if fields:
        doctor.save(update_fields=fields + ['updated_at'])
        log_action(user=user, action='doctor_profile_update', object_type='doctor', object_id=doctor.id,
                   detail={'fields': fields})
    return doctor


def set_verified(admin: User, doctor: Doctor, verified: bool) -> Doctor:
    doctor.verified = bool(verified)
    doctor.save(update_fields=['verified', 'updated_at'])
    log_action(user=admin, action='doctor_verify', object_type='doctor', object_id=doctor.id,
               detail={'verified': doctor.verified})
    return doctor
