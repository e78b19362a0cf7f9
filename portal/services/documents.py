"""
Medical records and passport verification.

Files go through Django's default storage; the row keeps the original
file name, content type and size for listing.
"""
import datetime
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from portal.models import MedicalRecord, PassportVerification, Consultation
from portal.services.audit import log_action
from portal.services.uploads import validate_upload, validate_image

logger = logging.getLogger(__name__)

User = get_user_model()


# ---------------------------------------------------------------------
# Medical records
# ---------------------------------------------------------------------
def record_to_dict(r: MedicalRecord) -> dict:
    return {
        'id': r.id,
        'fileName': r.file_name,
        'fileType': r.file_type,
        'fileSize': r.file_size,
        'fileUrl': r.file.url if r.file else None,
        'recordType': r.record_type,
        'description': r.description,
        'consultationId': r.consultation_id,
        'createdAt': r.created_at.isoformat(),
    }


def upload_record(user: User, f, *, record_type: str='', description: str='',
                  consultation: Optional[Consultation]=None) -> MedicalRecord:
    ctype = validate_upload(f)
    if consultation is not None and consultation.user_id != user.id:
        raise PermissionError('Records can only be attached to your own consultations')
    record = MedicalRecord.objects.create(
        uploaded_by=user,
        consultation=consultation,
        file=f,
        file_name=getattr(f, 'name', '') or 'upload',
        file_type=ctype,
        file_size=f.size or 0,
        record_type=(record_type or '').strip(),
        description=(description or '').strip(),
    )
    log_action(user=user, action='record_upload', object_type='medical_record', object_id=record.id,
               detail={'name': record.file_name, 'size': record.file_size})
    return record


def list_records(user: User) -> list[dict]:
    return [record_to_dict(r) for r in MedicalRecord.objects.filter(uploaded_by=user).order_by('-created_at', '-id')]


def delete_record(user: User, record: MedicalRecord) -> None:
    if record.uploaded_by_id != user.id:
        raise PermissionError('You can only delete your own records')
    record_id = record.id
    # stored file first, then the row
    record.file.delete(save=False)
    record.delete()
    log_action(user=user, action='record_delete', object_type='medical_record', object_id=record_id)


# ---------------------------------------------------------------------
# Passport verification
# ---------------------------------------------------------------------
def verification_to_dict(v: PassportVerification) -> dict:
    return {
        'id': v.id,
        'userId': v.user_id,
        'passportNumber': v.passport_number,
        'passportCountry': v.passport_country,
        'passportExpiry': v.passport_expiry.isoformat(),
        'passportImageUrl': v.passport_image.url if v.passport_image else None,
        'selfieImageUrl': v.selfie_image.url if v.selfie_image else None,
        'verificationStatus': v.verification_status,
        'reviewNote': v.review_note,
        'reviewedAt': v.reviewed_at.isoformat() if v.reviewed_at else None,
        'createdAt': v.created_at.isoformat(),
    }


@transaction.atomic
def submit_passport(user: User, *, passport_image, selfie_image, passport_number: str, passport_country: str,
                    passport_expiry: datetime.date) -> PassportVerification:
    validate_image(passport_image)
    validate_image(selfie_image)
    passport_number = (passport_number or '').strip().upper()
    if not passport_number:
        raise ValueError('Passport number is required')
    if passport_expiry <= timezone.localdate():
        raise ValueError('Passport has expired')
    v = PassportVerification.objects.create(
        user=user,
        passport_image=passport_image,
        selfie_image=selfie_image,
        passport_number=passport_number,
        passport_country=(passport_country or '').strip(),
        passport_expiry=passport_expiry,
        verification_status=PassportVerification.STATUS_PENDING,
    )
    log_action(user=user, action='passport_submit', object_type='passport_verification', object_id=v.id)
    return v


def latest_verification(user: User) -> Optional[PassportVerification]:
    return PassportVerification.objects.filter(user=user).order_by('-created_at', '-id').first()


def has_approved_passport(user: User) -> bool:
    v = latest_verification(user)
    return bool(v and v.verification_status == PassportVerification.STATUS_APPROVED)


def list_verifications(status: Optional[str]=None) -> list[dict]:
    qs = PassportVerification.objects.all()
    if status:
        qs = qs.filter(verification_status=status)
    return [verification_to_dict(v) for v in qs.order_by('-created_at', '-id')]


def review_passport(reviewer: User, verification: PassportVerification, status: str, note: str='') -> PassportVerification:
    if status not in (PassportVerification.STATUS_APPROVED, PassportVerification.STATUS_REJECTED):
        raise ValueError('Status must be approved or rejected')
    verification.verification_status = status
    verification.reviewed_by = reviewer
    verification.reviewed_at = timezone.now()
    verification.review_note = (note or '').strip()[:255]
    verification.save(update_fields=['verification_status', 'reviewed_by', 'reviewed_at', 'review_note'])
    log_action(user=reviewer, action='passport_review', object_type='passport_verification', object_id=verification.id,
               detail={'status': status})
    logger.info("passport verification %s %s by %s", verification.id, status, reviewer.id)
    return verification
