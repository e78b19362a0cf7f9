"""
Audit trail for logins, bookings, payments, uploads and reviews.

Rows are append-only; anonymous actors (failed logins) are stored with a
null user.
"""
from typing import Optional, Any, Dict

from django.contrib.auth import get_user_model

from portal.models import AuditEvent

User = get_user_model()


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None,
               detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    return AuditEvent.objects.create(
        user=user if isinstance(user, User) and user.pk else None,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail or {},
    )


def event_to_dict(e: AuditEvent) -> dict:
    return {
        'id': e.id,
        'userId': e.user_id,
        'action': e.action,
        'objectType': e.object_type,
        'objectId': e.object_id,
        'detail': e.detail,
        'createdAt': e.created_at.isoformat(),
    }


def recent_events(*, action: Optional[str]=None, object_type: Optional[str]=None, object_id: Optional[int]=None,
                  limit: int=100) -> list[dict]:
    qs = AuditEvent.objects.all()
    if action:
        qs = qs.filter(action=action)
    if object_type:
        qs = qs.filter(object_type=object_type)
        if object_id is not None:
            qs = qs.filter(object_id=object_id)
    limit = min(500, max(1, limit))
    return [event_to_dict(e) for e in qs.order_by('-created_at', '-id')[:limit]]
