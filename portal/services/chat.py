import logging
from typing import Optional

import bleach
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from portal.models import ChatMessage, Consultation
from portal.services.audit import log_action
from portal.services.consultations import check_consultation_access
from portal.services.uploads import validate_upload

logger = logging.getLogger(__name__)

User = get_user_model()

MAX_MESSAGE_LENGTH = 2000


def group_name(consultation_id: int) -> str:
    return f"chat.{consultation_id}"


def message_to_dict(m: ChatMessage) -> dict:
    return {
        'id': m.id,
        'consultationId': m.consultation_id,
        'senderId': m.sender_id,
        'senderType': m.sender_type,
        'messageType': m.message_type,
        'content': m.content,
        'fileUrl': m.file.url if m.file else None,
        'readAt': m.read_at.isoformat() if m.read_at else None,
        'createdAt': m.created_at.isoformat(),
    }


@transaction.atomic
def send_message(consultation: Consultation, sender: User, content: str, file=None) -> ChatMessage:
    if not check_consultation_access(sender, consultation):
        raise PermissionError('You do not have access to this consultation')

    # chat is plain text; every tag is stripped
    content = bleach.clean((content or '').strip(), tags=set(), strip=True)
    if not content and file is None:
        raise ValueError('Message cannot be empty')
    if len(content) > MAX_MESSAGE_LENGTH:
        raise ValueError('Message too long')

    message_type = 'text'
    if file is not None:
        ctype = validate_upload(file)
        message_type = 'image' if ctype.startswith('image/') else 'file'

    msg = ChatMessage.objects.create(
        consultation=consultation,
        sender=sender,
        sender_type='doctor' if getattr(sender, 'role', '') == User.ROLE_DOCTOR else 'patient',
        message_type=message_type,
        content=content,
        file=file or '',
    )

    log_action(user=sender, action='chat_send', object_type='consultation', object_id=consultation.id,
               detail={'msgId': msg.id, 'type': message_type})

    channel_layer = get_channel_layer()
    if channel_layer is not None:
        payload = message_to_dict(msg)
        # broadcast only once the row is committed
        transaction.on_commit(lambda: _broadcast(channel_layer, consultation.id, payload))

    return msg


def _broadcast(channel_layer, consultation_id: int, payload: dict) -> None:
    try:
        async_to_sync(channel_layer.group_send)(group_name(consultation_id), {"type": "chat.message", "payload": payload})
    except Exception:
        # delivery is at-most-once; clients reload history on reconnect
        logger.exception("chat broadcast failed for consultation %s", consultation_id)


def list_history(user: User, consultation: Consultation, page: int=1, page_size: int=50):
    if not check_consultation_access(user, consultation):
        raise PermissionError('You do not have access to this consultation')
    page = max(1, int(page or 1))
    page_size = min(100, max(1, int(page_size or 50)))
    start = (page-1)*page_size
    qs = ChatMessage.objects.filter(consultation=consultation)
    items = [message_to_dict(m) for m in qs.order_by('created_at', 'id')[start:start+page_size]]
    return items, qs.count()


def mark_read(user: User, consultation: Consultation, up_to_message_id: Optional[int]=None) -> int:
    if not check_consultation_access(user, consultation):
        raise PermissionError('You do not have access to this consultation')
    qs = ChatMessage.objects.filter(consultation=consultation, read_at__isnull=True).exclude(sender=user)
    if up_to_message_id:
        qs = qs.filter(id__lte=up_to_message_id)
    return qs.update(read_at=timezone.now())
