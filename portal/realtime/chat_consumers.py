import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer
from django.contrib.auth.models import AnonymousUser
from asgiref.sync import sync_to_async

from portal.models import Consultation
from portal.services.chat import group_name, send_message, mark_read, MAX_MESSAGE_LENGTH
from portal.services.consultations import check_consultation_access

logger = logging.getLogger(__name__)


async def _ws_error(ws, code: int, message: str, *, close: bool = False):
    """
    Send a uniform error frame.
    Application codes: 4xxx for client errors, 5xxx for server errors.
    """
    payload = {"type": "error", "code": code, "message": message}
    try:
        await ws.send(json.dumps(payload))
    finally:
        if close:
            await ws.close(code=code)


def _load_consultation(consultation_id: int) -> Consultation:
    return Consultation.objects.select_related("doctor").get(id=consultation_id)


class ChatConsumer(AsyncWebsocketConsumer):
    """
    Live chat for one consultation, joined to group ``chat.<id>``.

    Client frames::

        {"type": "send", "content": "..."}
        {"type": "read", "upToMessageId": 42}

    Server frames are ``message``, ``read``, ``ack`` and ``error``.
    """

    async def connect(self):
        try:
            self.consultation_id = int(self.scope["url_route"]["kwargs"].get("consultation_id"))
        except (KeyError, TypeError, ValueError):
            await self.close(code=4001)
            return

        self.user = self.scope.get("user") or AnonymousUser()

        try:
            consultation = await sync_to_async(_load_consultation)(self.consultation_id)
        except Consultation.DoesNotExist:
            await self.close(code=4004)
            return

        # patient owner, the consulting doctor or an admin
        if not await sync_to_async(check_consultation_access)(self.user, consultation):
            await self.close(code=4003)
            return

        self.group_name = group_name(self.consultation_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        if not text_data:
            return

        try:
            data = json.loads(text_data)
        except ValueError:
            await _ws_error(self, 4000, "invalid_json")
            return
        if not isinstance(data, dict):
            await _ws_error(self, 4001, "invalid_payload")
            return

        handler = {"send": self._handle_send, "read": self._handle_read}.get(data.get("type"))
        if handler is None:
            await _ws_error(self, 4002, "unsupported_type")
            return

        try:
            await handler(data)
        except Consultation.DoesNotExist:
            await _ws_error(self, 4006, "consultation_not_found", close=True)
        except PermissionError:
            await _ws_error(self, 4007, "forbidden", close=True)
        except ValueError as e:
            await _ws_error(self, 4008, str(e))
        except Exception:
            logger.exception("chat frame failed for consultation %s", self.consultation_id)
            await _ws_error(self, 5000, "server_error")

    async def _handle_send(self, data: dict):
        content = data.get("content", "")
        if not isinstance(content, str):
            raise ValueError("invalid_content_type")
        content = content.strip()
        if not content:
            raise ValueError("empty_message")
        if len(content) > MAX_MESSAGE_LENGTH:
            raise ValueError("message_too_long")

        consultation = await sync_to_async(_load_consultation)(self.consultation_id)
        # the service re-checks access and broadcasts to the group after commit
        msg = await sync_to_async(send_message)(consultation, self.user, content)
        await self.send(json.dumps({"type": "ack", "ok": True, "messageId": msg.id}))

    async def _handle_read(self, data: dict):
        up_to = data.get("upToMessageId")
        if up_to is not None and (isinstance(up_to, bool) or not isinstance(up_to, int)):
            raise ValueError("invalid_message_id")

        consultation = await sync_to_async(_load_consultation)(self.consultation_id)
        updated = await sync_to_async(mark_read)(self.user, consultation, up_to)
        await self.send(json.dumps({"type": "ack", "ok": True, "updated": updated}))
        if updated:
            await self.channel_layer.group_send(self.group_name, {
                "type": "chat.read",
                "payload": {"consultationId": self.consultation_id, "readerId": self.user.id, "upToMessageId": up_to},
            })

    # group_send({"type": "chat.message", "payload": {...}}) lands here
    async def chat_message(self, event):
        await self.send(json.dumps({"type": "message", **event.get("payload", {})}))

    async def chat_read(self, event):
        await self.send(json.dumps({"type": "read", **event.get("payload", {})}))
