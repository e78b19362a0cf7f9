import json

import pytest
from asgiref.sync import async_to_sync
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.urls import path

from portal.models import ChatMessage, Consultation
from portal.realtime.chat_consumers import ChatConsumer

pytestmark = pytest.mark.django_db

application = URLRouter([path("ws/chat/<int:consultation_id>/", ChatConsumer.as_asgi())])


@pytest.fixture
def consultation(patient, doctor):
    return Consultation.objects.create(user=patient, doctor=doctor)


def _communicator(user, consultation_id):
    comm = WebsocketCommunicator(application, f"/ws/chat/{consultation_id}/")
    comm.scope["user"] = user
    return comm


def test_outsider_is_refused(other_patient, consultation):
    async def run():
        comm = _communicator(other_patient, consultation.id)
        connected, code = await comm.connect()
        return connected, code
    assert async_to_sync(run)() == (False, 4003)


def test_unknown_consultation(patient):
    async def run():
        return await _communicator(patient, 999999).connect()
    assert async_to_sync(run)() == (False, 4004)


def test_send_and_error_frames(patient, consultation):
    async def run():
        comm = _communicator(patient, consultation.id)
        await comm.connect()
        await comm.send_to(text_data=json.dumps({"type": "send", "content": "Is the hotel near the hospital?"}))
        ack = await comm.receive_json_from()
        await comm.send_to(text_data="not json")
        bad_json = await comm.receive_json_from()
        await comm.send_to(text_data=json.dumps({"type": "send", "content": "   "}))
        empty = await comm.receive_json_from()
        await comm.send_to(text_data=json.dumps({"type": "typing"}))
        unsupported = await comm.receive_json_from()
        await comm.disconnect()
        return ack, bad_json, empty, unsupported

    ack, bad_json, empty, unsupported = async_to_sync(run)()
    assert ack["type"] == "ack"
    assert ack["messageId"] == ChatMessage.objects.get().id
    assert bad_json == {"type": "error", "code": 4000, "message": "invalid_json"}
    assert empty["code"] == 4008
    assert empty["message"] == "empty_message"
    assert unsupported["code"] == 4002


def test_read_receipt_reaches_group(patient, doctor_user, consultation):
    ChatMessage.objects.create(consultation=consultation, sender=patient, sender_type='patient', content='hello')

    async def run():
        patient_ws = _communicator(patient, consultation.id)
        doctor_ws = _communicator(doctor_user, consultation.id)
        await patient_ws.connect()
        await doctor_ws.connect()
        await doctor_ws.send_to(text_data=json.dumps({"type": "read"}))
        ack = await doctor_ws.receive_json_from()
        receipt = await patient_ws.receive_json_from()
        await patient_ws.disconnect()
        await doctor_ws.disconnect()
        return ack, receipt

    ack, receipt = async_to_sync(run)()
    assert ack == {"type": "ack", "ok": True, "updated": 1}
    assert receipt["type"] == "read"
    assert receipt["readerId"] == doctor_user.id
    assert ChatMessage.objects.get().read_at is not None


def test_read_frame_rejects_boolean_message_id(patient, doctor_user, consultation):
    ChatMessage.objects.create(consultation=consultation, sender=patient, sender_type='patient', content='hello')

    async def run():
        comm = _communicator(doctor_user, consultation.id)
        await comm.connect()
        await comm.send_to(text_data=json.dumps({"type": "read", "upToMessageId": True}))
        reply = await comm.receive_json_from()
        await comm.disconnect()
        return reply

    assert async_to_sync(run)() == {"type": "error", "code": 4008, "message": "invalid_message_id"}
    assert ChatMessage.objects.get().read_at is None
