from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Consultation
from ..serializers.chat import ChatSendSerializer, ChatHistoryQuerySerializer, ChatReadSerializer
from ..services.chat import send_message, list_history, mark_read, message_to_dict


def _get_consultation(consultation_id: int) -> Consultation:
    return Consultation.objects.select_related('doctor').get(id=consultation_id)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([JSONParser, MultiPartParser, FormParser])
def chat_send(request):
    s = ChatSendSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        c = _get_consultation(s.validated_data['consultationId'])
    except Consultation.DoesNotExist:
        return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        msg = send_message(c, request.user, s.validated_data.get('content', ''), file=request.FILES.get('file'))
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'messageId': msg.id, 'data': message_to_dict(msg)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def chat_history(request):
    q = ChatHistoryQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page', 1)
    page_size = min(100, q.validated_data.get('pageSize', 50))
    try:
        c = _get_consultation(q.validated_data['consultationId'])
    except Consultation.DoesNotExist:
        return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        items, total = list_history(request.user, c, page=page, page_size=page_size)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    return Response({'ok': True, 'data': items, 'pagination': {'total': total, 'page': page, 'pageSize': page_size}})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def chat_read(request):
    s = ChatReadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        c = _get_consultation(s.validated_data['consultationId'])
    except Consultation.DoesNotExist:
        return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        n = mark_read(request.user, c, s.validated_data.get('upToMessageId'))
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    return Response({'ok': True, 'updated': n})
