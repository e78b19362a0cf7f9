"""
Profile endpoints for the signed-in user.
"""
from __future__ import annotations

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..serializers.auth import ProfileUpdateSerializer, ChangePasswordSerializer
from ..services.audit import log_action
from ..services.uploads import validate_image


def profile_payload(user) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'name': user.get_full_name() or user.username,
        'role': user.role,
        'phone': user.phone,
        'country': user.country,
        'countryCode': user.country_code,
        'avatarUrl': user.avatar.url if user.avatar else None,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_profile(request):
    return Response({'ok': True, 'data': profile_payload(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def user_profile_update(request):
    s = ProfileUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    user = request.user
    fields = []
    for key, attr in (('name', 'first_name'), ('phone', 'phone'), ('country', 'country'), ('countryCode', 'country_code')):
        if key in v:
            setattr(user, attr, v[key])
            fields.append(attr)
    if fields:
        user.save(update_fields=fields)
        log_action(user=user, action='profile_update', object_type='user', object_id=user.id, detail={'fields': fields})
    return Response({'ok': True, 'data': profile_payload(user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def user_avatar_upload(request):
    f = request.FILES.get('avatar')
    try:
        validate_image(f)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    user = request.user
    if user.avatar:
        user.avatar.delete(save=False)
    user.avatar = f
    user.save(update_fields=['avatar'])
    log_action(user=user, action='avatar_upload', object_type='user', object_id=user.id)
    return Response({'ok': True, 'avatarUrl': user.avatar.url})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    s = ChangePasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = request.user
    if not user.check_password(s.validated_data['oldPassword']):
        return Response({'ok': False, 'detail': 'Current password is incorrect'}, status=400)
    try:
        validate_password(s.validated_data['newPassword'], user=user)
    except ValidationError as e:
        return Response({'ok': False, 'detail': ' '.join(e.messages)}, status=400)
    user.set_password(s.validated_data['newPassword'])
    user.save(update_fields=['password'])
    log_action(user=user, action='password_change', object_type='user', object_id=user.id)
    return Response({'ok': True})
