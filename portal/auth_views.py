"""
Authentication views.

Username (or email) and password login returning both the legacy DRF
token and a simplejwt pair, self-registration for patients and doctors,
and the JWT refresh/logout endpoints.  Kept apart from
``portal.authentication`` so DRF can import the authentication class
without pulling in the views.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from portal.serializers.auth import LoginSerializer, RegisterSerializer
from portal.services.audit import log_action

logger = logging.getLogger(__name__)

User = get_user_model()


def user_payload(user) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'name': user.get_full_name() or user.username,
        'role': user.role,
    }


def issue_tokens(user) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
    }


def _resolve_username(login: str) -> str:
    if '@' in login:
        match = User.objects.filter(email__iexact=login).only('username').first()
        if match:
            return match.username
    return login


# ---------------------------------------------------------------------
# Username/password login (role never read from the request)
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    login = s.validated_data['username']
    password = s.validated_data['password']

    user = authenticate(request, username=_resolve_username(login), password=password)
    ip = request.META.get('REMOTE_ADDR')
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'username': login, 'ip': ip})
        logger.info("failed login for %s from %s", login, ip)
        return Response({'ok': False, 'detail': 'Invalid username or password'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})

    payload: dict[str, object] = {'ok': True, 'role': user.role, 'user': user_payload(user)}
    payload.update(issue_tokens(user))
    return Response(payload, status=200)

# ScopedRateThrottle reads throttle_scope from the wrapped view class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    with transaction.atomic():
        user = User.objects.create_user(
            username=v['username'],
            email=v['email'],
            password=v['password'],
            first_name=v['name'],
            role=v.get('role') or User.ROLE_PATIENT,
            phone=v.get('phone', ''),
            country=v.get('country', ''),
            country_code=v.get('countryCode', ''),
        )
        log_action(user=user, action='register', object_type='user', object_id=user.id, detail={'role': user.role})
    payload: dict[str, object] = {'ok': True, 'role': user.role, 'user': user_payload(user)}
    payload.update(issue_tokens(user))
    return Response(payload, status=201)

register_view.cls.throttle_scope = 'register'


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response):
        data = dict(resp.data)
        if 'access' in data and 'jwt_access' not in data:
            data['jwt_access'] = data.pop('access')
        return Response(data, status=resp.status_code)
    return resp


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist current user's refresh tokens (all or a given one)."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError as e:
            return Response({'ok': False, 'detail': str(e)}, status=400)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response({'ok': True, 'blacklisted': count})
