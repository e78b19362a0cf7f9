"""
Administrative dashboard endpoints.

Revenue totals, recent bookings and the user list for administrators,
plus the doctor verification switch and the audit trail.  Only the
``admin`` role (or a superuser) may access these endpoints.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Doctor
from ..permissions import IsAdminRole
from ..serializers.admin import AuditQuerySerializer
from ..serializers.doctors import DoctorVerifySerializer
from ..services.analytics import admin_overview, list_users
from ..services.audit import recent_events
from ..services.catalog import doctor_to_dict
from ..services.doctors import set_verified


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    """Totals summed from the analytics ledger and the 10 latest bookings."""
    return Response({'ok': True, 'data': admin_overview()})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_users(request):
    return Response({'ok': True, 'data': list_users()})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_verify_doctor(request, doctor_id: int):
    s = DoctorVerifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        doctor = Doctor.objects.select_related('hospital').get(id=doctor_id)
    except Doctor.DoesNotExist:
        return Response({'ok': False, 'detail': 'Doctor not found'}, status=404)
    set_verified(request.user, doctor, s.validated_data['verified'])
    return Response({'ok': True, 'data': doctor_to_dict(doctor)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_audit(request):
    q = AuditQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    events = recent_events(action=v.get('action'), object_type=v.get('objectType'), object_id=v.get('objectId'),
                           limit=v.get('limit', 100))
    return Response({'ok': True, 'data': events})
