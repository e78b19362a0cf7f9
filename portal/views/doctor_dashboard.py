from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsDoctorRole
from ..serializers.doctors import DoctorProfileUpdateSerializer
from ..services.catalog import doctor_to_dict
from ..services.consultations import list_consultations
from ..services.doctors import get_or_create_profile, update_profile


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def doctor_profile(request):
    """GET creates the profile on first visit; POST updates editable fields."""
    if request.method == 'GET':
        doctor = get_or_create_profile(request.user)
        return Response({'ok': True, 'data': doctor_to_dict(doctor)})

    s = DoctorProfileUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = update_profile(request.user, s.model_changes())
    return Response({'ok': True, 'data': doctor_to_dict(doctor)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def doctor_consultations(request):
    get_or_create_profile(request.user)
    return Response({'ok': True, 'data': list_consultations(request.user)})
