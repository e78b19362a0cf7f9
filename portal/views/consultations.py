from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Consultation, Doctor, Treatment
from ..serializers.consultations import (
    ConsultationCreateSerializer,
    ConsultationStatusSerializer,
    ConsultationReportSerializer,
)
from ..services.consultations import (
    book_consultation,
    list_consultations,
    upload_report,
    update_status,
    consultation_to_dict,
)


def _get_consultation(consultation_id: int) -> Consultation:
    return Consultation.objects.select_related('doctor', 'doctor__hospital', 'treatment', 'user').get(id=consultation_id)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def consultations(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': list_consultations(request.user)})

    s = ConsultationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    try:
        doctor = Doctor.objects.get(id=v['doctorId'])
    except Doctor.DoesNotExist:
        return Response({'ok': False, 'detail': 'Doctor not found'}, status=404)
    treatment = None
    if v.get('treatmentId'):
        try:
            treatment = Treatment.objects.get(id=v['treatmentId'])
        except Treatment.DoesNotExist:
            return Response({'ok': False, 'detail': 'Treatment not found'}, status=404)
    try:
        c = book_consultation(
            request.user, doctor, treatment=treatment,
            consultation_date=v.get('consultationDate'),
            notes=v.get('notes', ''), medical_condition=v.get('medicalCondition', ''),
        )
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    return Response({'ok': True, 'data': consultation_to_dict(c)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def consultation_status(request, consultation_id: int):
    s = ConsultationStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        c = _get_consultation(consultation_id)
    except Consultation.DoesNotExist:
        return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        update_status(request.user, c, s.validated_data['status'])
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': consultation_to_dict(c, with_patient=True)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def consultation_report(request, consultation_id: int):
    s = ConsultationReportSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        c = _get_consultation(consultation_id)
    except Consultation.DoesNotExist:
        return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        upload_report(request.user, c, s.validated_data['file'], s.validated_data.get('notes'))
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': consultation_to_dict(c)})
