from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Consultation, MedicalRecord, PassportVerification
from ..permissions import IsAdminRole
from ..serializers.documents import (
    RecordUploadSerializer,
    PassportSubmitSerializer,
    PassportReviewSerializer,
    PassportListQuerySerializer,
)
from ..services import documents


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def medical_records(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': documents.list_records(request.user)})

    s = RecordUploadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    consultation = None
    if v.get('consultationId'):
        try:
            consultation = Consultation.objects.get(id=v['consultationId'])
        except Consultation.DoesNotExist:
            return Response({'ok': False, 'detail': 'Consultation not found'}, status=404)
    try:
        record = documents.upload_record(request.user, v['file'], record_type=v.get('recordType', ''),
                                         description=v.get('description', ''), consultation=consultation)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': documents.record_to_dict(record)}, status=201)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def medical_record_delete(request, record_id: int):
    try:
        record = MedicalRecord.objects.get(id=record_id)
    except MedicalRecord.DoesNotExist:
        return Response({'ok': False, 'detail': 'Record not found'}, status=404)
    try:
        documents.delete_record(request.user, record)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=403)
    return Response({'ok': True})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def passport_verification(request):
    if request.method == 'GET':
        v = documents.latest_verification(request.user)
        return Response({'ok': True, 'data': documents.verification_to_dict(v) if v else None})

    s = PassportSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    try:
        verification = documents.submit_passport(
            request.user,
            passport_image=v['passportImage'],
            selfie_image=v['selfieImage'],
            passport_number=v['passportNumber'],
            passport_country=v['passportCountry'],
            passport_expiry=v['passportExpiry'],
        )
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': documents.verification_to_dict(verification)}, status=201)


@api_view(['GET'])
@permission_classes([IsAdminRole])
def admin_passport_list(request):
    q = PassportListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': documents.list_verifications(q.validated_data.get('status'))})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_passport_review(request, verification_id: int):
    s = PassportReviewSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        v = PassportVerification.objects.get(id=verification_id)
    except PassportVerification.DoesNotExist:
        return Response({'ok': False, 'detail': 'Verification not found'}, status=404)
    try:
        documents.review_passport(request.user, v, s.validated_data['status'], s.validated_data.get('note', ''))
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': documents.verification_to_dict(v)})
