from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..models import Doctor, Hospital
from ..serializers.catalog import (
    TreatmentQuerySerializer,
    StayQuerySerializer,
    TourPackageQuerySerializer,
    DoctorQuerySerializer,
    HospitalSearchSerializer,
    ReviewSerializer,
    CommunicationRequestSerializer,
)
from ..services import catalog
from ..services.catalog import review_to_dict
from ..services.geo import search_hospitals


@api_view(['GET'])
@permission_classes([AllowAny])
def list_treatments(request):
    # BooleanField reads a missing key in a QueryDict as False
    q = TreatmentQuerySerializer(data=request.query_params.dict())
    q.is_valid(raise_exception=True)
    v = q.validated_data
    data = catalog.list_treatments(q=v.get('q'), category=v.get('category'), city=v.get('city'),
                                   featured=v.get('featured'))
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def list_stays(request):
    q = StayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    data = catalog.list_stays(q=v.get('q'), city=v.get('city'), price_range=v.get('priceRange'))
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def list_tour_packages(request):
    q = TourPackageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    data = catalog.list_tour_packages(q=v.get('q'), city=v.get('city'), category=v.get('category'))
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def list_doctors(request):
    q = DoctorQuerySerializer(data=request.query_params.dict())
    q.is_valid(raise_exception=True)
    v = q.validated_data
    data = catalog.list_doctors(q=v.get('q'), specialization=v.get('specialization'),
                                hospital_id=v.get('hospitalId'), verified=v.get('verified'))
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def doctor_detail(request, doctor_id: int):
    try:
        data = catalog.doctor_detail(doctor_id)
    except Doctor.DoesNotExist:
        return Response({'ok': False, 'detail': 'Doctor not found'}, status=404)
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def hospital_doctors(request, hospital_id: int):
    try:
        data = catalog.hospital_doctors(hospital_id)
    except Hospital.DoesNotExist:
        return Response({'ok': False, 'detail': 'Hospital not found'}, status=404)
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def hospital_search(request):
    q = HospitalSearchSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    try:
        data = search_hospitals(v['city'], v.get('radius'), specialization=v.get('specialization'), q=v.get('q'))
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': data, 'total': len(data)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def doctor_review(request, doctor_id: int):
    s = ReviewSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        doctor = Doctor.objects.get(id=doctor_id)
    except Doctor.DoesNotExist:
        return Response({'ok': False, 'detail': 'Doctor not found'}, status=404)
    try:
        review = catalog.add_review(request.user, doctor, s.validated_data['rating'], s.validated_data.get('comment', ''))
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': review_to_dict(review), 'doctorRating': float(doctor.rating)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def doctor_contact(request, doctor_id: int):
    s = CommunicationRequestSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        doctor = Doctor.objects.get(id=doctor_id)
    except Doctor.DoesNotExist:
        return Response({'ok': False, 'detail': 'Doctor not found'}, status=404)
    try:
        req = catalog.request_communication(request.user, doctor, s.validated_data['message'])
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'requestId': req.id, 'status': req.status}, status=201)
