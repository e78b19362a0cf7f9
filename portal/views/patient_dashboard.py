from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..services.analytics import patient_overview


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_dashboard(request):
    return Response({'ok': True, 'data': patient_overview(request.user)})
