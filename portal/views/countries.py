from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers.catalog import CountryQuerySerializer
from ..services.countries import dispatch


@api_view(['GET'])
@permission_classes([AllowAny])
def country_data(request):
    """``?action=get-country|get-all-countries|get-hospitals|get-hotels``"""
    q = CountryQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    try:
        data = dispatch(v['action'], v.get('country'), v.get('city'))
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=404)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=400)
    return Response({'ok': True, 'data': data})
