from django.core.exceptions import ObjectDoesNotExist
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response


class PaymentProviderError(Exception):
    """A payment provider answered with an error or could not be reached."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        if isinstance(exc, PermissionError):
            return Response({'ok': False, 'error': {'code': 'forbidden', 'message': str(exc)}}, status=403)
        if isinstance(exc, (LookupError, ObjectDoesNotExist)):
            return Response({'ok': False, 'error': {'code': 'not_found', 'message': str(exc)}}, status=404)
        if isinstance(exc, PaymentProviderError):
            return Response({'ok': False, 'error': {'code': 'payment_provider_error', 'message': str(exc)}}, status=502)
        if isinstance(exc, ValueError):
            return Response({'ok': False, 'error': {'code': 'invalid', 'message': str(exc)}}, status=400)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
