from rest_framework import status as http_status
from rest_framework.response import Response


def api_response(data=None, message=None, status=http_status.HTTP_200_OK):
    """Success envelope used by every mutating endpoint."""
    payload = {'success': True}
    if message:
        payload['message'] = message
    if data is not None:
        payload['data'] = data
    return Response(payload, status=status)
