"""DRF exception handler producing the ``{success: false, error}`` envelope."""

import logging
import uuid

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Pull the first human readable message out of nested DRF error details."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if message is None:
                continue
            if field in ('non_field_errors', 'detail'):
                return message
            return f"{field}: {message}"
        return None
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = _first_message(value)
            if message is not None:
                return message
        return None
    return str(detail)


def _error_id() -> str:
    return uuid.uuid4().hex[:8]


def _log_server_error(error_id, exc, context):
    request = context.get('request')
    method = getattr(request, 'method', '-')
    path = request.get_full_path() if request is not None else '-'
    request_id = getattr(request, 'id', None)
    logger.error(
        '[%s] %s %s (request %s)', error_id, method, path, request_id,
        exc_info=(type(exc), exc, exc.__traceback__),
    )


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        error_id = _error_id()
        _log_server_error(error_id, exc, context)
        return Response(
            {'success': False, 'error': 'Internal server error', 'errorId': error_id},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if response.status_code >= 500:
        error_id = _error_id()
        _log_server_error(error_id, exc, context)
        response.data = {
            'success': False,
            'error': _first_message(response.data) or 'Internal server error',
            'errorId': error_id,
        }
        return response

    payload = {
        'success': False,
        'error': _first_message(response.data) or 'Request failed',
    }
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        payload['details'] = response.data
    response.data = payload
    return response
