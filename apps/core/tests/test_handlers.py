import pytest
from django.db import DatabaseError
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.test import APIRequestFactory

from apps.core.exceptions import ConflictError, LockedError, NotFoundError, SchemaUnavailableError
from apps.core.middleware import REQUEST_ID_HEADER, RequestIdMiddleware
from apps.core.responses import api_response


factory = APIRequestFactory()


def view_raising(exc):
    @api_view(['GET'])
    @permission_classes([AllowAny])
    def view(request):
        raise exc
    return view


class NameSerializer(serializers.Serializer):
    name = serializers.CharField()


@api_view(['POST'])
@permission_classes([AllowAny])
def validating_view(request):
    NameSerializer(data=request.data).is_valid(raise_exception=True)
    return api_response(message='ok')


class TestExceptionHandler:

    @pytest.mark.parametrize('exc, status_code', [
        (NotFoundError('Group not found'), 404),
        (ConflictError('User is already a member'), 400),
        (LockedError('Movie night is locked'), 423),
    ])
    def test_service_errors(self, exc, status_code):
        response = view_raising(exc)(factory.get('/'))

        assert response.status_code == status_code
        assert response.data == {'success': False, 'error': str(exc.detail)}

    def test_validation_error_has_details(self):
        response = validating_view(factory.post('/', {}, format='json'))

        assert response.status_code == 400
        assert response.data['success'] is False
        assert response.data['error'].startswith('name: ')
        assert 'name' in response.data['details']

    def test_schema_unavailable_gets_error_id(self):
        response = view_raising(SchemaUnavailableError('Activity log requires the latest database migration'))(
            factory.get('/')
        )

        assert response.status_code == 500
        assert response.data['error'] == 'Activity log requires the latest database migration'
        assert len(response.data['errorId']) == 8

    def test_unexpected_error_is_hidden(self):
        response = view_raising(DatabaseError('connection reset'))(factory.get('/'))

        assert response.status_code == 500
        assert response.data['error'] == 'Internal server error'
        assert 'connection reset' not in str(response.data)


class TestResponses:

    def test_envelope_omits_empty_parts(self):
        assert api_response().data == {'success': True}
        assert api_response({'id': 1}, message='Done').data == {
            'success': True,
            'message': 'Done',
            'data': {'id': 1},
        }


class TestRequestIdMiddleware:

    def test_generates_id(self, rf):
        middleware = RequestIdMiddleware(lambda request: api_response())
        request = rf.get('/')

        response = middleware(request)

        assert request.id
        assert response[REQUEST_ID_HEADER] == request.id

    def test_keeps_incoming_id(self, rf):
        middleware = RequestIdMiddleware(lambda request: api_response())

        response = middleware(rf.get('/', HTTP_X_REQUEST_ID='abc123'))

        assert response[REQUEST_ID_HEADER] == 'abc123'
