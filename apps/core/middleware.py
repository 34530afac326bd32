import uuid


REQUEST_ID_HEADER = 'X-Request-ID'


class RequestIdMiddleware:
    """Attach a correlation id to every request and echo it back."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        response = self.get_response(request)
        response[REQUEST_ID_HEADER] = request.id
        return response
