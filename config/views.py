from django.db import DatabaseError, connection
from django.http import JsonResponse

from apps.core.schema import get_schema_capabilities


def health_check(request):
    """Liveness plus database reachability and schema version."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        schema = get_schema_capabilities().version.value
    except DatabaseError:
        return JsonResponse({'status': 'unhealthy', 'database': 'unreachable'}, status=503)

    return JsonResponse({'status': 'ok', 'database': 'ok', 'schema': schema})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'success': False,
        'error': 'Not found',
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'success': False,
        'error': 'Internal server error',
    }, status=500)
