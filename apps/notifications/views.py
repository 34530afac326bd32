from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.pagination import StandardPagination
from apps.core.responses import api_response

from .serializers import NotificationSerializer
from .services import (
    get_user_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_read,
)


@extend_schema(
    responses={200: NotificationSerializer(many=True)},
    description="Paginated notifications of the current user, newest first.",
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    notifications = get_user_notifications(request.user)

    paginator = StandardPagination()
    page = paginator.paginate_queryset(notifications, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(tags=['notifications'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    return api_response({'count': get_unread_count(request.user)})


@extend_schema(request=None, tags=['notifications'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_read(request, notification_id):
    mark_notification_read(user=request.user, notification_id=notification_id)
    return api_response(message='Notification marked as read')


@extend_schema(request=None, tags=['notifications'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_all_as_read(request):
    count = mark_all_read(request.user)
    return api_response({'updated': count}, message='All notifications marked as read')
