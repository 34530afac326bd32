from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.pagination import StandardPagination
from apps.groups.permissions import require_membership

from .serializers import GroupActivitySerializer, TimelineQuerySerializer
from .services import get_group_timeline


@extend_schema(
    parameters=[
        OpenApiParameter('event_type', OpenApiTypes.STR, description='Filter by event type'),
        OpenApiParameter('actor_id', OpenApiTypes.UUID, description='Filter by acting user'),
        OpenApiParameter('page', OpenApiTypes.INT),
        OpenApiParameter('limit', OpenApiTypes.INT),
    ],
    responses={200: GroupActivitySerializer(many=True)},
    description="Paginated activity timeline of a group (members only).",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, require_membership('group_pk')])
def group_activity(request, group_pk):
    """Group activity timeline - thin HTTP handler."""
    query = TimelineQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    events = get_group_timeline(
        group_id=group_pk,
        event_type=query.validated_data.get('event_type'),
        actor_id=query.validated_data.get('actor_id'),
    )

    paginator = StandardPagination()
    page = paginator.paginate_queryset(events, request)
    serializer = GroupActivitySerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)
