from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.accounts.serializers import UserMinimalSerializer
from apps.core.responses import api_response

from .serializers import (
    FriendRequestSerializer,
    SendFriendRequestSerializer,
    RespondFriendRequestSerializer,
)
from .services import (
    send_friend_request,
    accept_friend_request,
    decline_friend_request,
    remove_friend,
    get_friends,
    get_pending_requests,
)


@extend_schema(responses={200: UserMinimalSerializer(many=True)}, tags=['friends'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def friend_list(request):
    return api_response(UserMinimalSerializer(get_friends(request.user), many=True).data)


@extend_schema(responses={200: FriendRequestSerializer(many=True)}, tags=['friends'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pending_requests(request):
    """Pending friend requests sent to the current user."""
    requests = get_pending_requests(request.user)
    return api_response(FriendRequestSerializer(requests, many=True).data)


@extend_schema(request=SendFriendRequestSerializer, responses={201: FriendRequestSerializer}, tags=['friends'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_request(request):
    serializer = SendFriendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    friend_request = send_friend_request(sender=request.user, email=serializer.validated_data['email'])

    return api_response(
        FriendRequestSerializer(friend_request).data,
        message='Friend request sent',
        status=status.HTTP_201_CREATED,
    )


@extend_schema(request=RespondFriendRequestSerializer, tags=['friends'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accept_request(request):
    serializer = RespondFriendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    accept_friend_request(receiver=request.user, request_id=serializer.validated_data['request_id'])
    return api_response(message='Friend request accepted')


@extend_schema(request=RespondFriendRequestSerializer, tags=['friends'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def decline_request(request):
    serializer = RespondFriendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    decline_friend_request(receiver=request.user, request_id=serializer.validated_data['request_id'])
    return api_response(message='Friend request declined')


@extend_schema(tags=['friends'])
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def unfriend(request, friend_id):
    remove_friend(user=request.user, friend_id=friend_id)
    return api_response(message='Friend removed')
