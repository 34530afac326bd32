from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.core.responses import api_response

from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    NotificationPreferencesSerializer,
    DeleteAccountSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_notification_preferences,
    soft_delete_account,
)


class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
        name=serializer.validated_data.get('name', ''),
    )

    return api_response(
        {'user': UserSerializer(user).data, 'tokens': _tokens_for(user)},
        message='Registration successful',
        status=status.HTTP_201_CREATED,
    )


@extend_schema(
    request=UserLoginSerializer,
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
    )

    return api_response(
        {'user': UserSerializer(user).data, 'tokens': _tokens_for(user)},
        message='Login successful',
    )


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=NotificationPreferencesSerializer,
    description="Update the current user's notification preferences.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_preferences(request):
    """Update notification preferences."""
    serializer = NotificationPreferencesSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = update_notification_preferences(user_id=request.user.id, **serializer.validated_data)
    return api_response(UserSerializer(user).data, message='Preferences updated')


@extend_schema(
    request=DeleteAccountSerializer,
    description="Soft-delete the current account.",
    tags=['auth'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    """Soft-delete the current account after password confirmation."""
    serializer = DeleteAccountSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    soft_delete_account(user_id=request.user.id, password=serializer.validated_data['password'])
    return api_response(message='Account deleted successfully')
