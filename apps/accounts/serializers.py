from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'display_name',
            'email_notifications',
            'group_notifications',
            'vote_notifications',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class NotificationPreferencesSerializer(serializers.Serializer):
    """Partial update of notification preference flags."""

    email_notifications = serializers.BooleanField(required=False)
    group_notifications = serializers.BooleanField(required=False)
    vote_notifications = serializers.BooleanField(required=False)


class DeleteAccountSerializer(serializers.Serializer):
    password = serializers.CharField(required=True, style={'input_type': 'password'})
    confirm = serializers.BooleanField(required=True)

    def validate_confirm(self, value):
        if not value:
            raise serializers.ValidationError('Confirmation required')
        return value
