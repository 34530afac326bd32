from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import FriendRequest


class FriendRequestSerializer(serializers.ModelSerializer):
    sender = UserMinimalSerializer(read_only=True)

    class Meta:
        model = FriendRequest
        fields = ['id', 'sender', 'status', 'requested_at', 'responded_at']
        read_only_fields = fields


class SendFriendRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class RespondFriendRequestSerializer(serializers.Serializer):
    request_id = serializers.UUIDField()
