from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import Group, GroupMembership, GroupRole
from .services import effective_role_for, get_member_role


class GroupSerializer(serializers.ModelSerializer):
    """Group with the caller's effective role and member count."""

    created_by = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'created_by',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        count = getattr(obj, 'member_count', None)
        if count is None:
            count = obj.memberships.filter(user__deleted_at__isnull=True).count()
        return count

    def get_user_role(self, obj):
        role = getattr(obj, 'user_role', None)
        if role is not None:
            return GroupRole(role).value
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return effective_role_for(obj, request.user).value
        return None


class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)


class GroupMemberSerializer(serializers.ModelSerializer):
    """Member with effective role."""

    user = UserMinimalSerializer(read_only=True)
    role = serializers.SerializerMethodField()

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields

    def get_role(self, obj):
        return get_member_role(obj).value


class AddMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ChangeRoleSerializer(serializers.Serializer):
    """Role is parsed by the service so unknown values get the role error."""

    role = serializers.CharField(max_length=20)


class RoleChangeResultSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.CharField()
    previous_role = serializers.CharField(allow_null=True)
    changed = serializers.BooleanField()
    ownership_transferred = serializers.BooleanField()
