from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import ActivityEvent, GroupActivity
from .services import parse_activity_metadata


class GroupActivitySerializer(serializers.ModelSerializer):
    actor = UserMinimalSerializer(read_only=True)
    target_user = UserMinimalSerializer(read_only=True)
    metadata = serializers.SerializerMethodField()

    class Meta:
        model = GroupActivity
        fields = [
            'id',
            'group',
            'event_type',
            'actor',
            'target_user',
            'reference_id',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields

    def get_metadata(self, obj):
        return parse_activity_metadata(obj.metadata_json)


class TimelineQuerySerializer(serializers.Serializer):
    event_type = serializers.ChoiceField(choices=ActivityEvent.choices, required=False)
    actor_id = serializers.UUIDField(required=False)
