from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.core.schema import get_schema_capabilities
from apps.movies.serializers import MovieSerializer

from .models import MovieNight, MovieNightAvailability, MovieNightStatus, RSVP_FIELDS
from .services import normalize_schedule_value


class MovieNightSerializer(serializers.ModelSerializer):
    """Movie night; RSVP fields are left out on databases that lack them."""

    chosen_movie = MovieSerializer(read_only=True)
    created_by = UserMinimalSerializer(read_only=True)
    scheduled_date_local = serializers.SerializerMethodField()

    class Meta:
        model = MovieNight
        fields = [
            'id',
            'group',
            'scheduled_date',
            'scheduled_date_local',
            'chosen_movie',
            'status',
            'is_locked',
            'rsvp_deadline',
            'reminder_minutes_before',
            'reminder_sent_at',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_fields(self):
        fields = super().get_fields()
        if not get_schema_capabilities().rsvp_reminders:
            for name in RSVP_FIELDS:
                fields.pop(name, None)
        return fields

    def get_scheduled_date_local(self, obj):
        return normalize_schedule_value(obj.scheduled_date)


class MovieNightWriteSerializer(serializers.Serializer):
    """
    Input for create and partial update.

    Dates stay strings here; the scheduling service parses the accepted
    formats and reports its own errors.
    """

    scheduled_date = serializers.CharField(max_length=64)
    chosen_movie_id = serializers.UUIDField(required=False, allow_null=True)
    rsvp_deadline = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True)
    reminder_minutes_before = serializers.IntegerField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=MovieNightStatus.choices, required=False)


class MovieNightLockSerializer(serializers.Serializer):
    locked = serializers.BooleanField()


class SendReminderSerializer(serializers.Serializer):
    force = serializers.BooleanField(required=False, default=False)


class ReminderResultSerializer(serializers.Serializer):
    night_id = serializers.UUIDField()
    sent = serializers.BooleanField()
    reason = serializers.CharField()
    notified = serializers.IntegerField()


class AvailabilitySerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = MovieNightAvailability
        fields = ['id', 'user', 'is_available', 'responded_at']
        read_only_fields = fields


class SetAvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()


class AvailabilitySummarySerializer(serializers.Serializer):
    responses = AvailabilitySerializer(many=True)
    pending = serializers.SerializerMethodField()
    available_count = serializers.IntegerField()
    unavailable_count = serializers.IntegerField()

    def get_pending(self, obj):
        return [UserMinimalSerializer(member.user).data for member in obj.pending_members]
