import logging

from django.db import DatabaseError
from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.responses import api_response
from apps.core.schema import require_capability
from apps.groups.models import GroupRole
from apps.groups.permissions import require_membership, require_role

from .serializers import (
    MovieNightSerializer,
    MovieNightWriteSerializer,
    MovieNightLockSerializer,
    SendReminderSerializer,
    ReminderResultSerializer,
    SetAvailabilitySerializer,
    AvailabilitySerializer,
    AvailabilitySummarySerializer,
)
from .services import (
    create_movie_night,
    update_movie_night,
    set_movie_night_lock,
    get_group_movie_nights,
    get_movie_night,
    send_reminder_for_night,
    dispatch_due_reminders,
    set_availability,
    get_availability,
    movie_night_to_ics,
    to_ics_filename,
)

logger = logging.getLogger(__name__)


class MovieNightViewSet(viewsets.ViewSet):
    """
    Movie nights of a group.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Group's movie nights (also sends due RSVP reminders)
    create: Schedule a movie night
    retrieve: Get one movie night
    partial_update: Edit a movie night (moderator+ when locked)
    lock: Lock or unlock (moderator+)
    send_reminder: Send the RSVP reminder now (moderator+)
    availability: Get or set RSVP answers
    calendar: Download an .ics file
    """

    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action in ('lock', 'send_reminder'):
            return [IsAuthenticated(), require_role(GroupRole.MODERATOR, 'group_pk')()]
        return [IsAuthenticated(), require_membership('group_pk')()]

    @extend_schema(responses={200: MovieNightSerializer(many=True)}, tags=['movie-nights'])
    def list(self, request, group_pk=None):
        try:
            dispatch_due_reminders(group_id=group_pk)
        except DatabaseError:
            logger.exception('RSVP reminder dispatch failed for group %s', group_pk)

        nights = get_group_movie_nights(group_id=group_pk)
        return api_response(MovieNightSerializer(nights, many=True).data)

    @extend_schema(request=MovieNightWriteSerializer, responses={201: MovieNightSerializer}, tags=['movie-nights'])
    def create(self, request, group_pk=None):
        serializer = MovieNightWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        night = create_movie_night(
            group_id=group_pk,
            user=request.user,
            scheduled_date=data['scheduled_date'],
            chosen_movie_id=data.get('chosen_movie_id'),
            rsvp_deadline=data.get('rsvp_deadline'),
            reminder_minutes_before=data.get('reminder_minutes_before'),
        )

        return api_response(
            MovieNightSerializer(get_movie_night(group_id=group_pk, night_id=night.id)).data,
            message='Movie night created',
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(responses={200: MovieNightSerializer}, tags=['movie-nights'])
    def retrieve(self, request, group_pk=None, pk=None):
        night = get_movie_night(group_id=group_pk, night_id=pk)
        return api_response(MovieNightSerializer(night).data)

    @extend_schema(request=MovieNightWriteSerializer, responses={200: MovieNightSerializer}, tags=['movie-nights'])
    def partial_update(self, request, group_pk=None, pk=None):
        serializer = MovieNightWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        update_movie_night(
            group_id=group_pk,
            night_id=pk,
            membership=request.membership,
            changes=dict(serializer.validated_data),
        )

        night = get_movie_night(group_id=group_pk, night_id=pk)
        return api_response(MovieNightSerializer(night).data, message='Movie night updated')

    @extend_schema(request=MovieNightLockSerializer, responses={200: MovieNightSerializer}, tags=['movie-nights'])
    def lock(self, request, group_pk=None, pk=None):
        serializer = MovieNightLockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        set_movie_night_lock(
            group_id=group_pk,
            night_id=pk,
            membership=request.membership,
            locked=serializer.validated_data['locked'],
        )

        night = get_movie_night(group_id=group_pk, night_id=pk)
        message = 'Movie night locked' if night.is_locked else 'Movie night unlocked'
        return api_response(MovieNightSerializer(night).data, message=message)

    @extend_schema(request=SendReminderSerializer, responses={200: ReminderResultSerializer}, tags=['movie-nights'])
    def send_reminder(self, request, group_pk=None, pk=None):
        serializer = SendReminderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        require_capability('rsvp_reminders', 'RSVP reminders')
        get_movie_night(group_id=group_pk, night_id=pk)

        result = send_reminder_for_night(
            pk,
            force=serializer.validated_data['force'],
            actor_id=request.user.id,
        )

        message = 'Reminder sent' if result.sent else f'Reminder not sent: {result.reason}'
        return api_response(ReminderResultSerializer(result).data, message=message)

    @extend_schema(
        methods=['GET'],
        responses={200: AvailabilitySummarySerializer},
        tags=['movie-nights'],
    )
    @extend_schema(
        methods=['PUT'],
        request=SetAvailabilitySerializer,
        responses={200: AvailabilitySerializer},
        tags=['movie-nights'],
    )
    def availability(self, request, group_pk=None, pk=None):
        if request.method == 'GET':
            summary = get_availability(group_id=group_pk, night_id=pk)
            return api_response(AvailabilitySummarySerializer(summary).data)

        serializer = SetAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        answer = set_availability(
            group_id=group_pk,
            night_id=pk,
            user=request.user,
            is_available=serializer.validated_data['is_available'],
        )

        return api_response(AvailabilitySerializer(answer).data, message='Availability updated')

    @extend_schema(responses={(200, 'text/calendar'): str}, tags=['movie-nights'])
    def calendar(self, request, group_pk=None, pk=None):
        night = get_movie_night(group_id=group_pk, night_id=pk)

        response = HttpResponse(movie_night_to_ics(night), content_type='text/calendar; charset=utf-8')
        filename = to_ics_filename(night.group.name, night.scheduled_date, night.id)
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
