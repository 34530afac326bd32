"""
Movie nights app services layer.

Scheduling, RSVP availability, reminder dispatch and calendar export.
"""

from .exceptions import (
    MovieNightNotFoundError,
    InvalidScheduleError,
    ChosenMovieNotInWatchlistError,
    InvalidStatusTransitionError,
    MovieNightClosedError,
    MovieNightLockedError,
)

from .scheduling import (
    parse_schedule_datetime,
    normalize_schedule_value,
    validate_reminder_minutes,
    validate_rsvp_settings,
    create_movie_night,
    update_movie_night,
    set_movie_night_lock,
    get_group_movie_nights,
    get_movie_night,
)

from .reminders import (
    ReminderResult,
    get_reminder_trigger_time,
    get_pending_member_ids,
    send_reminder_for_night,
    get_due_reminder_night_ids,
    dispatch_due_reminders,
)

from .availability import (
    AvailabilitySummary,
    set_availability,
    get_availability,
)

from .ics import (
    build_movie_night_ics,
    escape_ics_text,
    movie_night_to_ics,
    to_ics_filename,
    to_utc_timestamp,
)


__all__ = [
    # Exceptions
    'MovieNightNotFoundError',
    'InvalidScheduleError',
    'ChosenMovieNotInWatchlistError',
    'InvalidStatusTransitionError',
    'MovieNightClosedError',
    'MovieNightLockedError',

    # Scheduling
    'parse_schedule_datetime',
    'normalize_schedule_value',
    'validate_reminder_minutes',
    'validate_rsvp_settings',
    'create_movie_night',
    'update_movie_night',
    'set_movie_night_lock',
    'get_group_movie_nights',
    'get_movie_night',

    # Reminders
    'ReminderResult',
    'get_reminder_trigger_time',
    'get_pending_member_ids',
    'send_reminder_for_night',
    'get_due_reminder_night_ids',
    'dispatch_due_reminders',

    # Availability
    'AvailabilitySummary',
    'set_availability',
    'get_availability',

    # Calendar
    'build_movie_night_ics',
    'escape_ics_text',
    'movie_night_to_ics',
    'to_ics_filename',
    'to_utc_timestamp',
]
