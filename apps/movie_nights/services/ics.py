"""
iCalendar (RFC 5545) export of movie nights.
"""

import re
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional

from django.conf import settings
from django.utils import timezone

from apps.movie_nights.models import MovieNight


PRODUCT_ID = '-//MovieNightPlanner//Movie Nights//EN'
UID_DOMAIN = 'movienightplanner.local'
FOLD_WIDTH = 73


def to_utc_timestamp(value: datetime) -> str:
    """``20260212T201530Z`` form of an aware (or server-local naive) datetime."""
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value.astimezone(dt_timezone.utc).strftime('%Y%m%dT%H%M%SZ')


def escape_ics_text(value) -> str:
    text = str(value or '')
    return (
        text.replace('\\', '\\\\')
        .replace('\r\n', '\\n')
        .replace('\n', '\\n')
        .replace(';', '\\;')
        .replace(',', '\\,')
    )


def fold_ics_line(line: str) -> str:
    """Split long content lines; continuation lines start with a space."""
    if len(line) <= FOLD_WIDTH:
        return line
    chunks = [line[i:i + FOLD_WIDTH] for i in range(0, len(line), FOLD_WIDTH)]
    return '\r\n '.join(chunks)


def build_movie_night_ics(
    *,
    uid: str,
    start_at: datetime,
    end_at: Optional[datetime] = None,
    created_at: Optional[datetime] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    calendar_name: Optional[str] = None
) -> str:
    """Build a single-event VCALENDAR document with CRLF line endings."""
    if end_at is None:
        end_at = start_at + timedelta(hours=settings.MOVIE_NIGHT_DEFAULT_DURATION_HOURS)

    lines = [
        'BEGIN:VCALENDAR',
        'VERSION:2.0',
        f'PRODID:{PRODUCT_ID}',
        'CALSCALE:GREGORIAN',
        'METHOD:PUBLISH',
        f'X-WR-CALNAME:{escape_ics_text(calendar_name or "Movie Nights")}',
        'BEGIN:VEVENT',
        f'UID:{escape_ics_text(uid)}',
        f'DTSTAMP:{to_utc_timestamp(created_at or timezone.now())}',
        f'DTSTART:{to_utc_timestamp(start_at)}',
        f'DTEND:{to_utc_timestamp(end_at)}',
        f'SUMMARY:{escape_ics_text(summary or "Movie Night")}',
        f'DESCRIPTION:{escape_ics_text(description or "Movie night with your group.")}',
        'STATUS:CONFIRMED',
        'TRANSP:OPAQUE',
        'END:VEVENT',
        'END:VCALENDAR',
    ]
    return '\r\n'.join(fold_ics_line(line) for line in lines) + '\r\n'


def slugify_for_filename(value) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', str(value or '').lower()).strip('-')
    return slug[:40].rstrip('-')


def to_ics_filename(group_name: str, start_at: datetime, night_id) -> str:
    """Deterministic ``<group-slug>-<YYYYMMDD>-<id>.ics`` filename."""
    slug = slugify_for_filename(group_name) or 'movie-night'
    date_token = to_utc_timestamp(start_at)[:8]
    id_token = str(night_id).replace('-', '')[:8] or 'event'
    return f'{slug}-{date_token}-{id_token}.ics'


def movie_night_to_ics(night: MovieNight) -> str:
    """Calendar document for a stored movie night."""
    movie_title = night.chosen_movie.title if night.chosen_movie_id else None
    summary = f'Movie Night: {movie_title}' if movie_title else f'{night.group.name} Movie Night'
    description = f'Movie night with {night.group.name}.'
    if movie_title:
        description += f' Watching {movie_title}.'

    return build_movie_night_ics(
        uid=f'movie-night-{night.id}@{UID_DOMAIN}',
        start_at=night.scheduled_date,
        created_at=night.created_at,
        summary=summary,
        description=description,
        calendar_name=f'{night.group.name} Movie Nights',
    )
