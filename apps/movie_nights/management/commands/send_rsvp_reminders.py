"""
Management command to send due RSVP reminders.

Meant to run from cron. Listing a group's movie nights also sends its due
reminders, so this only matters for groups nobody is looking at.

Usage:
    python manage.py send_rsvp_reminders
    python manage.py send_rsvp_reminders --group <uuid> --dry-run
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.core.schema import get_schema_capabilities
from apps.movie_nights.models import MovieNight
from apps.movie_nights.services import dispatch_due_reminders, get_due_reminder_night_ids


class Command(BaseCommand):
    help = 'Send RSVP reminders for movie nights whose reminder is due'

    def add_arguments(self, parser):
        parser.add_argument(
            '--group',
            dest='group_id',
            help='Only handle movie nights of this group',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List due reminders without sending them',
        )

    def handle(self, *args, **options):
        group_id = options['group_id']
        dry_run = options['dry_run']

        if not get_schema_capabilities().rsvp_reminders:
            raise CommandError('RSVP reminders require the latest database migration')

        now = timezone.now()
        due_ids = get_due_reminder_night_ids(group_id=group_id, now=now)

        if not due_ids:
            self.stdout.write(self.style.SUCCESS('No RSVP reminders are due.'))
            return

        self.stdout.write(f'\nFound {len(due_ids)} due reminder(s):\n')
        nights = MovieNight.objects.filter(id__in=due_ids).select_related('group').order_by('rsvp_deadline')
        for night in nights:
            self.stdout.write(
                f'  - {night.group.name} | {night.scheduled_date:%Y-%m-%d %H:%M} | Deadline: {night.rsvp_deadline:%Y-%m-%d %H:%M}'
            )

        if dry_run:
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No reminders sent.'))
            return

        results = dispatch_due_reminders(group_id=group_id, now=now)
        sent = [result for result in results if result.sent]
        notified = sum(result.notified for result in sent)

        for result in results:
            if not result.sent:
                self.stdout.write(f'  skipped {result.night_id}: {result.reason}')

        self.stdout.write(
            self.style.SUCCESS(f'\nSent {len(sent)} reminder(s) to {notified} member(s).')
        )
