"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice, bob, charlie)
- 1 group (Friday Film Club) with an owner, a moderator and a member
- 8 catalog movies
- A watchlist with votes
- A planned movie night with an RSVP deadline and reminder
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.friends.models import FriendRequest, Friendship
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.movie_nights.models import MovieNight, MovieNightAvailability
from apps.movies.models import GroupWatchlistEntry, Movie, MovieVote
from apps.notifications.models import Notification


SAMPLE_PASSWORD = 'password123'

MOVIES = [
    ('Heat', 1995, '8.3'),
    ('Alien', 1979, '8.5'),
    ('Chinatown', 1974, '8.1'),
    ('Paprika', 2006, '7.7'),
    ('Arrival', 2016, '7.9'),
    ('Ronin', 1998, '7.2'),
    ('The Thing', 1982, '8.2'),
    ('Spirited Away', 2001, '8.6'),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        movies = self.create_movies()
        group = self.create_group(users)
        self.create_watchlist(group, users, movies)
        self.create_movie_night(group, users, movies)
        self.create_friendships(users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        for name in ('alice', 'bob', 'charlie'):
            self.stdout.write(f'  {name}@example.com / {SAMPLE_PASSWORD}')

    def clear_data(self):
        """Clear all data from the database."""
        Notification.objects.all().delete()
        MovieNightAvailability.objects.all().delete()
        MovieNight.objects.all().delete()
        MovieVote.objects.all().delete()
        GroupWatchlistEntry.objects.all().delete()
        GroupMembership.objects.all().delete()
        Group.objects.all().delete()
        Movie.objects.all().delete()
        Friendship.objects.all().delete()
        FriendRequest.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={'name': 'Admin User', 'is_staff': True, 'is_superuser': True},
        )
        admin.set_password('admin123')
        admin.save()

        users = {'admin': admin}
        for key, name in (('alice', 'Alice Reel'), ('bob', 'Bob Projector'), ('charlie', 'Charlie Popcorn')):
            user, _ = User.objects.get_or_create(email=f'{key}@example.com', defaults={'name': name})
            user.set_password(SAMPLE_PASSWORD)
            user.save()
            users[key] = user

        return users

    def create_movies(self):
        self.stdout.write('  Creating movies...')

        movies = {}
        for title, year, rating in MOVIES:
            movie, _ = Movie.objects.get_or_create(
                title=title,
                release_year=year,
                defaults={'rating': Decimal(rating)},
            )
            movies[title] = movie
        return movies

    def create_group(self, users):
        self.stdout.write('  Creating group...')

        group, created = Group.objects.get_or_create(
            name='Friday Film Club',
            created_by=users['alice'],
        )
        if created:
            GroupMembership.objects.create(user=users['alice'], group=group, role=GroupRole.OWNER)
            GroupMembership.objects.create(user=users['bob'], group=group, role=GroupRole.MODERATOR)
            GroupMembership.objects.create(user=users['charlie'], group=group, role=GroupRole.MEMBER)
        return group

    def create_watchlist(self, group, users, movies):
        self.stdout.write('  Creating watchlist and votes...')

        picks = [('Heat', 'alice'), ('Alien', 'bob'), ('Paprika', 'charlie'), ('Arrival', 'alice')]
        for title, adder in picks:
            GroupWatchlistEntry.objects.get_or_create(
                group=group,
                movie=movies[title],
                defaults={'added_by': users[adder]},
            )

        votes = [
            ('alice', 'Heat', 5), ('bob', 'Heat', 4), ('charlie', 'Heat', 3),
            ('alice', 'Alien', 4), ('bob', 'Alien', 5),
            ('charlie', 'Paprika', 5),
        ]
        for voter, title, value in votes:
            MovieVote.objects.update_or_create(
                user=users[voter],
                group=group,
                movie=movies[title],
                defaults={'vote_value': value},
            )

    def create_movie_night(self, group, users, movies):
        self.stdout.write('  Creating movie night...')

        start = (timezone.now() + timedelta(days=3)).replace(hour=20, minute=0, second=0, microsecond=0)
        night, created = MovieNight.objects.get_or_create(
            group=group,
            scheduled_date=start,
            defaults={
                'chosen_movie': movies['Heat'],
                'rsvp_deadline': start - timedelta(hours=6),
                'reminder_minutes_before': 120,
                'created_by': users['alice'],
            },
        )
        if created:
            MovieNightAvailability.objects.create(movie_night=night, user=users['alice'], is_available=True)

    def create_friendships(self, users):
        self.stdout.write('  Creating friendships...')

        Friendship.objects.get_or_create(user=users['alice'], friend=users['bob'])
        Friendship.objects.get_or_create(user=users['bob'], friend=users['alice'])
        FriendRequest.objects.get_or_create(sender=users['charlie'], receiver=users['alice'])
