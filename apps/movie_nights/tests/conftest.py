from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.movies.models import GroupWatchlistEntry, Movie
from apps.movie_nights.models import MovieNight


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def make_user(email, name):
    return User.objects.create_user(email=email, password='TestPass123!', name=name)


@pytest.fixture
def owner(db):
    return make_user('owner@example.com', 'Night Owner')


@pytest.fixture
def moderator(db):
    return make_user('moderator@example.com', 'Night Moderator')


@pytest.fixture
def member(db):
    return make_user('member@example.com', 'Night Member')


@pytest.fixture
def second_member(db):
    return make_user('member2@example.com', 'Second Member')


@pytest.fixture
def outsider(db):
    return make_user('outsider@example.com', 'Outsider')


@pytest.fixture
def owner_client(owner):
    return client_for(owner)


@pytest.fixture
def moderator_client(moderator):
    return client_for(moderator)


@pytest.fixture
def member_client(member):
    return client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def group(db, owner, moderator, member, second_member):
    """Group with owner, moderator and two members."""
    group = Group.objects.create(name='Friday Film Club', created_by=owner)
    GroupMembership.objects.create(user=owner, group=group, role=GroupRole.OWNER)
    GroupMembership.objects.create(user=moderator, group=group, role=GroupRole.MODERATOR)
    GroupMembership.objects.create(user=member, group=group, role=GroupRole.MEMBER)
    GroupMembership.objects.create(user=second_member, group=group, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def movie(db):
    return Movie.objects.create(title='Heat', release_year=1995, rating='8.3')


@pytest.fixture
def listed_movie(group, movie, owner):
    """Movie already on the group watchlist."""
    GroupWatchlistEntry.objects.create(group=group, movie=movie, added_by=owner)
    return movie


@pytest.fixture
def start_at():
    """Start time two days ahead, second precision."""
    return (timezone.now() + timedelta(days=2)).replace(microsecond=0)


@pytest.fixture
def movie_night(group, owner, start_at):
    return MovieNight.objects.create(group=group, scheduled_date=start_at, created_by=owner)


@pytest.fixture
def rsvp_night(group, owner, start_at):
    """Night with an RSVP deadline two hours before start and a 60 minute reminder."""
    return MovieNight.objects.create(
        group=group,
        scheduled_date=start_at,
        rsvp_deadline=start_at - timedelta(hours=2),
        reminder_minutes_before=60,
        created_by=owner,
    )
