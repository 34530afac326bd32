import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_owner(db):
    """Create and return a test user (group owner)."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        name='Group Owner',
    )


@pytest.fixture
def moderator_user(db):
    """Create and return a moderator user."""
    return User.objects.create_user(
        email='moderator@example.com',
        password='TestPass123!',
        name='Group Moderator',
    )


@pytest.fixture
def member_user(db):
    """Create and return a member user."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        name='Group Member',
    )


@pytest.fixture
def second_member(db):
    """Create and return a second plain member."""
    return User.objects.create_user(
        email='member2@example.com',
        password='TestPass123!',
        name='Second Member',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other User',
    )


@pytest.fixture
def owner_client(group_owner):
    """Return API client authenticated as group owner."""
    return client_for(group_owner)


@pytest.fixture
def moderator_client(moderator_user):
    """Return API client authenticated as group moderator."""
    return client_for(moderator_user)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as group member."""
    return client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    """Return API client authenticated as non-member user."""
    return client_for(group_other_user)


@pytest.fixture
def group(db, group_owner):
    """Create and return a test group with owner membership."""
    group = Group.objects.create(name='Friday Film Club', created_by=group_owner)
    GroupMembership.objects.create(
        user=group_owner,
        group=group,
        role=GroupRole.OWNER,
    )
    return group


@pytest.fixture
def group_with_members(group, moderator_user, member_user, second_member):
    """Group with owner, moderator, and two members."""
    GroupMembership.objects.create(
        user=moderator_user,
        group=group,
        role=GroupRole.MODERATOR,
    )
    GroupMembership.objects.create(
        user=member_user,
        group=group,
        role=GroupRole.MEMBER,
    )
    GroupMembership.objects.create(
        user=second_member,
        group=group,
        role=GroupRole.MEMBER,
    )
    return group


def owner_count(group):
    return GroupMembership.objects.filter(group=group, role=GroupRole.OWNER).count()
