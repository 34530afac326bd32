import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.notifications.models import Notification, NotificationType


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(email='reader@example.com', password='TestPass123!', name='Reader')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='writer@example.com', password='TestPass123!', name='Writer')


@pytest.fixture
def quiet_user(db):
    """User with every notification category switched off."""
    return User.objects.create_user(
        email='quiet@example.com',
        password='TestPass123!',
        name='Quiet',
        email_notifications=False,
        group_notifications=False,
        vote_notifications=False,
    )


@pytest.fixture
def authenticated_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def group(db, user, other_user, quiet_user):
    group = Group.objects.create(name='Noir Nights', created_by=user)
    GroupMembership.objects.create(user=user, group=group, role=GroupRole.OWNER)
    GroupMembership.objects.create(user=other_user, group=group, role=GroupRole.MEMBER)
    GroupMembership.objects.create(user=quiet_user, group=group, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def inbox(user, other_user):
    """Two unread and one read notification for ``user``, one for someone else."""
    return [
        Notification.objects.create(user=user, type=NotificationType.MOVIE_NIGHT, title='A', message='First'),
        Notification.objects.create(user=user, type=NotificationType.GROUP_INVITE, title='B', message='Second'),
        Notification.objects.create(
            user=user, type=NotificationType.MOVIE_NIGHT, title='C', message='Third', is_read=True,
        ),
        Notification.objects.create(user=other_user, type=NotificationType.MOVIE_NIGHT, title='D', message='Other'),
    ]
