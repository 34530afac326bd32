import pytest
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole


@pytest.fixture
def owner(db):
    return User.objects.create_user(email='owner@example.com', password='TestPass123!', name='Owner')


@pytest.fixture
def member(db):
    return User.objects.create_user(email='member@example.com', password='TestPass123!', name='Member')


@pytest.fixture
def group(owner, member):
    group = Group.objects.create(name='Matinee Crew', created_by=owner)
    GroupMembership.objects.create(user=owner, group=group, role=GroupRole.OWNER)
    GroupMembership.objects.create(user=member, group=group, role=GroupRole.MEMBER)
    return group
