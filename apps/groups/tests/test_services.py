import json
from unittest import mock

import pytest
from django.utils import timezone

from apps.accounts.models import User
from apps.activity.models import ActivityEvent, GroupActivity
from apps.core.exceptions import SchemaUnavailableError
from apps.core.schema import SchemaCapabilities, set_schema_capabilities
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.groups.services import (
    AlreadyMemberError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    CannotTargetSelfError,
    GroupNotFoundError,
    InsufficientPermissionsError,
    InvalidGroupNameError,
    InvalidRoleError,
    MemberNotFoundError,
    NotMemberError,
    OwnerCannotLeaveError,
    UserNotFoundError,
    add_member,
    change_member_role,
    create_group,
    delete_group,
    get_group_members,
    get_member_role,
    get_user_groups,
    leave_group,
    remove_member,
    resolve_membership,
)

from .conftest import owner_count


def role_of(group, user):
    return GroupMembership.objects.get(group=group, user=user).role


@pytest.mark.django_db
class TestCreateGroup:
    """Tests for create_group service."""

    def test_create_group_success(self, group_owner, django_capture_on_commit_callbacks):
        """Group, owner membership and activity are created together."""
        with django_capture_on_commit_callbacks(execute=True):
            group = create_group(name='  Horror Nights ', creator=group_owner)

        assert group.name == 'Horror Nights'
        assert group.created_by == group_owner
        assert group.user_role == GroupRole.OWNER
        assert role_of(group, group_owner) == GroupRole.OWNER

        event = GroupActivity.objects.get(group=group)
        assert event.event_type == ActivityEvent.GROUP_CREATED
        assert event.actor == group_owner

    def test_blank_name_rejected(self, group_owner):
        with pytest.raises(InvalidGroupNameError):
            create_group(name='   ', creator=group_owner)
        assert not Group.objects.exists()

    def test_too_long_name_rejected(self, group_owner):
        with pytest.raises(InvalidGroupNameError):
            create_group(name='x' * 201, creator=group_owner)

    def test_activity_failure_does_not_roll_back(self, group_owner, django_capture_on_commit_callbacks):
        """A legacy database without the activity table still creates the group."""
        set_schema_capabilities(SchemaCapabilities(activity_log=False))

        with django_capture_on_commit_callbacks(execute=True):
            group = create_group(name='Docs', creator=group_owner)

        assert Group.objects.filter(id=group.id).exists()
        assert not GroupActivity.objects.exists()

    def test_requires_role_column(self, group_owner):
        set_schema_capabilities(SchemaCapabilities(membership_roles=False))

        with pytest.raises(SchemaUnavailableError) as exc_info:
            create_group(name='Docs', creator=group_owner)

        assert 'requires the latest database migration' in str(exc_info.value.detail)
        assert not Group.objects.exists()


@pytest.mark.django_db
class TestResolveMembership:
    """Tests for the membership context resolver."""

    def test_resolves_stored_role(self, group_with_members, moderator_user):
        membership = resolve_membership(group_id=group_with_members.id, user_id=moderator_user.id)

        assert membership.role == GroupRole.MODERATOR
        assert membership.group_name == group_with_members.name

    def test_non_member_returns_none(self, group, group_other_user):
        assert resolve_membership(group_id=group.id, user_id=group_other_user.id) is None

    def test_deleted_group_returns_none(self, group, group_owner):
        Group.objects.filter(id=group.id).update(deleted_at=timezone.now())
        assert resolve_membership(group_id=group.id, user_id=group_owner.id) is None

    def test_legacy_schema_uses_creator_fallback(self, group_with_members, group_owner, moderator_user):
        """Without the role column the creator is owner and everyone else member."""
        set_schema_capabilities(SchemaCapabilities(membership_roles=False))

        owner = resolve_membership(group_id=group_with_members.id, user_id=group_owner.id)
        moderator = resolve_membership(group_id=group_with_members.id, user_id=moderator_user.id)

        assert owner.role == GroupRole.OWNER
        assert moderator.role == GroupRole.MEMBER


@pytest.mark.django_db
class TestAddMember:
    """Tests for add_member service."""

    def test_owner_adds_member(self, group, group_owner, group_other_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            membership = add_member(group_id=group.id, requester=group_owner, email='OTHER@example.com')

        assert membership.user == group_other_user
        assert membership.role == GroupRole.MEMBER

        event = GroupActivity.objects.get(event_type=ActivityEvent.MEMBER_ADDED)
        assert event.actor == group_owner
        assert event.target_user == group_other_user

    def test_moderator_adds_member(self, group_with_members, moderator_user, group_other_user):
        add_member(group_id=group_with_members.id, requester=moderator_user, email=group_other_user.email)
        assert role_of(group_with_members, group_other_user) == GroupRole.MEMBER

    def test_member_cannot_add(self, group_with_members, member_user, group_other_user):
        with pytest.raises(InsufficientPermissionsError):
            add_member(group_id=group_with_members.id, requester=member_user, email=group_other_user.email)

    def test_non_member_cannot_add(self, group, group_other_user):
        with pytest.raises(NotMemberError):
            add_member(group_id=group.id, requester=group_other_user, email=group_other_user.email)

    def test_unknown_email(self, group, group_owner):
        with pytest.raises(UserNotFoundError):
            add_member(group_id=group.id, requester=group_owner, email='nobody@example.com')

    def test_soft_deleted_user_not_found(self, group, group_owner, group_other_user):
        User.objects.filter(id=group_other_user.id).update(deleted_at=timezone.now())

        with pytest.raises(UserNotFoundError):
            add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)

    def test_adding_twice_creates_one_row(self, group, group_owner, group_other_user):
        """The second add reports already a member instead of inserting again."""
        add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)

        with pytest.raises(AlreadyMemberError) as exc_info:
            add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)

        assert 'already a member' in str(exc_info.value.detail)
        assert GroupMembership.objects.filter(group=group, user=group_other_user).count() == 1

    def test_concurrent_add_loses_to_first_insert(
        self, group, group_owner, group_other_user, django_capture_on_commit_callbacks
    ):
        """A membership inserted by another request between lookup and insert wins."""
        real_bulk_create = GroupMembership.objects.bulk_create
        seen = {}

        def insert_rival_first(objs, **kwargs):
            rival = GroupMembership.objects.create(group=group, user=group_other_user, role=GroupRole.MEMBER)
            result = real_bulk_create(objs, **kwargs)
            rows = GroupMembership.objects.filter(group=group, user=group_other_user)
            seen['ids'] = [row.id for row in rows]
            seen['rival_id'] = rival.id
            return result

        with mock.patch.object(GroupMembership.objects, 'bulk_create', side_effect=insert_rival_first):
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                with pytest.raises(AlreadyMemberError) as exc_info:
                    add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)

        assert 'already a member' in str(exc_info.value.detail)
        assert seen['ids'] == [seen['rival_id']]
        assert callbacks == []
        assert not GroupActivity.objects.filter(event_type=ActivityEvent.MEMBER_ADDED).exists()

    def test_requires_role_column(self, group, group_owner, group_other_user):
        set_schema_capabilities(SchemaCapabilities(membership_roles=False))

        with pytest.raises(SchemaUnavailableError):
            add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)


@pytest.mark.django_db
class TestRemoveMember:
    """Tests for remove_member service."""

    def test_owner_removes_moderator(
        self, group_with_members, group_owner, moderator_user, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            remove_member(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=moderator_user.id,
            )

        assert not GroupMembership.objects.filter(group=group_with_members, user=moderator_user).exists()

        event = GroupActivity.objects.get(event_type=ActivityEvent.MEMBER_REMOVED)
        assert event.target_user == moderator_user
        assert json.loads(event.metadata_json) == {'actorRole': 'owner', 'targetRole': 'moderator'}

    def test_moderator_removes_member(self, group_with_members, moderator_user, member_user):
        remove_member(group_id=group_with_members.id, requester=moderator_user, target_user_id=member_user.id)
        assert not GroupMembership.objects.filter(group=group_with_members, user=member_user).exists()

    def test_moderator_cannot_remove_moderator(self, group_with_members, moderator_user, member_user):
        GroupMembership.objects.filter(user=member_user).update(role=GroupRole.MODERATOR)

        with pytest.raises(InsufficientPermissionsError):
            remove_member(group_id=group_with_members.id, requester=moderator_user, target_user_id=member_user.id)

    def test_moderator_cannot_remove_owner(self, group_with_members, group_owner, moderator_user):
        with pytest.raises(CannotRemoveOwnerError):
            remove_member(group_id=group_with_members.id, requester=moderator_user, target_user_id=group_owner.id)

        assert owner_count(group_with_members) == 1

    def test_owner_cannot_remove_self(self, group_with_members, group_owner):
        with pytest.raises(CannotTargetSelfError):
            remove_member(group_id=group_with_members.id, requester=group_owner, target_user_id=group_owner.id)

    def test_member_cannot_remove(self, group_with_members, member_user, second_member):
        with pytest.raises(InsufficientPermissionsError):
            remove_member(group_id=group_with_members.id, requester=member_user, target_user_id=second_member.id)

    def test_target_not_member(self, group_with_members, group_owner, group_other_user):
        with pytest.raises(MemberNotFoundError):
            remove_member(group_id=group_with_members.id, requester=group_owner, target_user_id=group_other_user.id)


@pytest.mark.django_db
class TestLeaveGroup:
    """Tests for leave_group service."""

    def test_member_leaves(self, group_with_members, member_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            leave_group(group_id=group_with_members.id, user=member_user)

        assert not GroupMembership.objects.filter(group=group_with_members, user=member_user).exists()
        event = GroupActivity.objects.get(event_type=ActivityEvent.MEMBER_REMOVED)
        assert json.loads(event.metadata_json)['left'] is True

    def test_owner_cannot_leave(self, group, group_owner):
        with pytest.raises(OwnerCannotLeaveError):
            leave_group(group_id=group.id, user=group_owner)
        assert owner_count(group) == 1

    def test_non_member_cannot_leave(self, group, group_other_user):
        with pytest.raises(NotMemberError):
            leave_group(group_id=group.id, user=group_other_user)


@pytest.mark.django_db
class TestChangeMemberRole:
    """Tests for change_member_role service."""

    def test_promote_to_moderator(self, group_with_members, group_owner, member_user):
        result = change_member_role(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=member_user.id,
            new_role='moderator',
        )

        assert result.changed is True
        assert result.ownership_transferred is False
        assert result.previous_role == GroupRole.MEMBER
        assert role_of(group_with_members, member_user) == GroupRole.MODERATOR

    def test_transfer_ownership(self, group_with_members, group_owner, member_user):
        result = change_member_role(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=member_user.id,
            new_role=GroupRole.OWNER,
        )

        assert result.ownership_transferred is True
        assert role_of(group_with_members, group_owner) == GroupRole.MODERATOR
        assert role_of(group_with_members, member_user) == GroupRole.OWNER
        assert owner_count(group_with_members) == 1

    def test_promote_owner_to_owner_is_noop(self, group, group_owner, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            result = change_member_role(
                group_id=group.id,
                requester=group_owner,
                target_user_id=group_owner.id,
                new_role='owner',
            )

        assert result.changed is False
        assert result.message == 'Ownership already held'
        assert not GroupActivity.objects.filter(event_type=ActivityEvent.ROLE_CHANGED).exists()

    def test_unchanged_role_records_nothing(
        self, group_with_members, group_owner, member_user, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            result = change_member_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=member_user.id,
                new_role='member',
            )

        assert result.changed is False
        assert not GroupActivity.objects.exists()

    def test_owner_cannot_demote_self(self, group, group_owner):
        with pytest.raises(CannotTargetSelfError):
            change_member_role(group_id=group.id, requester=group_owner, target_user_id=group_owner.id, new_role='member')
        assert role_of(group, group_owner) == GroupRole.OWNER

    def test_moderator_cannot_change_roles(self, group_with_members, moderator_user, member_user):
        with pytest.raises(InsufficientPermissionsError):
            change_member_role(
                group_id=group_with_members.id,
                requester=moderator_user,
                target_user_id=member_user.id,
                new_role='moderator',
            )

    def test_cannot_change_owner_role(self, group_with_members, group_owner, member_user):
        # Corrupt state with a second owner is still refused on this path
        GroupMembership.objects.filter(user=member_user).update(role=GroupRole.OWNER)

        with pytest.raises(CannotChangeOwnerRoleError):
            change_member_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=member_user.id,
                new_role='member',
            )

    def test_invalid_role(self, group_with_members, group_owner, member_user):
        with pytest.raises(InvalidRoleError):
            change_member_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=member_user.id,
                new_role='admin',
            )

    def test_target_not_member(self, group, group_owner, group_other_user):
        with pytest.raises(MemberNotFoundError):
            change_member_role(
                group_id=group.id,
                requester=group_owner,
                target_user_id=group_other_user.id,
                new_role='moderator',
            )

    def test_add_promote_transfer_scenario(self, group, group_owner, group_other_user, django_capture_on_commit_callbacks):
        """Owner adds B, promotes B to moderator, then hands B ownership."""
        with django_capture_on_commit_callbacks(execute=True):
            add_member(group_id=group.id, requester=group_owner, email=group_other_user.email)
        with django_capture_on_commit_callbacks(execute=True):
            change_member_role(
                group_id=group.id,
                requester=group_owner,
                target_user_id=group_other_user.id,
                new_role='moderator',
            )
        with django_capture_on_commit_callbacks(execute=True):
            change_member_role(
                group_id=group.id,
                requester=group_owner,
                target_user_id=group_other_user.id,
                new_role='owner',
            )

        assert role_of(group, group_owner) == GroupRole.MODERATOR
        assert role_of(group, group_other_user) == GroupRole.OWNER
        assert owner_count(group) == 1

        events = list(
            GroupActivity.objects
            .filter(group=group, event_type=ActivityEvent.ROLE_CHANGED)
            .order_by('created_at')
        )
        assert len(events) == 2
        transferred = sorted(json.loads(e.metadata_json)['ownershipTransferred'] for e in events)
        assert transferred == [False, True]


@pytest.mark.django_db
class TestDeleteGroup:
    """Tests for delete_group service."""

    def test_owner_soft_deletes(self, group, group_owner):
        delete_group(group_id=group.id, requester=group_owner)

        group.refresh_from_db()
        assert group.deleted_at is not None
        assert GroupMembership.objects.filter(group=group).exists()

    def test_second_delete_not_found(self, group, group_owner):
        delete_group(group_id=group.id, requester=group_owner)

        with pytest.raises(GroupNotFoundError):
            delete_group(group_id=group.id, requester=group_owner)

    def test_moderator_cannot_delete(self, group_with_members, moderator_user):
        with pytest.raises(InsufficientPermissionsError):
            delete_group(group_id=group_with_members.id, requester=moderator_user)
        group_with_members.refresh_from_db()
        assert group_with_members.deleted_at is None


@pytest.mark.django_db
class TestReadHelpers:
    """Tests for get_user_groups and get_group_members."""

    def test_user_groups_exclude_deleted(self, group, group_owner):
        other = create_group(name='Second', creator=group_owner)
        Group.objects.filter(id=other.id).update(deleted_at=timezone.now())

        groups = list(get_user_groups(group_owner))

        assert groups == [group]
        assert groups[0].member_count == 1
        assert groups[0].membership_role == GroupRole.OWNER

    def test_member_count_counts_everyone(self, group_with_members, member_user):
        groups = list(get_user_groups(member_user))
        assert groups[0].member_count == 4

    def test_members_exclude_soft_deleted_users(self, group_with_members, member_user):
        User.objects.filter(id=member_user.id).update(deleted_at=timezone.now())

        members = list(get_group_members(group_id=group_with_members.id))

        assert member_user not in [m.user for m in members]
        assert len(members) == 3

    def test_member_roles(self, group_with_members, group_owner):
        roles = {m.user_id: get_member_role(m) for m in get_group_members(group_id=group_with_members.id)}
        assert roles[group_owner.id] == GroupRole.OWNER
        assert sorted(r.value for r in roles.values()) == ['member', 'member', 'moderator', 'owner']

    def test_members_of_deleted_group(self, group):
        Group.objects.filter(id=group.id).update(deleted_at=timezone.now())
        with pytest.raises(GroupNotFoundError):
            get_group_members(group_id=group.id)
