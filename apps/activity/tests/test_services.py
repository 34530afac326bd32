from unittest import mock
from uuid import uuid4

import pytest
from django.db import OperationalError, transaction

from apps.activity.models import ActivityEvent, GroupActivity
from apps.activity.services import (
    get_group_timeline,
    parse_activity_metadata,
    queue_activity,
    record_activity,
)
from apps.core.exceptions import InvalidInputError, SchemaUnavailableError
from apps.core.schema import SchemaCapabilities, set_schema_capabilities


class TestParseMetadata:

    @pytest.mark.parametrize('raw, expected', [
        ('{"fields": ["status"]}', {'fields': ['status']}),
        ({'already': 'decoded'}, {'already': 'decoded'}),
        (None, None),
        ('', None),
        ('{not json', None),
        ('[1, 2]', None),
    ])
    def test_parse(self, raw, expected):
        assert parse_activity_metadata(raw) == expected


@pytest.mark.django_db
class TestRecordActivity:

    def test_records_event(self, group, owner, member):
        reference = uuid4()

        event = record_activity(
            group_id=group.id,
            event_type=ActivityEvent.MEMBER_ADDED,
            actor_id=owner.id,
            target_user_id=member.id,
            reference_id=reference,
            metadata={'role': 'member', 'reference': reference},
        )

        event.refresh_from_db()
        assert event.actor == owner
        assert event.target_user == member
        assert parse_activity_metadata(event.metadata_json) == {'role': 'member', 'reference': str(reference)}

    def test_empty_metadata_stored_as_null(self, group):
        event = record_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED, metadata={})
        assert event.metadata_json is None

    def test_missing_group_is_ignored(self):
        assert record_activity(group_id=None, event_type=ActivityEvent.GROUP_CREATED) is None

    def test_old_schema_skips(self, group):
        set_schema_capabilities(SchemaCapabilities(activity_log=False))

        with mock.patch('apps.activity.services.logger') as logger:
            assert record_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED) is None

        assert GroupActivity.objects.count() == 0
        logger.warning.assert_called_once()

    def test_missing_table_error_skips(self, group):
        error = OperationalError('no such table: group_activity')
        with mock.patch.object(GroupActivity.objects, 'create', side_effect=error):
            assert record_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED) is None

    def test_other_database_errors_propagate(self, group):
        error = OperationalError('database is locked')
        with mock.patch.object(GroupActivity.objects, 'create', side_effect=error):
            with pytest.raises(OperationalError):
                record_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED)

    def test_queued_activity_waits_for_commit(self, group, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with transaction.atomic():
                queue_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED)
                assert GroupActivity.objects.count() == 0

        assert len(callbacks) == 1
        assert GroupActivity.objects.count() == 1


@pytest.mark.django_db
class TestTimeline:

    @pytest.fixture
    def events(self, group, owner, member):
        record_activity(group_id=group.id, event_type=ActivityEvent.GROUP_CREATED, actor_id=owner.id)
        record_activity(group_id=group.id, event_type=ActivityEvent.MEMBER_ADDED, actor_id=owner.id,
                        target_user_id=member.id)
        record_activity(group_id=group.id, event_type=ActivityEvent.VOTE_CAST, actor_id=member.id)

    def test_filters(self, group, owner, member, events):
        assert get_group_timeline(group_id=group.id).count() == 3
        assert get_group_timeline(group_id=group.id, actor_id=member.id).count() == 1
        assert [
            event.event_type for event in get_group_timeline(group_id=group.id, event_type='member_added')
        ] == ['member_added']

    def test_unknown_event_type(self, group):
        with pytest.raises(InvalidInputError):
            get_group_timeline(group_id=group.id, event_type='bogus')

    def test_old_schema(self, group):
        set_schema_capabilities(SchemaCapabilities(activity_log=False))

        with pytest.raises(SchemaUnavailableError):
            get_group_timeline(group_id=group.id)
