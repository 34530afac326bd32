import itertools

import pytest

from apps.groups.models import GroupRole
from apps.groups.services import (
    InvalidRoleError,
    has_minimum_role,
    normalize_role,
    parse_role,
    rank,
)


ORDER = [GroupRole.MEMBER, GroupRole.MODERATOR, GroupRole.OWNER]


class TestRank:
    def test_ranks(self):
        assert rank(GroupRole.MEMBER) == 1
        assert rank(GroupRole.MODERATOR) == 2
        assert rank(GroupRole.OWNER) == 3

    def test_accepts_raw_values(self):
        assert rank('moderator') == 2


class TestHasMinimumRole:
    @pytest.mark.parametrize('actual,required', list(itertools.product(ORDER, ORDER)))
    def test_total_order_over_all_pairs(self, actual, required):
        """Every pair agrees with member < moderator < owner."""
        expected = ORDER.index(actual) >= ORDER.index(required)
        assert has_minimum_role(actual, required) is expected

    def test_owner_satisfies_everything(self):
        assert all(has_minimum_role(GroupRole.OWNER, role) for role in ORDER)

    def test_member_satisfies_only_member(self):
        assert [has_minimum_role(GroupRole.MEMBER, role) for role in ORDER] == [True, False, False]


class TestParseRole:
    @pytest.mark.parametrize('value,expected', [
        ('member', GroupRole.MEMBER),
        ('Moderator', GroupRole.MODERATOR),
        (' owner ', GroupRole.OWNER),
        (GroupRole.OWNER, GroupRole.OWNER),
    ])
    def test_known_values(self, value, expected):
        assert parse_role(value) is expected

    @pytest.mark.parametrize('value', ['admin', '', None, 'superuser'])
    def test_unknown_values_rejected(self, value):
        with pytest.raises(InvalidRoleError) as exc_info:
            parse_role(value)
        assert 'Invalid role' in str(exc_info.value.detail)


class TestNormalizeRole:
    def test_known_value_passes_through(self):
        assert normalize_role('moderator', is_creator=True) is GroupRole.MODERATOR

    def test_missing_value_creator_is_owner(self):
        assert normalize_role(None, is_creator=True) is GroupRole.OWNER

    def test_missing_value_non_creator_is_member(self):
        assert normalize_role(None, is_creator=False) is GroupRole.MEMBER

    def test_garbage_value_falls_back(self):
        assert normalize_role('admin', is_creator=False) is GroupRole.MEMBER
