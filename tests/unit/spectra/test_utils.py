"""Tests for spectra/core/utils.py"""

from datetime import datetime, timezone
from email.utils import format_datetime

import hikari
import pytest

from spectra.core.utils import (
    calculate_member_permissions,
    can_interact,
    can_interact_role,
    find_role_by_name,
    format_duration,
    parse_duration,
    snowflake_to_datetime,
    top_role_position,
)


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0 seconds"),
            (1, "1 second"),
            (59, "59 seconds"),
            (3600, "1 hour"),
            (43200, "12 hours"),
            (90061, "1 day, 1 hour, 1 minute, 1 second"),
            (1209600, "2 weeks"),
            (694800, "1 week, 1 day, 1 hour"),
        ],
    )
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_negative_values_use_magnitude(self):
        assert format_duration(-120) == "2 minutes"


class TestParseDuration:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("90", 90),
            ("10m", 600),
            ("1h30m", 5400),
            ("2 hours 5 minutes", 7500),
            ("1 HOUR", 3600),
            ("1d, 2h", 93600),
            ("3w", 1814400),
            ("0", 0),
        ],
    )
    def test_valid_durations(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "5x", "1h foo", "h", "-5"])
    def test_invalid_durations(self, text):
        assert parse_duration(text) is None


class TestSnowflake:
    def test_creation_time_from_snowflake(self):
        created = snowflake_to_datetime(175928847299117063)

        assert created.tzinfo == timezone.utc
        assert created.replace(microsecond=0) == datetime(2016, 4, 30, 11, 18, 25, tzinfo=timezone.utc)

    def test_rfc_1123_rendering(self):
        created = snowflake_to_datetime(175928847299117063)

        assert format_datetime(created, usegmt=True) == "Sat, 30 Apr 2016 11:18:25 GMT"


class TestRoleLookup:
    def test_find_role_is_case_insensitive(self, mock_guild, muted_role, role_factory, roles):
        roles[900] = role_factory(900, "MUTED", 3)

        found = find_role_by_name(mock_guild, "muted")

        assert found is muted_role

    def test_find_role_missing(self, mock_guild):
        assert find_role_by_name(mock_guild, "jail") is None


class TestHierarchy:
    def test_top_role_position(self, mock_guild, mock_bot_member, mock_member):
        assert top_role_position(mock_bot_member, mock_guild) == 5
        assert top_role_position(mock_member, mock_guild) == 0

    def test_can_interact_with_lower_member(self, mock_guild, mock_bot_member, mock_member, mock_moderator):
        assert can_interact(mock_bot_member, mock_member, mock_guild)
        assert can_interact(mock_bot_member, mock_moderator, mock_guild)

    def test_cannot_interact_with_equal_or_higher(self, mock_guild, mock_bot_member, member_factory):
        peer = member_factory(1, "peer", [700])
        staff = member_factory(2, "staff", [800])

        assert not can_interact(mock_bot_member, peer, mock_guild)
        assert not can_interact(mock_bot_member, staff, mock_guild)

    def test_nobody_interacts_with_owner(self, mock_guild, mock_bot_member, mock_owner):
        assert not can_interact(mock_bot_member, mock_owner, mock_guild)

    def test_owner_interacts_with_everyone(self, mock_guild, mock_owner, mock_bot_member):
        assert can_interact(mock_owner, mock_bot_member, mock_guild)

    def test_can_interact_role(self, mock_guild, mock_bot_member, muted_role, roles):
        assert can_interact_role(mock_bot_member, muted_role, mock_guild)
        assert not can_interact_role(mock_bot_member, roles[700], mock_guild)
        assert not can_interact_role(mock_bot_member, roles[800], mock_guild)


class TestPermissions:
    def test_member_permissions_combine_roles(self, mock_guild, mock_bot_member):
        permissions = calculate_member_permissions(mock_bot_member, mock_guild)

        assert permissions & hikari.Permissions.SEND_MESSAGES
        assert permissions & hikari.Permissions.MANAGE_ROLES
        assert not permissions & hikari.Permissions.BAN_MEMBERS

    def test_administrator_grants_everything(self, mock_guild, roles, role_factory, member_factory):
        roles[901] = role_factory(901, "Admin", 4, hikari.Permissions.ADMINISTRATOR)
        admin = member_factory(3, "admin", [901])

        assert calculate_member_permissions(admin, mock_guild) & hikari.Permissions.BAN_MEMBERS
