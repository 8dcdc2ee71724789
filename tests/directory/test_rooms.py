"""Tests for the Room membership and moderation state.

Tests cover:
- Room creation defaults
- Member, moderator, ban and mute transitions
- Online presence
- Message log and timestamps
- Serialization
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from our_directory import Room


@pytest.fixture
def owner_id():
    return uuid4()


@pytest.fixture
def room(owner_id):
    return Room.create("Testroom", owner_id)


# =============================================================================
# CREATION TESTS
# =============================================================================


class TestRoomCreation:
    """Tests for Room.create."""

    def test_owner_is_member_not_moderator(self, room, owner_id):
        assert room.has_member(owner_id)
        assert not room.has_moderator(owner_id)
        assert room.count_members() == 1

    def test_defaults(self, room, owner_id):
        assert room.owner == owner_id
        assert room.is_private()
        assert not room.is_hidden()
        assert room.topic == ""
        assert room.get_online_members() == []
        assert room.messages == []

    def test_ids_are_unique(self, owner_id):
        assert Room.create("a", owner_id).id != Room.create("a", owner_id).id

    def test_public_room(self, owner_id):
        room = Room.create("Lobby", owner_id, private=False)
        assert not room.is_private()

    def test_equality_by_id(self, room):
        other = Room(id=room.id, name="Renamed", owner=uuid4())
        assert room == other
        assert room != Room.create("Testroom", room.owner)

    def test_timestamps_initially_unset(self, room):
        created_at, updated_at, last_message_at = room.timestamps()

        assert created_at is not None
        assert updated_at is None
        assert last_message_at is None


# =============================================================================
# MEMBERSHIP TESTS
# =============================================================================


class TestMembership:
    """Tests for member and moderator relations."""

    def test_add_and_remove_member(self, room):
        user_id = uuid4()

        assert room.add_member(user_id)
        assert room.has_member(user_id)
        assert room.remove_member(user_id)
        assert not room.has_member(user_id)

    def test_add_member_twice_is_noop(self, room):
        user_id = uuid4()
        room.add_member(user_id)

        assert not room.add_member(user_id)
        assert room.count_members() == 2

    def test_remove_unknown_member(self, room):
        assert not room.remove_member(uuid4())

    def test_moderator_becomes_member(self, room):
        user_id = uuid4()

        assert room.add_moderator(user_id)
        assert room.has_moderator(user_id)
        assert room.has_member(user_id)

    def test_re_moderating_restores_membership(self, room):
        user_id = uuid4()
        room.add_moderator(user_id)
        room.remove_member(user_id)

        assert room.add_moderator(user_id)
        assert room.has_member(user_id)
        assert not room.add_moderator(user_id)

    def test_remove_moderator_keeps_membership(self, room):
        user_id = uuid4()
        room.add_moderator(user_id)

        assert room.remove_moderator(user_id)
        assert not room.has_moderator(user_id)
        assert room.has_member(user_id)

    def test_mutation_stamps_updated_at(self, room):
        room.add_member(uuid4())
        assert room.updated_at is not None


# =============================================================================
# MODERATION TESTS
# =============================================================================


class TestModeration:
    """Tests for bans and mutes."""

    def test_ban_removes_member_and_moderator(self, room):
        user_id = uuid4()
        room.add_moderator(user_id)

        assert room.ban_member(user_id)
        assert room.is_member_banned(user_id)
        assert not room.has_member(user_id)
        assert not room.has_moderator(user_id)

    def test_ban_twice(self, room):
        user_id = uuid4()
        room.ban_member(user_id)

        assert not room.ban_member(user_id)
        assert room.is_member_banned(user_id)

    def test_re_ban_reports_membership_removal(self, room):
        user_id = uuid4()
        room.ban_member(user_id)
        room.add_member(user_id)

        assert room.ban_member(user_id)
        assert not room.has_member(user_id)

    def test_unban_restores_plain_membership(self, room):
        user_id = uuid4()
        room.add_moderator(user_id)
        room.ban_member(user_id)

        assert room.unban_member(user_id)
        assert not room.is_member_banned(user_id)
        assert room.has_member(user_id)
        assert not room.has_moderator(user_id)

    def test_unban_never_banned(self, room):
        user_id = uuid4()

        assert not room.unban_member(user_id)
        assert not room.has_member(user_id)

    def test_mute_round_trip(self, room):
        user_id = uuid4()

        assert room.mute_member(user_id)
        assert room.is_member_muted(user_id)
        assert room.unmute_member(user_id)
        assert not room.is_member_muted(user_id)

    def test_unmute_never_muted(self, room):
        assert not room.unmute_member(uuid4())

    def test_mute_is_independent_of_membership(self, room):
        user_id = uuid4()

        room.mute_member(user_id)

        assert room.is_member_muted(user_id)
        assert not room.has_member(user_id)


# =============================================================================
# PRESENCE TESTS
# =============================================================================


class TestPresence:
    """Tests for online members."""

    def test_online_member(self, room, owner_id):
        assert room.add_online_member(owner_id)
        assert owner_id in room.get_online_members()

    def test_online_member_need_not_be_member(self, room):
        visitor = uuid4()

        room.add_online_member(visitor)

        assert visitor in room.get_online_members()
        assert not room.has_member(visitor)

    def test_online_members_keep_arrival_order(self, room):
        arrivals = [uuid4() for _ in range(5)]
        for user_id in arrivals:
            room.add_online_member(user_id)

        assert room.get_online_members() == arrivals
        assert Room.from_dict(room.to_dict()).get_online_members() == arrivals

    def test_remove_online_member(self, room, owner_id):
        room.add_online_member(owner_id)

        assert room.remove_online_member(owner_id)
        assert not room.remove_online_member(owner_id)
        assert room.get_online_members() == []


# =============================================================================
# VISIBILITY AND MESSAGES
# =============================================================================


class TestVisibilityAndMessages:
    """Tests for flags, topic and the message log."""

    def test_set_flags(self, room):
        room.set_private(False)
        room.set_hidden(True)
        room.set_topic("general chatter")

        assert not room.is_private()
        assert room.is_hidden()
        assert room.topic == "general chatter"

    def test_add_message_stamps_last_message(self, room):
        room.add_message("hello")

        assert room.messages == ["hello"]
        assert room.timestamps()[2] is not None


# =============================================================================
# SERIALIZATION TESTS
# =============================================================================


class TestRoomSerialization:
    """Tests for to_dict/from_dict."""

    def test_to_dict_fields(self, room, owner_id):
        data = room.to_dict()

        assert data["id"] == str(room.id)
        assert data["owner"] == str(owner_id)
        assert data["members"] == [str(owner_id)]
        assert data["private"] is True
        assert data["updated_at"] is None

    def test_from_dict_restores_relations(self, room):
        banned, muted = uuid4(), uuid4()
        room.ban_member(banned)
        room.mute_member(muted)
        room.add_message("hi")

        restored = Room.from_dict(room.to_dict())

        assert restored == room
        assert restored.members == room.members
        assert restored.is_member_banned(banned)
        assert restored.is_member_muted(muted)
        assert restored.messages == ["hi"]
        assert restored.created_at == room.created_at
