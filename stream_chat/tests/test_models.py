"""
Tests for stream_chat/models
"""

from __future__ import annotations

from stream_chat.models import ChannelMember, ChannelRead, ChannelState, Message, QueryResponse


class TestChannelMember:
    def test_invited_and_pending(self):
        member = ChannelMember(user_id="carol", invited=True)
        assert member.invite_pending is True

    def test_accepted_is_not_pending(self):
        member = ChannelMember(user_id="carol", invited=True, invite_accepted_at="2024-01-03T08:00:00Z")
        assert member.invite_pending is False

    def test_accepted_and_rejected_is_kept_and_flagged(self):
        member = ChannelMember(
            user_id="carol",
            invited=True,
            invite_accepted_at="2024-01-03T08:00:00Z",
            invite_rejected_at="2024-01-03T09:00:00Z",
        )
        assert member.invite_conflict is True
        assert member.invite_pending is False

    def test_single_outcome_is_not_a_conflict(self):
        member = ChannelMember(user_id="carol", invited=True, invite_rejected_at="2024-01-03T09:00:00Z")
        assert member.invite_conflict is False

    def test_moderator_role(self):
        member = ChannelMember.model_validate({"user_id": "alice", "is_moderator": True, "role": "moderator"})
        assert member.role == "moderator"


class TestChannelState:
    def test_cid_derived_from_type_and_id(self):
        assert ChannelState(type="messaging", id="general").cid == "messaging:general"

    def test_server_cid_kept(self):
        assert ChannelState(type="messaging", id="general", cid="messaging:other").cid == "messaging:other"

    def test_custom_data_kept_as_extra(self):
        state = ChannelState.model_validate({"type": "messaging", "id": "general", "color": "blue"})
        assert state.model_extra == {"color": "blue"}

    def test_config_defaults(self):
        state = ChannelState(type="messaging", id="general")
        assert state.config.read_events is False
        assert state.members == []


class TestQueryResponse:
    def test_absent_parts_are_none(self):
        resp = QueryResponse.model_validate({"members": []})
        assert resp.channel is None
        assert resp.members == []
        assert resp.messages is None
        assert resp.read is None

    def test_ignores_unknown_envelope_keys(self):
        resp = QueryResponse.model_validate({"duration": "1ms", "watcher_count": 3})
        assert resp.channel is None


class TestMessage:
    def test_local_message_not_sent(self):
        msg = Message(text="draft")
        assert msg.id is None
        assert msg.is_sent is False

    def test_sent_message(self):
        msg = Message.model_validate({"id": "m1", "text": "hi", "html": "<p>hi</p>"})
        assert msg.is_sent is True
        assert msg.is_reply is False

    def test_reply(self):
        msg = Message.model_validate({"id": "m2", "text": "re", "type": "reply", "parent_id": "m1"})
        assert msg.is_reply is True


class TestChannelRead:
    def test_marker_shape(self):
        read = ChannelRead.model_validate({"user": {"id": "alice"}, "last_read": "2024-01-01T09:31:00Z"})
        assert read.user.id == "alice"
        assert read.last_read is not None

    def test_bare_user_is_wrapped(self):
        read = ChannelRead.model_validate({"id": "alice", "name": "Alice"})
        assert read.user.id == "alice"
        assert read.user.name == "Alice"
        assert read.last_read is None
        assert read.unread_messages == 0
