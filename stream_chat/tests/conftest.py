"""
Pytest configuration and fixtures for Stream Chat client tests.
"""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

# Set test environment variables before importing config
os.environ.setdefault("STREAM_API_KEY", "test-api-key")
os.environ.setdefault("STREAM_API_SECRET", "test-api-secret-for-testing-only")

from stream_chat.channel import Channel  # noqa: E402
from stream_chat.client import StreamClient  # noqa: E402


def channel_payload(channel_id: str = "general", member_ids: list[str] | None = None, **extra) -> dict:
    """Full query response for a messaging channel with the given members."""
    member_ids = member_ids if member_ids is not None else ["alice", "bob"]
    members = [
        {"user_id": uid, "user": {"id": uid}, "role": "member", "created_at": "2024-01-02T10:00:00Z"}
        for uid in member_ids
    ]
    return {
        "channel": {
            "id": channel_id,
            "type": "messaging",
            "cid": f"messaging:{channel_id}",
            "created_by": {"id": "owner"},
            "frozen": False,
            "member_count": len(member_ids),
            "config": {"read_events": True, "replies": True, "max_message_length": 5000},
            "created_at": "2024-01-01T09:00:00Z",
            "updated_at": "2024-01-01T09:30:00Z",
            **extra,
        },
        "members": members,
        "messages": [
            {"id": "m1", "text": "hello", "html": "<p>hello</p>", "user": {"id": member_ids[0] if member_ids else "owner"}},
        ],
        "read": [{"user": {"id": "owner"}, "last_read": "2024-01-01T09:31:00Z"}],
        "duration": "4.20ms",
    }


@pytest.fixture
def mock_client():
    """A StreamClient stand-in that records calls and returns empty bodies."""
    client = MagicMock(spec=StreamClient)
    client.post.return_value = {}
    client.delete.return_value = {}
    return client


@pytest.fixture
def synced_channel(mock_client):
    """A channel handle populated from a full snapshot, call history reset."""
    mock_client.post.return_value = channel_payload()
    channel = Channel.create(mock_client, "messaging", "general", "owner")
    mock_client.reset_mock()
    mock_client.post.return_value = {}
    mock_client.delete.return_value = {}
    return channel


@pytest.fixture
def make_payload():
    """Factory for full query responses; see channel_payload."""
    return channel_payload
