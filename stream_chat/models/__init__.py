"""
Pydantic models for the Stream Chat client.

All data shapes defined here. No imports from the client or channel modules.
"""

from stream_chat.models.channel import (
    ChannelConfig,
    ChannelMember,
    ChannelRead,
    ChannelState,
    QueryResponse,
)
from stream_chat.models.message import Message
from stream_chat.models.requests import (
    BanOptions,
    BanRequest,
    MarkReadOptions,
    MarkReadRequest,
    MembershipRequest,
    QueryOptions,
    QueryRequest,
    SendMessageRequest,
    UnbanOptions,
    UnbanRequest,
    UpdateChannelRequest,
)
from stream_chat.models.user import User, UserRef

__all__ = [
    # User models
    "User",
    "UserRef",
    # Message models
    "Message",
    # Channel state models
    "ChannelConfig",
    "ChannelMember",
    "ChannelRead",
    "ChannelState",
    "QueryResponse",
    # Request payloads
    "QueryOptions",
    "QueryRequest",
    "UpdateChannelRequest",
    "MembershipRequest",
    "BanOptions",
    "BanRequest",
    "UnbanOptions",
    "UnbanRequest",
    "MarkReadOptions",
    "MarkReadRequest",
    "SendMessageRequest",
]
