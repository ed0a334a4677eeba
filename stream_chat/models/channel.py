"""Channel state models: the shapes the channel endpoints return."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stream_chat.models.message import Message
from stream_chat.models.user import User

# Fields carrying list state. Everything else on ChannelState is metadata.
LIST_FIELDS = ("members", "messages", "read")


class ChannelConfig(BaseModel):
    """Moderation and feature flags of a channel type."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    typing_events: bool = False
    read_events: bool = False
    connect_events: bool = False
    search: bool = False
    reactions: bool = False
    replies: bool = False
    mutes: bool = False
    uploads: bool = False
    url_enrichment: bool = False
    message_retention: str | None = None
    max_message_length: int | None = None
    automod: str | None = None
    automod_behavior: str | None = None
    commands: list[dict] | None = None


class ChannelMember(BaseModel):
    """Membership of one user in one channel."""

    model_config = ConfigDict(extra="allow")

    user_id: str | None = None
    user: User | None = None
    is_moderator: bool = False
    role: str | None = None  # member, moderator, owner

    invited: bool = False
    invite_accepted_at: datetime | None = None
    invite_rejected_at: datetime | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def invite_conflict(self) -> bool:
        """True when the server reports the invite as both accepted and rejected."""
        return self.invite_accepted_at is not None and self.invite_rejected_at is not None

    @property
    def invite_pending(self) -> bool:
        return self.invited and self.invite_accepted_at is None and self.invite_rejected_at is None


class ChannelRead(BaseModel):
    """
    Last-read marker of one user.

    Also accepts a bare user object, the shape older endpoints send.
    """

    model_config = ConfigDict(extra="allow")

    user: User
    last_read: datetime | None = None
    unread_messages: int = 0

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_user(cls, data: Any) -> Any:
        if isinstance(data, dict) and "user" not in data and "id" in data:
            return {"user": data}
        return data


class ChannelState(BaseModel):
    """
    Server-side state of a channel.

    Custom channel data set through `update` arrives as extra top-level keys
    and is kept in `model_extra`.
    """

    model_config = ConfigDict(extra="allow")

    id: str = ""
    type: str = ""
    cid: str = ""  # "type:id"

    config: ChannelConfig = Field(default_factory=ChannelConfig)

    created_by: User | None = None
    frozen: bool = False

    member_count: int = 0
    members: list[ChannelMember] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)
    read: list[ChannelRead] = Field(default_factory=list)

    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_message_at: datetime | None = None

    @model_validator(mode="after")
    def _derive_cid(self) -> ChannelState:
        if not self.cid and self.type and self.id:
            self.cid = f"{self.type}:{self.id}"
        return self


class QueryResponse(BaseModel):
    """
    Envelope returned by state-bearing channel endpoints.

    Each part is optional; None means the server did not send it, which is
    different from an empty list.
    """

    channel: ChannelState | None = None
    members: list[ChannelMember] | None = None
    messages: list[Message] | None = None
    read: list[ChannelRead] | None = None
