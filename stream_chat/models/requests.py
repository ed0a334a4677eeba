"""
Request payloads, one type per operation.

Dumped with `to_payload()`: unset optional fields are left out of the JSON body.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stream_chat.models.message import Message
from stream_chat.models.user import UserRef


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class QueryOptions(_Payload):
    """
    What a channel query asks the server for.

    watch: subscribe the caller to realtime events (unused by this client)
    state: return channel state (members, messages, read)
    presence: return online status of members
    """

    watch: bool = False
    state: bool = True
    presence: bool = False


class QueryRequest(QueryOptions):
    """Body of POST channels/{type}/{id}/query. `data` always carries created_by."""

    data: dict[str, Any] = Field(default_factory=dict)


class UpdateChannelRequest(_Payload):
    """Body of POST channels/{type}/{id} that replaces custom properties."""

    data: dict[str, Any]
    message: Message | None = None


class MembershipRequest(_Payload):
    """Body of POST channels/{type}/{id} for membership, role and invite changes."""

    add_members: list[str] | None = None
    remove_members: list[str] | None = None
    add_moderators: list[str] | None = None
    demote_moderators: list[str] | None = None
    invites: list[str] | None = None
    accept_invite: bool | None = None
    reject_invite: bool | None = None
    user_id: str | None = None
    message: Message | None = None


class BanOptions(_Payload):
    """
    Optional ban settings.

    timeout: ban duration in minutes; no timeout means permanent
    reason: shown to moderators
    """

    timeout: int | None = Field(default=None, gt=0)
    reason: str | None = None


class BanRequest(BanOptions):
    """Body of POST moderation/ban, scoped to one channel by type and id."""

    type: str
    id: str
    target_user_id: str
    user_id: str


class UnbanOptions(_Payload):
    """
    Optional unban settings.

    created_by: moderator lifting the ban, recorded on the moderation log
    """

    created_by: str | None = None


class UnbanRequest(UnbanOptions):
    """Query parameters of DELETE moderation/ban. Channel identity always wins over options."""

    type: str
    id: str
    target_user_id: str


class MarkReadOptions(_Payload):
    """
    Optional mark-read settings.

    message_id: last message the user has read; defaults to the latest
    """

    message_id: str | None = None


class MarkReadRequest(MarkReadOptions):
    """Body of POST channels/{type}/{id}/read."""

    user: UserRef


class SendMessageRequest(_Payload):
    """Body of POST channels/{type}/{id}/message."""

    message: Message
