"""
Channel handle and the operations that mutate a channel.

A Channel is a long-lived local snapshot of server state plus a reference to
the client it talks through. Operations whose response carries channel state
(create, query/refresh, remove_members, accept_invite, reject_invite) merge it
into the handle. The rest return no state and leave the handle untouched;
call `refresh()` to observe their effect. This asymmetry follows the API and
is intentional.

A handle has no internal locking. Do not run operations on the same handle
from several threads at once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import PrivateAttr

from stream_chat.client import StreamClient, channel_path
from stream_chat.errors import StreamAPIError, ValidationError
from stream_chat.merge import apply_payload
from stream_chat.models.channel import ChannelState
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

logger = logging.getLogger(__name__)

BAN_PATH = "moderation/ban"


def _require(value: str | None, what: str) -> None:
    if not value:
        raise ValidationError(f"{what} is empty")


def _require_ids(user_ids: Sequence[str]) -> list[str]:
    if isinstance(user_ids, str):
        raise ValidationError("user IDs must be a list, not a string")
    ids = list(user_ids)
    if not ids:
        raise ValidationError("user IDs are empty")
    if any(not user_id for user_id in ids):
        raise ValidationError("user IDs contain an empty ID")
    return ids


class Channel(ChannelState):
    """Local handle of a remote channel."""

    _client: StreamClient = PrivateAttr()

    @classmethod
    def for_client(
        cls,
        client: StreamClient,
        channel_type: str,
        channel_id: str,
        created_by: str | None = None,
    ) -> Channel:
        """Build an unsynced handle bound to `client`."""
        channel = cls(
            type=channel_type,
            id=channel_id,
            created_by=User(id=created_by) if created_by else None,
        )
        channel._client = client
        return channel

    @classmethod
    def create(
        cls,
        client: StreamClient,
        channel_type: str,
        channel_id: str,
        user_id: str,
        data: dict[str, Any] | None = None,
    ) -> Channel:
        """
        Create a channel or get the existing one with the same type and id.

        An empty `channel_id` is allowed only when `data` lists members; the
        server then assigns an id derived from them.

        Merges: full snapshot.

        Raises:
            ValidationError: If type or user ID is empty, or the ID is empty
                and no members are given
        """
        _require(channel_type, "channel type")
        _require(user_id, "user ID")

        channel = cls.for_client(client, channel_type, channel_id, created_by=user_id)
        channel.query(QueryOptions(watch=False, state=True, presence=False), data)
        logger.info("create_channel: %s by %s (%d members)", channel.cid, user_id, channel.member_count)
        return channel

    @property
    def client(self) -> StreamClient:
        return self._client

    def _path(self, *segments: str) -> str:
        _require(self.type, "channel type")
        _require(self.id, "channel ID")
        return channel_path(self.type, self.id, *segments)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def query(self, options: QueryOptions | None = None, data: dict[str, Any] | None = None) -> None:
        """
        Query the channel and merge the returned state into this handle.

        Args:
            options: What to ask for (watch, state, presence)
            data: Extra channel data sent with the query; used on creation

        Merges: full snapshot.

        Raises:
            ValidationError: If the type is empty, or the ID is empty and
                `data` lists no members
        """
        _require(self.type, "channel type")
        if not self.id and not (data or {}).get("members"):
            raise ValidationError("channel ID is empty and no members are given")
        options = options or QueryOptions()

        data = dict(data or {})
        if self.created_by is not None:
            data["created_by"] = UserRef(id=self.created_by.id).model_dump()

        payload = QueryRequest(**options.model_dump(), data=data).to_payload()
        # An empty ID is dropped from the path; the server assigns one
        path = channel_path(self.type, self.id, "query")

        resp = self._client.post(path, data=payload)
        apply_payload(self, resp)

    def refresh(self) -> None:
        """Pull the latest full snapshot. Merges: full snapshot."""
        _require(self.id, "channel ID")
        self.query(QueryOptions(watch=False, state=True, presence=False))

    def update(self, properties: dict[str, Any], message: Message | None = None) -> None:
        """
        Replace the channel's custom properties.

        Args:
            properties: New custom properties
            message: Optional system message posted with the update

        Merges: nothing. Call refresh() to see the new properties.
        """
        payload = UpdateChannelRequest(data=properties, message=message).to_payload()
        self._client.post(self._path(), data=payload)

    def delete(self) -> None:
        """
        Delete the channel and permanently remove its messages.

        The handle is left as is; discard it afterwards.
        """
        self._client.delete(self._path())
        logger.info("delete_channel: %s", self.cid)

    def truncate(self) -> None:
        """
        Remove all messages from the channel. Members are kept.

        Merges: nothing. Call refresh() to see the empty message list.
        """
        self._client.post(self._path("truncate"))

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def _update_members(self, request: MembershipRequest) -> dict[str, Any]:
        return self._client.post(self._path(), data=request.to_payload())

    def add_members(self, user_ids: Sequence[str], message: Message | None = None) -> None:
        """
        Add members with the given user IDs.

        Merges: nothing. Call refresh() to see the new members.
        """
        ids = _require_ids(user_ids)
        self._update_members(MembershipRequest(add_members=ids, message=message))

    def remove_members(self, user_ids: Sequence[str], message: Message | None = None) -> None:
        """
        Remove members with the given user IDs.

        Merges: the returned snapshot. Its member_count is taken as sent and
        is not reconciled with the members list; refresh() if it matters.
        """
        ids = _require_ids(user_ids)
        resp = self._update_members(MembershipRequest(remove_members=ids, message=message))
        apply_payload(self, resp)

    def invite_members(self, user_ids: Sequence[str], message: Message | None = None) -> None:
        """
        Invite users; they become members once they accept.

        Merges: nothing. Call refresh() to see the invited members.
        """
        ids = _require_ids(user_ids)
        self._update_members(MembershipRequest(invites=ids, message=message))

    def accept_invite(self, user_id: str, message: Message | None = None) -> None:
        """Accept a pending invite on behalf of `user_id`. Merges: the returned snapshot."""
        _require(user_id, "user ID")
        resp = self._update_members(MembershipRequest(accept_invite=True, user_id=user_id, message=message))
        apply_payload(self, resp)

    def reject_invite(self, user_id: str, message: Message | None = None) -> None:
        """Reject a pending invite on behalf of `user_id`. Merges: the returned snapshot."""
        _require(user_id, "user ID")
        resp = self._update_members(MembershipRequest(reject_invite=True, user_id=user_id, message=message))
        apply_payload(self, resp)

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    def add_moderators(self, user_ids: Sequence[str], message: Message | None = None) -> None:
        """
        Promote members to moderators.

        Merges: nothing. Call refresh() to see the new roles.
        """
        ids = _require_ids(user_ids)
        self._update_members(MembershipRequest(add_moderators=ids, message=message))

    def demote_moderators(self, user_ids: Sequence[str], message: Message | None = None) -> None:
        """
        Demote moderators back to members.

        Merges: nothing. Call refresh() to see the new roles.
        """
        ids = _require_ids(user_ids)
        self._update_members(MembershipRequest(demote_moderators=ids, message=message))

    def ban_user(self, target_id: str, user_id: str, options: BanOptions | None = None) -> None:
        """
        Ban `target_id` from this channel.

        Args:
            target_id: User to ban
            user_id: Moderator issuing the ban
            options: Optional timeout (minutes) and reason

        Merges: nothing.
        """
        _require(target_id, "target ID")
        _require(user_id, "user ID")
        _require(self.type, "channel type")
        _require(self.id, "channel ID")
        options = options or BanOptions()

        payload = BanRequest(
            **options.model_dump(),
            type=self.type,
            id=self.id,
            target_user_id=target_id,
            user_id=user_id,
        ).to_payload()
        self._client.post(BAN_PATH, data=payload)
        logger.info("ban_user: %s banned from %s by %s", target_id, self.cid, user_id)

    def unban_user(self, target_id: str, options: UnbanOptions | None = None) -> None:
        """
        Remove the ban on `target_id` for this channel.

        The ban is identified through query parameters; no body is sent.
        Options are merged in first, then channel type, id and target.

        Merges: nothing.
        """
        _require(target_id, "target ID")
        _require(self.type, "channel type")
        _require(self.id, "channel ID")
        options = options or UnbanOptions()

        params = UnbanRequest(
            **options.model_dump(),
            type=self.type,
            id=self.id,
            target_user_id=target_id,
        ).to_payload()
        self._client.delete(BAN_PATH, params=params)
        logger.info("unban_user: %s unbanned from %s", target_id, self.cid)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def mark_read(self, user_id: str, options: MarkReadOptions | None = None) -> None:
        """
        Record that `user_id` has read the channel.

        Only has an effect when the channel type has read_events enabled.

        Merges: nothing.
        """
        _require(user_id, "user ID")
        options = options or MarkReadOptions()
        payload = MarkReadRequest(**options.model_dump(), user=UserRef(id=user_id)).to_payload()
        self._client.post(self._path("read"), data=payload)

    def send_message(self, message: Message, user_id: str) -> Message:
        """
        Send a message as `user_id`.

        Returns:
            The message as stored by the server, with id and html set

        Merges: nothing. The handle's message list is not updated.

        Raises:
            StreamAPIError: If the server response lacks the sent message's id or html
        """
        _require(user_id, "user ID")
        if not message.text and not message.attachments:
            raise ValidationError("message has no text and no attachments")

        outgoing = message.model_copy(update={"user": User(id=user_id)})
        payload = SendMessageRequest(message=outgoing).to_payload()
        resp = self._client.post(self._path("message"), data=payload)

        sent = Message.model_validate(resp.get("message") or {})
        if not sent.is_sent:
            raise StreamAPIError(200, "response is missing the sent message id or html")
        return sent

    def send_reply(self, parent_id: str, message: Message, user_id: str, show_in_channel: bool = False) -> Message:
        """Send `message` as a thread reply to `parent_id`. See send_message."""
        _require(parent_id, "parent message ID")
        reply = message.model_copy(update={"parent_id": parent_id, "show_in_channel": show_in_channel or None})
        return self.send_message(reply, user_id)
