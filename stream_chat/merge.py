"""
Merge engine: reconcile a server response into a long-lived channel handle.

The handle is updated in place so every holder of it sees the new state.
Metadata is replaced wholesale when the response carries a channel object;
the members, messages and read lists are replaced only when the response
carries them. Private attributes (the client reference) are never touched.
"""

from __future__ import annotations

import logging
from typing import Any

from stream_chat.models.channel import LIST_FIELDS, ChannelState, QueryResponse

logger = logging.getLogger(__name__)


def apply_response(channel: ChannelState, response: QueryResponse) -> list[str]:
    """
    Apply a (possibly partial) query response to `channel`.

    Args:
        channel: Local channel handle, mutated in place
        response: Decoded response envelope

    Returns:
        Names of the parts that were applied, e.g. ["channel", "members"]
    """
    updates: dict[str, Any] = {}
    extra: dict[str, Any] | None = None
    applied: list[str] = []

    snapshot = response.channel
    if snapshot is not None:
        for name in ChannelState.model_fields:
            if name not in LIST_FIELDS:
                updates[name] = getattr(snapshot, name)
        extra = dict(snapshot.model_extra or {})
        applied.append("channel")

    for name in LIST_FIELDS:
        value = getattr(response, name)
        # Envelope lists win over lists embedded in the channel object
        if value is None and snapshot is not None and name in snapshot.model_fields_set:
            value = getattr(snapshot, name)
        if value is not None:
            updates[name] = value
            applied.append(name)

    for member in updates.get("members", ()):
        if member.invite_conflict:
            logger.warning("merge: %s member %s invite is both accepted and rejected", channel.cid, member.user_id)

    # Fields go out in one update. Custom data lives in a pydantic slot, not
    # __dict__, so it is swapped right after in a second assignment.
    channel.__dict__.update(updates)
    channel.__pydantic_fields_set__.update(updates)
    if extra is not None:
        object.__setattr__(channel, "__pydantic_extra__", extra)

    logger.debug("merge: %s applied %s", channel.cid, applied or "nothing")
    return applied


def apply_payload(channel: ChannelState, payload: dict[str, Any]) -> list[str]:
    """Decode a raw JSON response body and apply it to `channel`."""
    return apply_response(channel, QueryResponse.model_validate(payload))
