"""Message models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from stream_chat.models.user import User


class Message(BaseModel):
    """
    A channel message.

    `id` and `html` are assigned by the server; both are empty on a message
    built locally and non-empty once it has been sent.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    text: str = ""
    user: User | None = None
    parent_id: str | None = None  # set on thread replies
    type: str | None = None  # regular, reply, system, ...
    show_in_channel: bool | None = None
    html: str | None = None
    attachments: list[dict[str, Any]] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_reply(self) -> bool:
        return self.type == "reply" or bool(self.parent_id)

    @property
    def is_sent(self) -> bool:
        return bool(self.id) and bool(self.html)
