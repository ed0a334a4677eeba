"""User models. Users are managed by the user directory; channels reference them by value."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """A chat user as embedded in channel, member and message payloads."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    image: str | None = None
    role: str | None = None
    online: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_active: datetime | None = None


class UserRef(BaseModel):
    """Bare `{"id": ...}` reference used in request payloads."""

    model_config = ConfigDict(extra="forbid")

    id: str
