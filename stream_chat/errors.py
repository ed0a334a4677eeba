"""Exceptions raised by the Stream Chat client."""

from __future__ import annotations


class StreamChatError(Exception):
    """Base exception for Stream Chat client errors."""

    pass


class ValidationError(StreamChatError, ValueError):
    """Required argument missing or empty. Raised before any request is made."""

    pass


class StreamAPIError(StreamChatError):
    """Non-success response from the Stream API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: int | None = None,
        duration: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.code = code
        self.duration = duration
        super().__init__(f"StreamChat error code {code}: {message} (status {status_code})")

    @classmethod
    def from_response(cls, status_code: int, body: dict) -> StreamAPIError:
        """Decode the error envelope the API returns with non-2xx responses."""
        return cls(
            status_code=body.get("StatusCode", status_code),
            message=body.get("message", ""),
            code=body.get("code"),
            duration=body.get("duration"),
        )
