"""HTTP client for the Stream Chat API."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from stream_chat import config
from stream_chat.auth import create_server_token
from stream_chat.errors import StreamAPIError, ValidationError

logger = logging.getLogger(__name__)

# Transient HTTP statuses worth another attempt
_RETRYABLE_STATUSES = {429, 502, 503, 504}

# Methods safe to resend after the server may have seen them
_IDEMPOTENT_METHODS = {"DELETE"}
_SAFE_RETRY_ERRORS = (httpx.TransportError,)
# The request never left the client
_UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


def channel_path(channel_type: str, channel_id: str, *segments: str) -> str:
    """Build `channels/{type}/{id}[/segment...]` with type and id URL-escaped."""
    parts = ["channels", quote(channel_type, safe=""), quote(channel_id, safe=""), *segments]
    return "/".join(p for p in parts if p)


class StreamClient:
    """
    HTTP client for the Stream Chat API.

    Holds only configuration, credentials and a connection pool, so one
    instance can be shared by any number of channel handles. Channels never
    close it; the owner does.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize client. Arguments left as None fall back to settings.

        Args:
            api_key: Stream API key
            api_secret: Stream API secret, used to sign the server token
            base_url: API base URL
            timeout: Request timeout in seconds
            max_retries: Retries on transient failures; 0 disables retrying
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        settings = config.settings
        self.api_key = api_key if api_key is not None else settings.STREAM_API_KEY
        self.api_secret = api_secret if api_secret is not None else settings.STREAM_API_SECRET
        if not self.api_key:
            raise ValidationError("API key is empty")
        if not self.api_secret:
            raise ValidationError("API secret is empty")

        self.base_url = (base_url or settings.STREAM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.STREAM_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.STREAM_MAX_RETRIES
        if self.max_retries < 0:
            raise ValidationError(f"max_retries must not be negative, got {self.max_retries}")
        self.retry_backoff = settings.STREAM_RETRY_BACKOFF
        self._token = create_server_token(self.api_secret)
        self.client = httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=transport)

    def _headers(self) -> dict:
        """Build request headers."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": self._token,
            "Stream-Auth-Type": "jwt",
        }

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send a request and decode the JSON response.

        Raises:
            StreamAPIError: If the API returns a non-2xx status
            httpx.HTTPError: If the request fails at the transport level
        """
        query = {"api_key": self.api_key, **(params or {})}
        url = f"/{path.lstrip('/')}"
        retryable_errors = _SAFE_RETRY_ERRORS if method in _IDEMPOTENT_METHODS else _UNSENT_ERRORS

        attempt = 0
        while True:
            try:
                res = self.client.request(method, url, params=query, json=data, headers=self._headers())
            except retryable_errors as e:
                if attempt < self.max_retries:
                    self._backoff(method, path, attempt, e)
                    attempt += 1
                    continue
                raise

            logger.debug("%s %s -> %s", method, path, res.status_code)

            if res.status_code in _RETRYABLE_STATUSES and attempt < self.max_retries:
                self._backoff(method, path, attempt, f"status {res.status_code}")
                attempt += 1
                continue

            return self._decode(res)

    def _backoff(self, method: str, path: str, attempt: int, reason: object) -> None:
        wait_time = self.retry_backoff * 2**attempt
        logger.warning(
            "%s %s failed (attempt %d), retrying in %.1fs: %s",
            method,
            path,
            attempt + 1,
            wait_time,
            reason,
        )
        time.sleep(wait_time)

    @staticmethod
    def _decode(res: httpx.Response) -> dict[str, Any]:
        body: Any = {}
        if res.content:
            try:
                body = res.json()
            except ValueError:
                body = {"message": res.text}
        if not isinstance(body, dict):
            body = {"message": str(body)}

        if res.is_success:
            return body

        raise StreamAPIError.from_response(res.status_code, body)

    def post(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make POST request."""
        return self._request("POST", path, params=params, data=data)

    def delete(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make DELETE request."""
        return self._request("DELETE", path, params=params, data=data)

    def channel(self, channel_type: str, channel_id: str, created_by: str | None = None):
        """
        Return a local handle for a channel without making a request.

        Call `refresh()` on it to load server state.
        """
        from stream_chat.channel import Channel

        return Channel.for_client(self, channel_type, channel_id, created_by)

    def create_channel(
        self,
        channel_type: str,
        channel_id: str,
        user_id: str,
        data: dict[str, Any] | None = None,
    ):
        """
        Create a channel of the given type and id, or get it if it already exists.

        Args:
            channel_type: Channel type, e.g. "messaging"
            channel_id: Channel ID; may be empty when `data` lists members,
                in which case the server assigns one
            user_id: User creating the channel
            data: Extra channel data, e.g. {"members": [...], "name": "..."}

        Returns:
            Channel handle populated from the server snapshot
        """
        from stream_chat.channel import Channel

        return Channel.create(self, channel_type, channel_id, user_id, data)

    def close(self):
        """Close client."""
        self.client.close()

    def __enter__(self) -> StreamClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
