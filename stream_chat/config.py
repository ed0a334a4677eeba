"""
Stream Chat client configuration — all environment variables in one place.

Read from environment when Settings is instantiated. Never hardcode secrets.
"""

from __future__ import annotations

import os

DEFAULT_BASE_URL = "https://chat-us-east-1.stream-io-api.com"


class Settings:
    """Client settings from environment variables."""

    def __init__(self) -> None:
        # Credentials
        self.STREAM_API_KEY: str = os.environ.get("STREAM_API_KEY", "")
        self.STREAM_API_SECRET: str = os.environ.get("STREAM_API_SECRET", "")

        # Endpoint
        self.STREAM_BASE_URL: str = os.environ.get("STREAM_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

        # Transport
        self.STREAM_TIMEOUT: float = float(os.environ.get("STREAM_TIMEOUT", "6.0"))
        self.STREAM_MAX_RETRIES: int = int(os.environ.get("STREAM_MAX_RETRIES", "1"))
        self.STREAM_RETRY_BACKOFF: float = 0.5  # seconds, doubled per attempt


# Singleton instance
settings = Settings()
