"""
Server-side authentication for the Stream API.

Every server request is signed with a JWT issued from the API secret.
"""

from __future__ import annotations

from datetime import UTC, datetime

import jwt

JWT_ALGORITHM = "HS256"


def create_server_token(api_secret: str) -> str:
    """
    Create the server-side JWT sent in the Authorization header.

    Args:
        api_secret: Stream API secret

    Returns:
        Signed JWT string
    """
    payload = {
        "server": True,
        "iat": datetime.now(UTC),
    }
    return jwt.encode(payload, api_secret, algorithm=JWT_ALGORITHM)
