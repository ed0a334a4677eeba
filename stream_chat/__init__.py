"""Stream Chat server-side client: channel handles kept in sync with the API."""

from stream_chat.channel import Channel
from stream_chat.client import StreamClient
from stream_chat.errors import StreamAPIError, StreamChatError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "Channel",
    "StreamClient",
    "StreamAPIError",
    "StreamChatError",
    "ValidationError",
]
