# src/solana_relay/monitoring/__init__.py

from .response_stream import ResponseStream, StreamEmitter, create_response_stream
from .socket_listener import SocketListener, Subscription

__all__ = [
    "ResponseStream",
    "StreamEmitter",
    "create_response_stream",
    "SocketListener",
    "Subscription",
]
