# src/solana_relay/monitoring/response_stream.py
"""
Push-to-pull bridge for subscription results.

A producer (usually a websocket callback) pushes values through a
``StreamEmitter``; a single consumer pulls them with ``async for``.
"""

import asyncio
import threading
import weakref
from typing import Any, AsyncIterator, Generic, Optional, Tuple, TypeVar

from ..core.exceptions import StreamNotInitialized
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_VALUE = "value"
_FAILURE = "failure"
_END = "end"


class _Channel:
    """Queue shared by one emitter and one stream. Terminates at most once."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop
        self.queue: asyncio.Queue = asyncio.Queue()
        self._lock = threading.Lock()
        self._terminated = False

    @property
    def terminated(self) -> bool:
        return self._terminated

    def offer(self, kind: str, payload: Any = None) -> bool:
        with self._lock:
            if self._terminated:
                return False
            if kind != _VALUE:
                self._terminated = True
            # Scheduled under the lock so callbacks run in emission order.
            try:
                self.loop.call_soon_threadsafe(self.queue.put_nowait, (kind, payload))
            except RuntimeError:
                logger.debug(f"Dropping {kind} event: event loop is closed")
                return False
            return True


class StreamEmitter(Generic[T]):
    """Producer side of a response stream."""

    def __init__(self, channel: _Channel):
        self._channel_ref = weakref.ref(channel)

    @property
    def is_terminated(self) -> bool:
        channel = self._channel_ref()
        return channel is None or channel.terminated

    def emit(self, value: T) -> None:
        """Deliver ``value``. Dropped silently once the stream has terminated."""
        self._offer(_VALUE, value)

    def fail(self, error: BaseException) -> None:
        self._offer(_FAILURE, error)

    def complete(self) -> None:
        self._offer(_END)

    def _offer(self, kind: str, payload: Any = None) -> None:
        channel = self._channel_ref()
        if channel is None:
            return
        channel.offer(kind, payload)


class ResponseStream(Generic[T]):
    """Single-consumer async iterator fed by a ``StreamEmitter``."""

    def __init__(self, channel: Optional[_Channel] = None):
        self._channel = channel
        self._finished = False

    def __aiter__(self) -> AsyncIterator[T]:
        if self._channel is None:
            raise StreamNotInitialized("stream was not initialized")
        return self

    async def __anext__(self) -> T:
        if self._channel is None:
            raise StreamNotInitialized("stream was not initialized")
        if self._finished:
            raise StopAsyncIteration

        kind, payload = await self._channel.queue.get()
        if kind == _VALUE:
            return payload
        self._finished = True
        if kind == _FAILURE:
            raise payload
        raise StopAsyncIteration

    async def aclose(self) -> None:
        """Stop consuming. Later emits are dropped."""
        if self._channel is not None:
            self._channel.offer(_END)
        self._finished = True


def create_response_stream(
        loop: Optional[asyncio.AbstractEventLoop] = None,
) -> Tuple[ResponseStream[Any], StreamEmitter[Any]]:
    """Create a connected (stream, emitter) pair bound to ``loop`` or the running loop."""
    channel = _Channel(loop or asyncio.get_running_loop())
    return ResponseStream(channel), StreamEmitter(channel)
