# src/solana_relay/monitoring/socket_listener.py

import asyncio
import itertools
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import websockets

from ..core.exceptions import InvalidResponse, TransportFailure
from ..utils.logger import get_logger
from .response_stream import ResponseStream, StreamEmitter, create_response_stream

logger = get_logger(__name__)


@dataclass
class Subscription:
    subscription_id: int
    method: str  # e.g. "accountSubscribe"
    stream: ResponseStream


class SocketListener:
    """
    JSON-RPC pubsub client. Each ``*Subscribe`` call returns a Subscription whose
    stream yields the ``result`` of every matching notification.
    """

    def __init__(
        self,
        wss_endpoint: str,
        commitment: str = "confirmed",
        connect: Callable[..., Any] = websockets.connect,
    ):
        self.wss_endpoint = wss_endpoint
        self.commitment = commitment
        self._connect = connect
        self._ws = None
        self._reader_task: Optional[asyncio.Task] = None
        self._request_ids = itertools.count(1)
        self._pending: Dict[int, asyncio.Future] = {}
        self._emitters: Dict[int, StreamEmitter] = {}
        self._methods: Dict[int, str] = {}
        self._closing = False

    async def __aenter__(self) -> "SocketListener":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def connect(self) -> None:
        self._closing = False
        try:
            self._ws = await self._connect(self.wss_endpoint)
        except (OSError, websockets.WebSocketException) as e:
            logger.error(f"Could not connect to {self.wss_endpoint}: {e}")
            raise TransportFailure(f"Could not connect to {self.wss_endpoint}", cause=e) from e
        self._reader_task = asyncio.create_task(self._read_loop())
        logger.info(f"SocketListener connected: {self.wss_endpoint}")

    async def close(self) -> None:
        """Stops listening, completes every open stream and closes the WebSocket."""
        self._closing = True
        for future in self._pending.values():
            if not future.done():
                future.set_exception(TransportFailure("SocketListener closed"))
        self._pending.clear()
        for emitter in self._emitters.values():
            emitter.complete()
        self._emitters.clear()
        self._methods.clear()
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
        if self._reader_task is not None:
            self._reader_task.cancel()
            try:
                await self._reader_task
            except asyncio.CancelledError:
                pass
            self._reader_task = None

    # --- subscriptions ---

    async def account_subscribe(self, account: str, encoding: str = "base64") -> Subscription:
        return await self._subscribe(
            "accountSubscribe",
            [account, {"encoding": encoding, "commitment": self.commitment}],
        )

    async def signature_subscribe(self, signature: str) -> Subscription:
        return await self._subscribe(
            "signatureSubscribe", [signature, {"commitment": self.commitment}]
        )

    async def logs_subscribe(self, mentions: str) -> Subscription:
        return await self._subscribe(
            "logsSubscribe", [{"mentions": [mentions]}, {"commitment": self.commitment}]
        )

    async def unsubscribe(self, subscription: Subscription) -> None:
        method = subscription.method.replace("Subscribe", "Unsubscribe")
        emitter = self._emitters.pop(subscription.subscription_id, None)
        self._methods.pop(subscription.subscription_id, None)
        if emitter is not None:
            emitter.complete()
        await self._call(method, [subscription.subscription_id])

    async def _subscribe(self, method: str, params: List[Any]) -> Subscription:
        subscription_id = await self._call(method, params)
        if not isinstance(subscription_id, int):
            raise InvalidResponse(f"{method} returned a non-integer subscription id: {subscription_id!r}")
        stream, emitter = create_response_stream()
        self._emitters[subscription_id] = emitter
        self._methods[subscription_id] = method
        logger.info(f"{method} -> subscription {subscription_id}")
        return Subscription(subscription_id=subscription_id, method=method, stream=stream)

    async def _call(self, method: str, params: List[Any]) -> Any:
        if self._ws is None or self._closing:
            raise TransportFailure("SocketListener is not connected")
        if self._reader_task is not None and self._reader_task.done():
            raise TransportFailure("SocketListener reader has stopped")
        request_id = next(self._request_ids)
        future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        try:
            await self._ws.send(json.dumps({
                "jsonrpc": "2.0",
                "id": request_id,
                "method": method,
                "params": params,
            }))
            return await future
        finally:
            self._pending.pop(request_id, None)

    # --- reader ---

    async def _read_loop(self) -> None:
        try:
            while True:
                raw = await self._ws.recv()
                self._dispatch(json.loads(raw))
        except websockets.ConnectionClosed as e:
            if self._closing:
                return
            logger.warning(f"WebSocket closed: {e}")
            self._fail_all(TransportFailure("WebSocket connection closed", cause=e))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Malformed message from {self.wss_endpoint}: {e}")
            self._fail_all(InvalidResponse(f"Malformed message: {e}"))
        except InvalidResponse as e:
            logger.error(f"Unexpected message from {self.wss_endpoint}: {e}")
            self._fail_all(e)
        except Exception as e:
            logger.error(f"SocketListener reader failed: {e}", exc_info=True)
            self._fail_all(TransportFailure(f"SocketListener reader failed: {e}", cause=e))

    def _dispatch(self, msg: Any) -> None:
        if not isinstance(msg, dict):
            raise InvalidResponse(f"Expected a JSON object, got {type(msg).__name__}")
        request_id = msg.get("id")
        if request_id is not None:
            future = self._pending.get(request_id)
            if future is None or future.done():
                return
            if "error" in msg:
                future.set_exception(InvalidResponse(f"RPC error: {msg['error']}"))
            else:
                future.set_result(msg.get("result"))
            return

        params = msg.get("params") or {}
        if not isinstance(params, dict):
            raise InvalidResponse(f"Notification params must be an object: {params!r}")
        subscription_id = params.get("subscription")
        emitter = self._emitters.get(subscription_id)
        if emitter is None:
            logger.debug(f"Notification for unknown subscription {subscription_id}")
            return
        emitter.emit(params.get("result"))
        # signatureSubscribe is cancelled by the node after its first notification
        if self._methods.get(subscription_id) == "signatureSubscribe":
            self._emitters.pop(subscription_id, None)
            self._methods.pop(subscription_id, None)
            emitter.complete()

    def _fail_all(self, error: Exception) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(error)
        for emitter in self._emitters.values():
            emitter.fail(error)
        self._emitters.clear()
        self._methods.clear()
