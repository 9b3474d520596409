import asyncio
import gc
import threading

import pytest

from solana_relay.core.exceptions import StreamNotInitialized
from solana_relay.monitoring.response_stream import ResponseStream, create_response_stream


async def collect(stream):
    return [value async for value in stream]


@pytest.mark.asyncio
async def test_values_arrive_in_order_then_end():
    stream, emitter = create_response_stream()
    for value in ("v1", "v2", "v3"):
        emitter.emit(value)
    emitter.complete()

    assert await collect(stream) == ["v1", "v2", "v3"]
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_failure_is_raised_once_then_stream_is_finished():
    stream, emitter = create_response_stream()
    emitter.emit(1)
    emitter.fail(ConnectionError("socket dropped"))

    assert await stream.__anext__() == 1
    with pytest.raises(ConnectionError, match="socket dropped"):
        await stream.__anext__()
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_emits_after_termination_are_dropped():
    stream, emitter = create_response_stream()
    emitter.emit("a")
    emitter.complete()
    emitter.emit("late")
    emitter.fail(RuntimeError("late failure"))
    emitter.complete()

    assert emitter.is_terminated
    assert await collect(stream) == ["a"]


@pytest.mark.asyncio
async def test_consumer_waits_for_producer():
    stream, emitter = create_response_stream()

    async def produce():
        await asyncio.sleep(0.01)
        emitter.emit("late value")
        await asyncio.sleep(0.01)
        emitter.complete()

    producer = asyncio.create_task(produce())
    assert await collect(stream) == ["late value"]
    await producer


@pytest.mark.asyncio
async def test_emit_from_another_thread():
    stream, emitter = create_response_stream()

    def produce():
        for i in range(100):
            emitter.emit(i)
        emitter.complete()

    thread = threading.Thread(target=produce)
    thread.start()
    values = await asyncio.wait_for(collect(stream), timeout=5)
    thread.join()

    assert values == list(range(100))


@pytest.mark.asyncio
async def test_racing_terminations_deliver_a_single_terminal_event():
    stream, emitter = create_response_stream()

    def finish(i):
        if i % 2:
            emitter.fail(RuntimeError(f"fail {i}"))
        else:
            emitter.complete()

    threads = [threading.Thread(target=finish, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    with pytest.raises((StopAsyncIteration, RuntimeError)):
        await stream.__anext__()
    await asyncio.sleep(0)

    assert stream._channel.queue.empty()
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_aclose_stops_the_stream():
    stream, emitter = create_response_stream()
    await stream.aclose()
    emitter.emit("ignored")
    assert await collect(stream) == []


@pytest.mark.asyncio
async def test_dropped_stream_releases_channel():
    stream, emitter = create_response_stream()
    del stream
    gc.collect()

    assert emitter.is_terminated
    emitter.emit("nobody listening")


def test_iterating_without_channel_is_a_programming_error():
    with pytest.raises(StreamNotInitialized):
        ResponseStream().__aiter__()
