from types import SimpleNamespace

import httpx
import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solders.hash import Hash

from solana_relay.core.client import SolanaClient
from solana_relay.core.exceptions import InvalidResponse, TransportFailure


class FakeAsyncClient:
    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.commitments = []
        self.closed = False

    async def get_latest_blockhash(self, commitment=None):
        self.commitments.append(commitment)
        if self.error:
            raise self.error
        return SimpleNamespace(value=self.value)

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_get_recent_blockhash_returns_base58_string():
    blockhash = Hash.new_unique()
    fake = FakeAsyncClient(value=SimpleNamespace(blockhash=blockhash, last_valid_block_height=10))
    async with SolanaClient("http://rpc.test", async_client=fake) as client:
        assert await client.get_recent_blockhash() == str(blockhash)
    assert fake.commitments == ["confirmed"]
    assert fake.closed


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    SolanaRpcException(httpx.ReadTimeout("timed out"), AsyncClient.get_latest_blockhash, None, None),
    RPCException({"code": -32005, "message": "Node is behind"}),
    httpx.ConnectError("refused"),
])
async def test_rpc_errors_become_transport_failures(error):
    client = SolanaClient("http://rpc.test", async_client=FakeAsyncClient(error=error))
    with pytest.raises(TransportFailure) as exc_info:
        await client.get_recent_blockhash()
    assert exc_info.value.cause is error


@pytest.mark.asyncio
async def test_missing_value_is_invalid_response():
    client = SolanaClient("http://rpc.test", async_client=FakeAsyncClient(value=None))
    with pytest.raises(InvalidResponse):
        await client.get_recent_blockhash()
