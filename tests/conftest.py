import asyncio
from typing import List

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair

from solana_relay.core.account_storage import InMemoryAccountStorage
from solana_relay.core.wallet import Wallet

RELAY_URL = "https://relay.test"
BLOCKHASH = str(Hash(bytes(range(32))))


class FakeBlockhashProvider:
    """Stands in for SolanaClient; records calls and can fail or stall."""

    def __init__(self, blockhash: str = BLOCKHASH, error: Exception = None, delay: float = 0):
        self.blockhash = blockhash
        self.error = error
        self.delay = delay
        self.calls = 0
        self.cancelled = False

    async def get_recent_blockhash(self) -> str:
        self.calls += 1
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error:
            raise self.error
        return self.blockhash


class RelayStub:
    """httpx MockTransport handler emulating the fee relay endpoints."""

    def __init__(self, fee_payer: str, tx_id: str = "5VERYtxid", fee_payer_status: int = 200,
                 transfer_status: int = 200):
        self.fee_payer = fee_payer
        self.tx_id = tx_id
        self.fee_payer_status = fee_payer_status
        self.transfer_status = transfer_status
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/fee_payer/pubkey":
            return httpx.Response(self.fee_payer_status, text=self.fee_payer)
        if request.url.path in ("/transfer_sol", "/transfer_spl_token"):
            return httpx.Response(self.transfer_status, text=self.tx_id)
        return httpx.Response(404)

    @property
    def posts(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def signer() -> Keypair:
    return Keypair()


@pytest.fixture
def fee_payer() -> Keypair:
    return Keypair()


@pytest.fixture
def storage(signer) -> InMemoryAccountStorage:
    return InMemoryAccountStorage(Wallet(signer))
