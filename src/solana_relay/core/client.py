# src/solana_relay/core/client.py

from typing import Optional

import httpx

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import RPCException
from solders.rpc.responses import GetLatestBlockhashResp

from .exceptions import InvalidResponse, TransportFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


class SolanaClient:
    """Thin wrapper over solana-py's AsyncClient exposing what the relay needs."""

    def __init__(
        self,
        rpc_endpoint: str,
        commitment: Commitment = Confirmed,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        self.rpc_endpoint = rpc_endpoint
        self.commitment = commitment
        self.timeout_seconds = timeout_seconds
        self.async_client = async_client or AsyncClient(
            rpc_endpoint, commitment=commitment, timeout=timeout_seconds
        )
        logger.info(f"SolanaClient initialized: {rpc_endpoint} @ {commitment}")

    async def __aenter__(self) -> "SolanaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        try:
            await self.async_client.close()
            logger.info("SolanaClient connection closed.")
        except Exception as e:
            logger.warning(f"Error closing SolanaClient: {e}")

    async def get_recent_blockhash(self) -> str:
        """Returns the latest blockhash as a base58 string."""
        try:
            resp: GetLatestBlockhashResp = await self.async_client.get_latest_blockhash(
                self.commitment
            )
        except (SolanaRpcException, RPCException, httpx.HTTPError) as e:
            logger.error(f"RPC error get_latest_blockhash: {e}")
            raise TransportFailure(f"getLatestBlockhash failed: {e}", cause=e) from e

        value = getattr(resp, "value", None)
        if value is None or value.blockhash is None:
            logger.error(f"get_latest_blockhash returned no value: {resp}")
            raise InvalidResponse("getLatestBlockhash returned no blockhash")
        blockhash = str(value.blockhash)
        logger.debug(f"Latest blockhash: {blockhash}")
        return blockhash
