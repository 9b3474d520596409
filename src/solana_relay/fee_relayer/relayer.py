# src/solana_relay/fee_relayer/relayer.py

import asyncio
import json
from typing import Any, Dict, NamedTuple, Optional, Protocol

import base58
import httpx
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..core.account_storage import AccountStorage
from ..core.exceptions import (
    InvalidAmount,
    InvalidResponse,
    SolanaRelayError,
    TransportFailure,
    Unauthorized,
)
from ..core.instruction_builder import InstructionBuilder
from ..core.pubkeys import parse_pubkey
from ..core.transactions import sign_for_fee_payer
from ..utils.audit_logger import AuditLogger
from ..utils.logger import get_logger
from .models import Token, TransferSolParams, TransferSPLTokenParams

logger = get_logger(__name__)

DEFAULT_FEE_RELAYER_URL = "https://fee-relayer.solana.p2p.org"
DEFAULT_TIMEOUT_SECONDS = 30

MAX_U64 = 2**64 - 1

FEE_PAYER_PATH = "/fee_payer/pubkey"
TRANSFER_SOL_PATH = "/transfer_sol"
TRANSFER_TOKEN_PATH = "/transfer_spl_token"


class RecentBlockhashProvider(Protocol):
    async def get_recent_blockhash(self) -> str:
        ...


class SigningContext(NamedTuple):
    fee_payer: Pubkey
    recent_blockhash: str


class FeeRelayer:
    """
    Submits transfers to a relay service that pays the network fee.

    The transaction is signed locally by the active signer; only the base58
    signature and public transfer fields are sent to the relay.
    """

    def __init__(
        self,
        account_storage: AccountStorage,
        solana_client: RecentBlockhashProvider,
        relay_url: str = DEFAULT_FEE_RELAYER_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.account_storage = account_storage
        self.solana_client = solana_client
        self.relay_url = relay_url.rstrip("/")
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds
        self.audit_logger = audit_logger

    async def get_fee_payer_pubkey(self) -> Pubkey:
        """Public key of the account that pays fees for relayed transactions."""
        body = await self._request("GET", FEE_PAYER_PATH)
        try:
            fee_payer = Pubkey.from_string(body.strip())
        except ValueError as e:
            logger.error(f"fee_payer/pubkey returned an invalid public key: {body!r}")
            raise InvalidResponse(f"Invalid fee payer public key: {body!r}") from e
        logger.debug(f"fee_payer/pubkey: {fee_payer}")
        return fee_payer

    async def transfer_sol(self, destination: str, amount: int) -> str:
        """
        Transfer SOL without paying the fee.

        Args:
            destination: Recipient wallet address.
            amount: Amount in lamports.

        Returns:
            The relay's transaction id.
        """
        signer = self._require_signer()
        self._check_amount(amount)
        context = await self._fetch_signing_context()

        instruction = InstructionBuilder.build_native_transfer(
            signer.pubkey(), parse_pubkey(destination), amount
        )
        signature = self._sign(signer, instruction, context)
        params = TransferSolParams(
            sender=str(signer.pubkey()),
            recipient=destination,
            amount=amount,
            signature=signature,
            blockhash=context.recent_blockhash,
        )
        return await self._send_transaction(TRANSFER_SOL_PATH, params.to_json())

    async def transfer_spl_token(self, source: str, destination: str, token: Token, amount: int) -> str:
        """
        Transfer SPL tokens without paying the fee.

        Args:
            source: Sender's token account.
            destination: Recipient's token account.
            token: Mint address and decimals of the token.
            amount: Amount in the token's smallest unit.

        Returns:
            The relay's transaction id.
        """
        signer = self._require_signer()
        self._check_amount(amount)
        context = await self._fetch_signing_context()

        instruction = InstructionBuilder.build_token_transfer(
            source=parse_pubkey(source),
            destination=parse_pubkey(destination),
            owner=signer.pubkey(),
            amount=amount,
        )
        signature = self._sign(signer, instruction, context)
        params = TransferSPLTokenParams(
            sender=source,
            recipient=destination,
            mint_address=token.address,
            authority=str(signer.pubkey()),
            amount=amount,
            decimals=token.decimals,
            signature=signature,
            blockhash=context.recent_blockhash,
        )
        return await self._send_transaction(TRANSFER_TOKEN_PATH, params.to_json())

    # --- helpers ---

    def _require_signer(self) -> Keypair:
        signer = self.account_storage.active_signer()
        if signer is None:
            raise Unauthorized("No active account")
        return signer

    @staticmethod
    def _check_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= MAX_U64:
            raise InvalidAmount(f"Amount must be an integer in [0, {MAX_U64}]: {amount!r}")

    async def _fetch_signing_context(self) -> SigningContext:
        fee_payer_task = asyncio.ensure_future(self.get_fee_payer_pubkey())
        blockhash_task = asyncio.ensure_future(self.solana_client.get_recent_blockhash())
        try:
            fee_payer, recent_blockhash = await asyncio.gather(fee_payer_task, blockhash_task)
        except BaseException:
            fee_payer_task.cancel()
            blockhash_task.cancel()
            raise
        return SigningContext(fee_payer=fee_payer, recent_blockhash=recent_blockhash)

    @staticmethod
    def _sign(signer: Keypair, instruction, context: SigningContext) -> str:
        signature = sign_for_fee_payer(
            signer, [instruction], context.fee_payer, context.recent_blockhash
        )
        return base58.b58encode(bytes(signature)).decode("ascii")

    async def _send_transaction(self, path: str, params: Dict[str, Any]) -> str:
        event = path.strip("/").upper()
        try:
            body = await self._request("POST", path, json_body=params)
            transaction_id = self._parse_transaction_id(body)
        except SolanaRelayError as e:
            if self.audit_logger:
                await self.audit_logger.log_relay_event(f"{event}_FAIL", path, params, error=e)
            raise

        logger.info(f"{path}: relayed transaction {transaction_id}")
        if self.audit_logger:
            await self.audit_logger.log_relay_event(f"{event}_SUCCESS", path, params, transaction_id)
        return transaction_id

    @staticmethod
    def _parse_transaction_id(body: str) -> str:
        text = body.strip()
        if text.startswith('"'):
            try:
                text = json.loads(text)
            except json.JSONDecodeError as e:
                raise InvalidResponse(f"Malformed transaction id: {body!r}") from e
        if not isinstance(text, str) or not text:
            raise InvalidResponse(f"Relay returned no transaction id: {body!r}")
        return text

    async def _request(self, method: str, path: str, json_body: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.relay_url}{path}"
        try:
            if self.http_client is not None:
                response = await self.http_client.request(method, url, json=json_body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(method, url, json=json_body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} failed with HTTP {e.response.status_code}")
            raise TransportFailure(
                f"{method} {path} returned HTTP {e.response.status_code}", cause=e
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportFailure(f"{method} {path} failed: {e}", cause=e) from e
        return response.text
