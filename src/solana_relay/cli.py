# src/solana_relay/cli.py

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from solana.rpc.commitment import Commitment

from .config import load_config
from .core.account_storage import InMemoryAccountStorage
from .core.client import SolanaClient
from .core.exceptions import InvalidAddress, InvalidAmount, SolanaRelayError, TransportFailure, Unauthorized
from .core.wallet import Wallet
from .fee_relayer.models import Token
from .fee_relayer.relayer import FeeRelayer
from .utils.audit_logger import AuditLogger
from .utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solana-relay", description="Fee-relayed Solana transfers")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("fee-payer", help="Print the relay's fee payer public key")

    sol = sub.add_parser("transfer-sol", help="Send SOL with the fee paid by the relay")
    sol.add_argument("--to", required=True, help="Recipient wallet address")
    sol.add_argument("--amount", type=int, required=True, help="Amount in lamports")

    tok = sub.add_parser("transfer-token", help="Send SPL tokens with the fee paid by the relay")
    tok.add_argument("--source", required=True, help="Source token account")
    tok.add_argument("--destination", required=True, help="Destination token account")
    tok.add_argument("--mint", required=True, help="Token mint address")
    tok.add_argument("--decimals", type=int, required=True, help="Token decimals")
    tok.add_argument("--amount", type=int, required=True, help="Amount in the token's smallest unit")
    return parser


async def run(args: argparse.Namespace, cfg: Dict[str, Any]) -> str:
    storage = InMemoryAccountStorage()
    if cfg["SOLANA_PRIVATE_KEY"]:
        storage.save(Wallet.from_private_key(cfg["SOLANA_PRIVATE_KEY"], cfg["DERIVATION_PATH"]))
    audit_logger = AuditLogger(log_to_file=True, filepath=cfg["AUDIT_LOG_FILE"]) if cfg["AUDIT_LOG_FILE"] else None

    async with SolanaClient(
        cfg["SOLANA_NODE_RPC_ENDPOINT"],
        commitment=Commitment(cfg["RPC_COMMITMENT"]),
        timeout_seconds=cfg["FEE_RELAYER_TIMEOUT_SECONDS"],
    ) as client:
        relayer = FeeRelayer(
            storage,
            client,
            relay_url=cfg["FEE_RELAYER_URL"],
            timeout_seconds=cfg["FEE_RELAYER_TIMEOUT_SECONDS"],
            audit_logger=audit_logger,
        )
        if args.command == "fee-payer":
            return str(await relayer.get_fee_payer_pubkey())
        if args.command == "transfer-sol":
            return await relayer.transfer_sol(args.to, args.amount)
        token = Token(address=args.mint, decimals=args.decimals)
        return await relayer.transfer_spl_token(args.source, args.destination, token, args.amount)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()  # early .env load
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config()
    except ValueError as e:
        logger.critical(f"Config load failed: {e}")
        return 1

    try:
        result = asyncio.run(run(args, cfg))
    except Unauthorized:
        logger.error("No signer configured: set SOLANA_PRIVATE_KEY.")
        return 2
    except (InvalidAddress, InvalidAmount) as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except TransportFailure as e:
        logger.error(f"Relay unavailable, try again later: {e}")
        return 3
    except SolanaRelayError as e:
        logger.error(f"Relay error: {e}")
        return 3
    except ValueError as e:
        logger.error(f"Invalid SOLANA_PRIVATE_KEY: {e}")
        return 2
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
