# src/solana_relay/core/pubkeys.py

from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID as TOKEN_PROGRAM_ID_SPL  # Renamed to avoid conflict

from .exceptions import InvalidAddress


class SolanaProgramAddresses:
    TOKEN_PROGRAM_ID: Pubkey = TOKEN_PROGRAM_ID_SPL


def parse_pubkey(address: str) -> Pubkey:
    """Parse a base58 address, raising InvalidAddress instead of ValueError."""
    try:
        return Pubkey.from_string(address)
    except (ValueError, TypeError) as e:
        raise InvalidAddress(f"Invalid address: {address!r}") from e
