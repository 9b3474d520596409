# src/solana_relay/core/__init__.py

from .account_storage import AccountStorage, InMemoryAccountStorage
from .client import SolanaClient
from .derivation import DerivationPath
from .instruction_builder import InstructionBuilder
from .pubkeys import SolanaProgramAddresses
from .transactions import build_unsigned_transaction, find_signature, sign_for_fee_payer
from .wallet import Wallet

__all__ = [
    "AccountStorage",
    "InMemoryAccountStorage",
    "SolanaClient",
    "DerivationPath",
    "InstructionBuilder",
    "SolanaProgramAddresses",
    "build_unsigned_transaction",
    "find_signature",
    "sign_for_fee_payer",
    "Wallet",
]
