# src/solana_relay/fee_relayer/__init__.py

from .models import Token, TransferSolParams, TransferSPLTokenParams
from .relayer import DEFAULT_FEE_RELAYER_URL, FeeRelayer, SigningContext

__all__ = [
    "DEFAULT_FEE_RELAYER_URL",
    "FeeRelayer",
    "SigningContext",
    "Token",
    "TransferSolParams",
    "TransferSPLTokenParams",
]
