# src/solana_relay/__init__.py

from .core import DerivationPath, InMemoryAccountStorage, SolanaClient, Wallet
from .fee_relayer import FeeRelayer, Token
from .monitoring import ResponseStream, SocketListener, create_response_stream

__version__ = "0.1.0"

__all__ = [
    "DerivationPath",
    "InMemoryAccountStorage",
    "SolanaClient",
    "Wallet",
    "FeeRelayer",
    "Token",
    "ResponseStream",
    "SocketListener",
    "create_response_stream",
]
