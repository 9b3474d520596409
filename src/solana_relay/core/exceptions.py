# src/solana_relay/core/exceptions.py

from typing import Optional


class SolanaRelayError(Exception):
    """Base class for errors raised by the relay client."""
    pass

class Unauthorized(SolanaRelayError):
    """No active signer in account storage."""
    pass

class InvalidAddress(SolanaRelayError, ValueError):
    """A supplied address string is not a valid base58 public key."""
    pass

class InvalidResponse(SolanaRelayError):
    """A remote response body could not be parsed into the expected type."""
    pass

class SignatureNotFound(SolanaRelayError):
    """The signed transaction holds no signature for the signer's key."""
    pass

class UnknownScheme(SolanaRelayError, ValueError):
    """Unrecognised derivation path identifier."""
    pass

class TransportFailure(SolanaRelayError):
    """Network or HTTP layer failure (connection, timeout, non-2xx status)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StreamNotInitialized(RuntimeError):
    """A response stream was iterated before its channel existed."""
    pass


class InvalidAmount(SolanaRelayError, ValueError):
    """Transfer amount is not an unsigned 64-bit integer."""
    pass
