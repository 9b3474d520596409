# src/solana_relay/core/derivation.py

from enum import Enum

from .exceptions import UnknownScheme


class DerivationPath(Enum):
    """Supported key derivation paths for Solana accounts."""

    DEPRECATED = "m/501'/0'/0/0"
    BIP44 = "m/44'/501'/0'/0'"

    @classmethod
    def default(cls) -> "DerivationPath":
        return cls.BIP44

    @classmethod
    def parse(cls, identifier: str) -> "DerivationPath":
        """Resolve a symbolic name ("bip44") or a path string to a member."""
        member = cls.__members__.get(identifier.strip().upper())
        if member is not None:
            return member
        return cls(identifier.strip())

    @classmethod
    def _missing_(cls, value):
        raise UnknownScheme(f"Unknown derivation path: {value!r}")
