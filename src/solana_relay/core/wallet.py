# src/solana_relay/core/wallet.py

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .derivation import DerivationPath
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Wallet:
    """ Represents the user's wallet with keypair for signing. """

    def __init__(self, keypair: Keypair, derivation_path: DerivationPath = DerivationPath.default()):
        self.keypair = keypair
        self.pubkey: Pubkey = keypair.pubkey()
        self.derivation_path = derivation_path
        logger.info(f"Wallet initialized for pubkey: {self.pubkey} ({self.derivation_path.value})")

    @classmethod
    def from_private_key(
        cls,
        private_key_bs58: str,
        derivation_path: DerivationPath = DerivationPath.default(),
    ) -> "Wallet":
        """
        Loads a base58-encoded 64-byte keypair.

        The key is used as-is; ``derivation_path`` is only recorded on the wallet
        as the scheme the key was originally derived with. It does not change the
        resulting pubkey. Use ``from_seed`` to derive a key along a path.
        """
        try:
            private_key_bytes: bytes = base58.b58decode(private_key_bs58)
            keypair = Keypair.from_bytes(private_key_bytes)
        except ValueError as e:
            logger.error(f"Invalid base58 private key provided: {e}")
            raise ValueError("Invalid private key format") from e
        return cls(keypair, derivation_path)

    @classmethod
    def from_seed(
        cls,
        seed: bytes,
        derivation_path: DerivationPath = DerivationPath.default(),
    ) -> "Wallet":
        """ Derives the account keypair for ``derivation_path`` from a BIP39 seed. """
        keypair = Keypair.from_seed_and_derivation_path(seed, derivation_path.value)
        return cls(keypair, derivation_path)

    def __repr__(self) -> str:
        return f"Wallet(pubkey={self.pubkey}, derivation_path={self.derivation_path.name})"
