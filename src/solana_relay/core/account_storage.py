# src/solana_relay/core/account_storage.py

from typing import Optional, Protocol

from solders.keypair import Keypair

from .wallet import Wallet


class AccountStorage(Protocol):
    def active_signer(self) -> Optional[Keypair]:
        ...


class InMemoryAccountStorage:
    """Keeps the signed-in wallet for the lifetime of the process."""

    def __init__(self, wallet: Optional[Wallet] = None):
        self._wallet = wallet

    @property
    def wallet(self) -> Optional[Wallet]:
        return self._wallet

    def save(self, wallet: Wallet) -> None:
        self._wallet = wallet

    def clear(self) -> None:
        self._wallet = None

    def active_signer(self) -> Optional[Keypair]:
        return self._wallet.keypair if self._wallet else None
