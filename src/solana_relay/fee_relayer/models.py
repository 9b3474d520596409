# src/solana_relay/fee_relayer/models.py

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Token:
    address: str  # mint
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class TransferSolParams:
    sender: str
    recipient: str
    amount: int
    signature: str
    blockhash: str

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TransferSPLTokenParams:
    sender: str
    recipient: str
    mint_address: str
    authority: str
    amount: int
    decimals: int
    signature: str
    blockhash: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "recipient": self.recipient,
            "mintAddress": self.mint_address,
            "authority": self.authority,
            "amount": self.amount,
            "decimals": self.decimals,
            "signature": self.signature,
            "blockhash": self.blockhash,
        }
