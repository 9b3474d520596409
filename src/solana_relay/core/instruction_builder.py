# src/solana_relay/core/instruction_builder.py

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams as SystemTransferParams, transfer as system_transfer
from spl.token.instructions import transfer as token_transfer
from spl.token.models import TransferParams as TokenTransferParams

from .pubkeys import SolanaProgramAddresses


class InstructionBuilder:
    @staticmethod
    def build_native_transfer(from_pubkey: Pubkey, to_pubkey: Pubkey, lamports: int) -> Instruction:
        """System program transfer of ``lamports`` from ``from_pubkey`` to ``to_pubkey``."""
        return system_transfer(
            SystemTransferParams(from_pubkey=from_pubkey, to_pubkey=to_pubkey, lamports=lamports)
        )

    @staticmethod
    def build_token_transfer(
            source: Pubkey,
            destination: Pubkey,
            owner: Pubkey,
            amount: int,
            program_id: Pubkey = SolanaProgramAddresses.TOKEN_PROGRAM_ID,
    ) -> Instruction:
        """SPL token transfer between two token accounts, authorised by ``owner``."""
        return token_transfer(
            TokenTransferParams(
                program_id=program_id,
                source=source,
                dest=destination,
                owner=owner,
                amount=amount,
                signers=[],
            )
        )
