# src/solana_relay/core/transactions.py

from typing import Optional, Sequence

from solders.hash import Hash as Blockhash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from .exceptions import InvalidResponse, SignatureNotFound
from ..utils.logger import get_logger

logger = get_logger(__name__)


def parse_blockhash(recent_blockhash: str) -> Blockhash:
    try:
        return Blockhash.from_string(recent_blockhash)
    except ValueError as e:
        raise InvalidResponse(f"Invalid blockhash: {recent_blockhash!r}") from e


def build_unsigned_transaction(
        instructions: Sequence[Instruction],
        fee_payer: Pubkey,
        recent_blockhash: str,
) -> Transaction:
    """Legacy transaction whose fee payer and recent blockhash are fixed before signing."""
    message = Message.new_with_blockhash(list(instructions), fee_payer, parse_blockhash(recent_blockhash))
    return Transaction.new_unsigned(message)


def find_signature(transaction: Transaction, pubkey: Pubkey) -> Optional[Signature]:
    """Signature recorded for ``pubkey``, or None if the key has not signed."""
    header = transaction.message.header
    signer_keys = transaction.message.account_keys[:header.num_required_signatures]
    for key, signature in zip(signer_keys, transaction.signatures):
        if key == pubkey and signature != Signature.default():
            return signature
    return None


def sign_for_fee_payer(
        signer: Keypair,
        instructions: Sequence[Instruction],
        fee_payer: Pubkey,
        recent_blockhash: str,
) -> Signature:
    """
    Signs a transaction paid for by ``fee_payer`` with ``signer`` only.
    The fee payer's slot is left empty for the relay to countersign.
    """
    transaction = build_unsigned_transaction(instructions, fee_payer, recent_blockhash)
    transaction.partial_sign([signer], transaction.message.recent_blockhash)

    signature = find_signature(transaction, signer.pubkey())
    if signature is None:
        logger.error(f"No signature for {signer.pubkey()} after signing")
        raise SignatureNotFound(f"Signature not found for {signer.pubkey()}")
    return signature
