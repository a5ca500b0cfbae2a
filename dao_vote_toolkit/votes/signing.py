"""Vote signing helpers"""

from typing import Union

from eth_keys import keys
from eth_utils import to_bytes, to_checksum_address

from dao_vote_toolkit.votes.digest import vote_digest
from dao_vote_toolkit.votes.models import Signature, VoteStatement

# v offset added by wallets to the raw recovery id
LEGACY_V_OFFSET = 27


def load_private_key(private_key: Union[str, bytes]) -> keys.PrivateKey:
    """Build a private key from 32 raw bytes or a hex string"""
    if isinstance(private_key, str):
        private_key = to_bytes(hexstr=private_key)
    if len(private_key) != 32:
        raise ValueError("Private key must be 32 bytes")
    return keys.PrivateKey(private_key)


def address_of(private_key: Union[str, bytes]) -> str:
    """Checksummed address of a private key"""
    return to_checksum_address(
        load_private_key(private_key).public_key.to_canonical_address()
    )


def sign_vote(
    private_key: Union[str, bytes], statement: VoteStatement
) -> Signature:
    """
    Sign a vote the way a wallet's personal_sign over the message hash does.

    The returned signature uses v in {27, 28}.
    """
    signed = load_private_key(private_key).sign_msg_hash(vote_digest(statement))
    return Signature(
        r=signed.r.to_bytes(32, "big"),
        s=signed.s.to_bytes(32, "big"),
        v=signed.v + LEGACY_V_OFFSET,
    )
