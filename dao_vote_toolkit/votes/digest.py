"""Vote message encoder and signing digest"""

from dao_vote_toolkit.crypto.hashing import keccak256
from dao_vote_toolkit.shared.constants import VoteConstants
from dao_vote_toolkit.votes.models import VoteStatement


def encode_vote_message(statement: VoteStatement) -> bytes:
    """
    Canonical vote message, 93 bytes:

    chain_id (8, BE) || dao (20) || proposal_id (32, BE) || direction (1)
    || balance (32, BE)
    """
    return b"".join(
        [
            statement.chain_id.to_bytes(VoteConstants.CHAIN_ID_BYTES, "big"),
            statement.dao_bytes,
            statement.proposal_id.to_bytes(VoteConstants.UINT256_BYTES, "big"),
            statement.direction.to_bytes(VoteConstants.DIRECTION_BYTES, "big"),
            statement.balance.to_bytes(VoteConstants.UINT256_BYTES, "big"),
        ]
    )


def hash_vote_message(statement: VoteStatement) -> bytes:
    """keccak256 of the canonical vote message"""
    return keccak256(encode_vote_message(statement))


def prefix_message_hash(message_hash: bytes) -> bytes:
    """Apply the personal_sign prefix to a 32-byte hash and rehash it"""
    if len(message_hash) != 32:
        raise ValueError(
            f"Message hash must be 32 bytes, got {len(message_hash)}"
        )
    return keccak256(VoteConstants.PERSONAL_MESSAGE_PREFIX + message_hash)


def vote_digest(statement: VoteStatement) -> bytes:
    """The digest a wallet produces when personal-signing the message hash"""
    return prefix_message_hash(hash_vote_message(statement))


def hash_vote(
    chain_id: int,
    dao: str,
    proposal_id: int,
    direction: int,
    balance: int,
) -> bytes:
    """
    Build the signing digest of a vote from its fields.

    Args:
        chain_id (int): Chain the vote is cast on.
        dao (str): DAO contract address.
        proposal_id (int): Proposal identifier (uint256).
        direction (int): 0 against, 1 for.
        balance (int): Voting balance claimed by the voter (uint256).

    Returns:
        bytes: 32-byte digest expected to be signed by the voter.
    """
    return vote_digest(
        VoteStatement(
            chain_id=chain_id,
            dao=dao,
            proposal_id=proposal_id,
            direction=direction,
            balance=balance,
        )
    )
