from dao_vote_toolkit.votes.digest import (
    encode_vote_message,
    hash_vote,
    vote_digest,
)
from dao_vote_toolkit.votes.models import Signature, VoteInput, VoteStatement
from dao_vote_toolkit.votes.signing import sign_vote

__all__ = [
    "VoteStatement",
    "VoteInput",
    "Signature",
    "encode_vote_message",
    "hash_vote",
    "vote_digest",
    "sign_vote",
]
