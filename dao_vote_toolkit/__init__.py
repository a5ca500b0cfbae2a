"""DAO Vote Toolkit - verify signed DAO votes against proven token balances."""

__version__ = "0.1.0"

from .steel import ReplayStateVerifier, RpcStateVerifier
from .verification import Journal, VoteVerificationService, verify_vote
from .votes import Signature, VoteInput, VoteStatement, hash_vote, sign_vote

__all__ = [
    "VoteVerificationService",
    "verify_vote",
    "Journal",
    "VoteStatement",
    "VoteInput",
    "Signature",
    "hash_vote",
    "sign_vote",
    "RpcStateVerifier",
    "ReplayStateVerifier",
]
