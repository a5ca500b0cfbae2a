from dao_vote_toolkit.verification.journal import Journal
from dao_vote_toolkit.verification.service import VoteVerificationService
from dao_vote_toolkit.verification.verifier import verify_vote

__all__ = ["Journal", "VoteVerificationService", "verify_vote"]
