"""
Signed vote verifier.

Checks, in order and stopping at the first failure:

1. the signing digest is rebuilt from the statement fields, with the chain
   ID of the chain spec (a digest supplied by the caller is never used)
2. v maps to a recovery id
3. a public key recovers from (r, s) over that digest
4. its address is the claimed voter
5. the direction is 0 or 1
6. the claimed balance is positive
7. the token balance proven by the state environment equals the claim

and returns the journal binding the block commitment, token, voter,
balance and direction.
"""

from eth_utils import to_canonical_address

from dao_vote_toolkit.crypto.recovery import (
    derive_address,
    normalize_recovery_id,
    recover_public_key,
)
from dao_vote_toolkit.shared.constants import VoteConstants
from dao_vote_toolkit.shared.exceptions import (
    BalanceMismatch,
    InvalidDirection,
    NonPositiveBalance,
    SignerMismatch,
    StateProofFailure,
    VoteVerificationException,
)
from dao_vote_toolkit.shared.logging import get_logger
from dao_vote_toolkit.steel.environment import StateVerifier, call_view
from dao_vote_toolkit.steel.types import ChainSpec
from dao_vote_toolkit.verification.journal import Journal
from dao_vote_toolkit.votes.digest import vote_digest
from dao_vote_toolkit.votes.models import VoteInput

_logger = get_logger(__name__)

VALID_DIRECTIONS = (VoteConstants.DIRECTION_AGAINST, VoteConstants.DIRECTION_FOR)


def _proven_balance(
    vote_input: VoteInput, state_verifier: StateVerifier, chain_spec: ChainSpec
):
    try:
        env = state_verifier.into_environment(vote_input.state_input, chain_spec)
        balance = call_view(
            vote_input.token_address,
            env,
            VoteConstants.BALANCE_OF,
            [vote_input.voter],
        )
    except StateProofFailure:
        raise
    except Exception as e:
        raise StateProofFailure(f"State environment failed: {e}") from e
    return env, balance


def _verify(
    vote_input: VoteInput, state_verifier: StateVerifier, chain_spec: ChainSpec
) -> Journal:
    statement = vote_input.statement(chain_spec.chain_id)
    digest = vote_digest(statement)

    signature = vote_input.signature
    recovery_id = normalize_recovery_id(signature.v)
    public_key = recover_public_key(recovery_id, signature.rs, digest)

    signer = derive_address(public_key)
    if signer != to_canonical_address(vote_input.voter):
        raise SignerMismatch(
            f"Signature was produced by 0x{signer.hex()}, "
            f"not by voter {vote_input.voter}"
        )

    if vote_input.direction not in VALID_DIRECTIONS:
        raise InvalidDirection(
            f"Direction must be 0 or 1, got {vote_input.direction}"
        )

    if vote_input.balance <= 0:
        raise NonPositiveBalance("Claimed balance must be positive")

    env, proven_balance = _proven_balance(vote_input, state_verifier, chain_spec)
    if proven_balance != vote_input.balance:
        raise BalanceMismatch(
            f"Claimed balance {vote_input.balance} differs from balance "
            f"{proven_balance} of {vote_input.voter} on token "
            f"{vote_input.token_address}"
        )

    return Journal(
        commitment=env.block_commitment(),
        token_address=vote_input.token_address,
        voter=vote_input.voter,
        balance=vote_input.balance,
        direction=vote_input.direction,
    )


def verify_vote(
    vote_input: VoteInput, state_verifier: StateVerifier, chain_spec: ChainSpec
) -> Journal:
    """
    Verify a signed vote and build its journal.

    Args:
        vote_input: The signed vote and the state input it refers to
        state_verifier: Collaborator proving the voter's token balance
        chain_spec: Chain the vote was cast on; its chain ID is signed

    Returns:
        Journal: The public output of the run

    Raises:
        VoteVerificationException: A check failed (see the subclasses).
        StateProofFailure: The state environment could not be built or
            could not answer the balance query.
    """
    context = (
        f"voter={vote_input.voter} dao={vote_input.dao} "
        f"proposal={vote_input.proposal_id}"
    )
    try:
        journal = _verify(vote_input, state_verifier, chain_spec)
    except VoteVerificationException as e:
        _logger.warning(f"Vote rejected ({e.code}): {e.message} [{context}]")
        raise
    except StateProofFailure as e:
        _logger.warning(f"State proof failed: {e.message} [{context}]")
        raise

    _logger.info(
        f"Vote verified at block {journal.commitment.block_number}: "
        f"direction={journal.direction} balance={journal.balance} [{context}]"
    )
    return journal
