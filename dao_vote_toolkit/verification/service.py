from typing import Optional

from dao_vote_toolkit.shared.constants import GlobalConstants
from dao_vote_toolkit.shared.exceptions import (
    StateProofFailure,
    VoteVerificationException,
)
from dao_vote_toolkit.shared.results import (
    ErrorSeverity,
    ProcessingError,
    Result,
)
from dao_vote_toolkit.shared.retry import retry_sync_operation
from dao_vote_toolkit.shared.services.web3_service import Web3Service
from dao_vote_toolkit.shared.types import BlockInfo
from dao_vote_toolkit.steel.config import get_chain_spec
from dao_vote_toolkit.steel.environment import StateVerifier
from dao_vote_toolkit.steel.header import get_block_info
from dao_vote_toolkit.steel.rpc import RpcStateVerifier
from dao_vote_toolkit.verification.journal import Journal
from dao_vote_toolkit.verification.verifier import verify_vote
from dao_vote_toolkit.votes.models import VoteInput


class VoteVerificationService:
    """Verifies signed votes on one chain and reports explicit results"""

    def __init__(
        self,
        chain_id: int,
        state_verifier: Optional[StateVerifier] = None,
        max_retries: int = 3,
    ):
        self.chain_id = chain_id
        self.chain_spec = get_chain_spec(chain_id)
        self.max_retries = max_retries
        self.web3_service = None
        if state_verifier is None:
            rpc_url = GlobalConstants.get_rpc_url(chain_id)
            self.web3_service = Web3Service(chain_id, rpc_url)
            state_verifier = RpcStateVerifier(
                self.web3_service, max_retries=max_retries
            )
        self.state_verifier = state_verifier

    def verify(self, vote_input: VoteInput) -> Result[Journal]:
        """
        Verify a signed vote.

        Returns:
            Result[Journal]: Success with the journal, or failure carrying the
            error code. Rejected votes are CRITICAL, state proof failures ERROR.
        """
        context = {
            "chain_id": self.chain_id,
            "voter": vote_input.voter,
            "dao": vote_input.dao,
            "proposal_id": vote_input.proposal_id,
            "block": vote_input.state_input.block_number,
        }

        try:
            journal = verify_vote(vote_input, self.state_verifier, self.chain_spec)
        except VoteVerificationException as e:
            return Result.fail(
                ProcessingError(
                    source="vote_verification",
                    message=f"Vote rejected: {e.message}",
                    severity=ErrorSeverity.CRITICAL,
                    code=e.code,
                    context=context,
                    exception=e,
                )
            )
        except StateProofFailure as e:
            return Result.fail(
                ProcessingError(
                    source="state_proof",
                    message=f"State proof failed: {e.message}",
                    severity=ErrorSeverity.ERROR,
                    code=e.code,
                    context=context,
                    exception=e,
                )
            )

        return Result.ok(journal)

    def get_block_info(self, block_number: int) -> Result[BlockInfo]:
        """
        Get the state input for a block from the RPC node.

        Args:
            block_number: The block number

        Returns:
            Result[BlockInfo]: Success with block info, or failure with error
        """
        if self.web3_service is None:
            return Result.fail_with_message(
                source="block_info",
                message="No RPC connection configured for this service",
                context={"block_number": block_number},
            )

        try:
            block_info = retry_sync_operation(
                get_block_info,
                self.web3_service.w3,
                block_number,
                max_attempts=self.max_retries,
                base_delay=1.0,
                operation_name=f"block_info_{block_number}",
            )
            return Result.ok(block_info)
        except Exception as e:
            return Result.fail(
                ProcessingError(
                    source="block_info",
                    message=f"Error getting block info: {str(e)}",
                    severity=ErrorSeverity.ERROR,
                    context={"block_number": block_number},
                    exception=e,
                )
            )
