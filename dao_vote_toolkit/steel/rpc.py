"""RPC-backed state verifier"""

from typing import Any, List, Optional, Sequence

from hexbytes import HexBytes

from dao_vote_toolkit.shared.exceptions import StateProofFailure
from dao_vote_toolkit.shared.logging import get_logger
from dao_vote_toolkit.shared.retry import (
    NETWORK_RETRYABLE_EXCEPTIONS,
    retry_sync_operation,
)
from dao_vote_toolkit.shared.services.resource_manager import (
    resource_manager,
)
from dao_vote_toolkit.shared.services.web3_service import Web3Service
from dao_vote_toolkit.shared.types import RecordedCallData, SnapshotData
from dao_vote_toolkit.steel.environment import (
    StateEnvironment,
    StateVerifier,
    recorded_call,
)
from dao_vote_toolkit.steel.header import decode_header_fields, hash_block_header
from dao_vote_toolkit.steel.types import BlockCommitment, ChainSpec, StateInput

_logger = get_logger(__name__)

READ_ONLY_MUTABILITY = ("view", "pure")


def is_view_function(abi_name: str, function_name: str) -> bool:
    """Whether `function_name` is a view/pure function of ABI `abi_name`"""
    for entry in resource_manager.load_abi(abi_name):
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry.get("stateMutability") in READ_ONLY_MUTABILITY
    return False


class RpcStateEnvironment(StateEnvironment):
    """Answers view calls with eth_call pinned to the committed block hash"""

    def __init__(
        self,
        web3_service: Web3Service,
        commitment: BlockCommitment,
        chain_spec: ChainSpec,
        abi_name: str = "erc20",
        max_retries: int = 3,
    ):
        super().__init__(commitment, chain_spec)
        self.web3_service = web3_service
        self.abi_name = abi_name
        self.max_retries = max_retries
        self.calls: List[RecordedCallData] = []

    def call(
        self, contract_address: str, function_name: str, args: Sequence[Any]
    ) -> Any:
        if not is_view_function(self.abi_name, function_name):
            raise StateProofFailure(
                f"{function_name} is not a view function of {self.abi_name}"
            )

        block_hash = "0x" + self.block_commitment().block_hash.hex()

        def _call():
            contract = self.web3_service.get_contract(
                contract_address, self.abi_name
            )
            function = contract.get_function_by_name(function_name)
            return function(*args).call(block_identifier=block_hash)

        try:
            result = retry_sync_operation(
                _call,
                max_attempts=self.max_retries,
                base_delay=1.0,
                retryable_exceptions=NETWORK_RETRYABLE_EXCEPTIONS,
                operation_name=f"{function_name}_{contract_address[:10]}",
            )
        except Exception as e:
            raise StateProofFailure(
                f"View call {function_name} on {contract_address} failed: {e}"
            ) from e

        self.calls.append(
            recorded_call(contract_address, function_name, args, result)
        )
        return result

    def snapshot(self) -> SnapshotData:
        """Recorded responses, replayable with ReplayStateVerifier"""
        return {
            "chain_id": self.chain_spec.chain_id,
            "commitment": self.block_commitment().to_dict(),
            "calls": list(self.calls),
        }


class RpcStateVerifier(StateVerifier):
    """
    Builds environments by checking a header against an RPC node.

    The header must hash to the claimed block hash, carry the claimed block
    number, and be the node's canonical block at that height on the chain
    named by the chain spec. Account and storage proofs are not checked: the
    node is trusted for the state behind a matching header.
    """

    def __init__(self, web3_service: Web3Service, max_retries: int = 3):
        self.web3_service = web3_service
        self.max_retries = max_retries
        # Kept so callers can snapshot the responses of the last run
        self.last_environment: Optional[RpcStateEnvironment] = None

    def _rpc(self, operation, name: str):
        try:
            return retry_sync_operation(
                operation,
                max_attempts=self.max_retries,
                base_delay=1.0,
                operation_name=name,
            )
        except Exception as e:
            raise StateProofFailure(f"RPC {name} failed: {e}") from e

    def into_environment(
        self, state_input: StateInput, chain_spec: ChainSpec
    ) -> RpcStateEnvironment:
        node_chain_id = self._rpc(self.web3_service.get_chain_id, "chain_id")
        if node_chain_id != chain_spec.chain_id:
            raise StateProofFailure(
                f"RPC node is on chain {node_chain_id}, "
                f"expected {chain_spec.chain_id} ({chain_spec.name})"
            )

        if hash_block_header(state_input.rlp_block_header) != state_input.block_hash:
            raise StateProofFailure(
                "Block header does not hash to the committed block hash"
            )

        try:
            header = decode_header_fields(state_input.rlp_block_header)
        except Exception as e:
            raise StateProofFailure(f"Block header cannot be decoded: {e}") from e
        if header["number"] != state_input.block_number:
            raise StateProofFailure(
                f"Block header number {header['number']} does not match "
                f"block {state_input.block_number}"
            )

        block = self._rpc(
            lambda: self.web3_service.get_block(state_input.block_number),
            f"get_block_{state_input.block_number}",
        )
        if HexBytes(block["hash"]) != HexBytes(state_input.block_hash):
            raise StateProofFailure(
                f"Block {state_input.block_number} is not canonical on "
                f"{chain_spec.name}"
            )

        _logger.debug(
            f"State environment ready at block {state_input.block_number} "
            f"on {chain_spec.name}"
        )
        self.last_environment = RpcStateEnvironment(
            self.web3_service,
            state_input.commitment,
            chain_spec,
            max_retries=self.max_retries,
        )
        return self.last_environment
