"""Replay state verifier: answers view calls from recorded responses"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from eth_utils import to_checksum_address

from dao_vote_toolkit.shared.constants import VoteConstants
from dao_vote_toolkit.shared.exceptions import StateProofFailure
from dao_vote_toolkit.shared.types import RecordedCallData, SnapshotData
from dao_vote_toolkit.steel.environment import (
    StateEnvironment,
    StateVerifier,
    normalize_call_args,
    recorded_call,
)
from dao_vote_toolkit.steel.types import BlockCommitment, ChainSpec, StateInput

CallKey = Tuple[str, str, Tuple[str, ...]]


def _call_key(
    contract_address: str, function_name: str, args: Sequence[Any]
) -> CallKey:
    return (
        to_checksum_address(contract_address),
        function_name,
        tuple(normalize_call_args(args)),
    )


class ReplayStateEnvironment(StateEnvironment):
    def __init__(
        self,
        commitment: BlockCommitment,
        chain_spec: ChainSpec,
        responses: Mapping[CallKey, Any],
    ):
        super().__init__(commitment, chain_spec)
        self._responses = dict(responses)

    def call(
        self, contract_address: str, function_name: str, args: Sequence[Any]
    ) -> Any:
        key = _call_key(contract_address, function_name, args)
        if key not in self._responses:
            raise StateProofFailure(
                f"No recorded response for {function_name}"
                f"({', '.join(key[2])}) on {key[0]}"
            )
        return self._responses[key]


class ReplayStateVerifier(StateVerifier):
    """
    Serves a recorded snapshot.

    The state input must name the recorded block, and the chain spec the
    recorded chain; calls that were not recorded fail.
    """

    def __init__(self, snapshot: SnapshotData):
        self.chain_id = int(snapshot["chain_id"])
        self.commitment = BlockCommitment.from_dict(snapshot["commitment"])
        self._responses: Dict[CallKey, Any] = {}
        for call in snapshot.get("calls", []):
            key = _call_key(call["contract"], call["function"], call["args"])
            self._responses[key] = int(call["result"])

    @classmethod
    def from_balances(
        cls,
        chain_id: int,
        commitment: BlockCommitment,
        token_address: str,
        balances: Mapping[str, int],
    ) -> "ReplayStateVerifier":
        """Snapshot answering balanceOf(account) on one token"""
        calls: List[RecordedCallData] = [
            recorded_call(
                token_address, VoteConstants.BALANCE_OF, [account], balance
            )
            for account, balance in balances.items()
        ]
        return cls(
            {
                "chain_id": chain_id,
                "commitment": commitment.to_dict(),
                "calls": calls,
            }
        )

    def into_environment(
        self, state_input: StateInput, chain_spec: ChainSpec
    ) -> ReplayStateEnvironment:
        if chain_spec.chain_id != self.chain_id:
            raise StateProofFailure(
                f"Snapshot was recorded on chain {self.chain_id}, "
                f"not {chain_spec.chain_id} ({chain_spec.name})"
            )
        if state_input.commitment != self.commitment:
            raise StateProofFailure(
                f"Snapshot was recorded at block {self.commitment.block_number}"
                f" (0x{self.commitment.block_hash.hex()}), input names block "
                f"{state_input.block_number} (0x{state_input.block_hash.hex()})"
            )
        return ReplayStateEnvironment(
            self.commitment, chain_spec, self._responses
        )
