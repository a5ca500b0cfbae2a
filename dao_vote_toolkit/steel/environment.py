"""
State-verification collaborator interface.

A StateVerifier turns an opaque state input into a StateEnvironment bound to
one block header. The environment answers read-only contract calls against
that block and exposes the commitment that a journal embeds.

Two implementations ship with the toolkit:
- RpcStateVerifier (steel.rpc): checks the header against an RPC node and
  answers calls with eth_call pinned to the block
- ReplayStateVerifier (steel.replay): answers from recorded responses
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from eth_utils import is_address, to_checksum_address

from dao_vote_toolkit.shared.types import RecordedCallData
from dao_vote_toolkit.steel.types import BlockCommitment, ChainSpec, StateInput


def normalize_call_args(args: Sequence[Any]) -> List[str]:
    """String form of call arguments used to record and match calls"""
    normalized = []
    for arg in args:
        if isinstance(arg, str) and is_address(arg):
            normalized.append(to_checksum_address(arg))
        else:
            normalized.append(str(arg))
    return normalized


def recorded_call(
    contract_address: str, function_name: str, args: Sequence[Any], result: int
) -> RecordedCallData:
    return {
        "contract": to_checksum_address(contract_address),
        "function": function_name,
        "args": normalize_call_args(args),
        "result": result,
    }


class StateEnvironment(ABC):
    """A proven view of chain state at one block"""

    def __init__(self, commitment: BlockCommitment, chain_spec: ChainSpec):
        self._commitment = commitment
        self.chain_spec = chain_spec

    def block_commitment(self) -> BlockCommitment:
        """Commitment binding this environment to its block header"""
        return self._commitment

    @abstractmethod
    def call(
        self, contract_address: str, function_name: str, args: Sequence[Any]
    ) -> Any:
        """
        Execute a read-only contract call against the committed state.

        Raises:
            StateProofFailure: The call cannot be resolved.
        """


class StateVerifier(ABC):
    """Builds state environments from state inputs"""

    @abstractmethod
    def into_environment(
        self, state_input: StateInput, chain_spec: ChainSpec
    ) -> StateEnvironment:
        """
        Build an environment consistent with the committed block header.

        Raises:
            StateProofFailure: The input is inconsistent with the header or
                the chain.
        """


def call_view(
    contract_address: str,
    env: StateEnvironment,
    function_name: str,
    args: Sequence[Any],
) -> Any:
    """Run a view call on `contract_address` inside `env`"""
    return env.call(contract_address, function_name, list(args))
