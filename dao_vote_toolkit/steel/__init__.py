from dao_vote_toolkit.steel.config import (
    ETH_MAINNET_CHAIN_SPEC,
    ETH_SEPOLIA_CHAIN_SPEC,
    get_chain_spec,
)
from dao_vote_toolkit.steel.environment import (
    StateEnvironment,
    StateVerifier,
    call_view,
)
from dao_vote_toolkit.steel.replay import ReplayStateVerifier
from dao_vote_toolkit.steel.rpc import RpcStateVerifier
from dao_vote_toolkit.steel.types import BlockCommitment, ChainSpec, StateInput

__all__ = [
    "ChainSpec",
    "BlockCommitment",
    "StateInput",
    "StateEnvironment",
    "StateVerifier",
    "call_view",
    "RpcStateVerifier",
    "ReplayStateVerifier",
    "ETH_MAINNET_CHAIN_SPEC",
    "ETH_SEPOLIA_CHAIN_SPEC",
    "get_chain_spec",
]
