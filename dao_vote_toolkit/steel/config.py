"""Known chain specifications"""

from dao_vote_toolkit.shared.constants import GlobalConstants
from dao_vote_toolkit.shared.exceptions import ConfigurationException
from dao_vote_toolkit.steel.types import ChainSpec

ETH_MAINNET_CHAIN_SPEC = ChainSpec(
    chain_id=GlobalConstants.ETH_MAINNET_CHAIN_ID, name="mainnet"
)
ETH_SEPOLIA_CHAIN_SPEC = ChainSpec(
    chain_id=GlobalConstants.ETH_SEPOLIA_CHAIN_ID, name="sepolia"
)

CHAIN_SPECS = {
    spec.chain_id: spec
    for spec in (ETH_MAINNET_CHAIN_SPEC, ETH_SEPOLIA_CHAIN_SPEC)
}


def get_chain_spec(chain_id: int) -> ChainSpec:
    """Get the chain spec for a chain ID"""
    if chain_id not in CHAIN_SPECS:
        raise ConfigurationException(
            f"No chain spec for chain {chain_id}. "
            f"Must be one of {sorted(CHAIN_SPECS)}"
        )
    return CHAIN_SPECS[chain_id]
