"""All constants for the project"""

import os

from dotenv import load_dotenv

from dao_vote_toolkit.shared.exceptions import ConfigurationException

load_dotenv()


class VoteConstants:
    """Constants of the signed vote wire format"""

    # personal_sign prefix for a 32-byte payload
    PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"

    DIRECTION_AGAINST = 0
    DIRECTION_FOR = 1

    # Byte widths of the canonical vote message
    CHAIN_ID_BYTES = 8
    ADDRESS_BYTES = 20
    UINT256_BYTES = 32
    DIRECTION_BYTES = 1

    BALANCE_OF = "balanceOf"


class GlobalConstants:
    """Global class constants for the project"""

    ETH_MAINNET_CHAIN_ID = 1
    ETH_SEPOLIA_CHAIN_ID = 11155111

    CHAIN_ID_TO_RPC = {
        1: os.getenv("ETHEREUM_MAINNET_RPC_URL") or None,
        11155111: os.getenv("ETHEREUM_SEPOLIA_RPC_URL") or None,
    }

    @staticmethod
    def get_rpc_url(chain_id: int) -> str:
        """Get RPC URL for specified chain"""

        if chain_id not in GlobalConstants.CHAIN_ID_TO_RPC:
            raise ConfigurationException(f"Unsupported chain ID: {chain_id}")

        rpc_url = GlobalConstants.CHAIN_ID_TO_RPC[chain_id]
        if not rpc_url:
            raise ConfigurationException(
                f"RPC URL not set for chain {chain_id}"
            )

        return rpc_url
