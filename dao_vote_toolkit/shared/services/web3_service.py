"""
Web3 Service module for interacting with Ethereum-based blockchains.

This module provides a Web3Service class that manages the connection to one
chain, caches contract instances, and exposes the few RPC reads
the state verifier needs.
"""

from typing import Any, Dict, Union

from web3 import Web3

from dao_vote_toolkit.shared.services.resource_manager import (
    resource_manager,
)


class Web3Service:
    """
    A service class for managing a Web3 connection and its reads.
    """

    def __init__(
        self,
        chain_id: int,
        rpc_url: str,
    ):
        """
        Initialize the Web3Service.

        Args:
            chain_id (int): The chain ID to use.
            rpc_url (str): The RPC URL to use.
        """
        self.chain_id = chain_id
        self.w3 = self._initialize_web3(rpc_url)
        self._initialize_caches()

    def _initialize_web3(self, rpc_url: str) -> Web3:
        """Initialize Web3 instance"""
        return Web3(Web3.HTTPProvider(rpc_url))

    def _initialize_caches(self):
        """Initialize the contract cache; blocks are never cached"""
        self._contract_cache = {}

    def get_chain_id(self) -> int:
        """Chain ID reported by the node"""
        return self.w3.eth.chain_id

    def get_block(self, block_identifier: Union[int, str]) -> Dict[str, Any]:
        """
        Get block information for a specific block number or hash.

        Always asks the node: the block at a height changes on reorgs.
        """
        return self.w3.eth.get_block(block_identifier)

    def get_contract(self, address: str, abi_name: str) -> Any:
        """Get a contract instance for a given address and ABI name"""
        key = (address.lower(), abi_name)
        if key not in self._contract_cache:
            abi = resource_manager.load_abi(abi_name)
            self._contract_cache[key] = self.w3.eth.contract(
                address=Web3.to_checksum_address(address.lower()), abi=abi
            )
        return self._contract_cache[key]
