from eth_utils import is_address, is_hex, to_checksum_address

from dao_vote_toolkit.steel.config import CHAIN_SPECS


def validate_eth_address(address: str, param_name: str = "address") -> str:
    """Validate and return checksum ethereum address"""
    if not address or not isinstance(address, str):
        raise ValueError(
            f"Invalid {param_name}: address must be a non-empty string"
        )
    if not is_address(address):
        raise ValueError(
            f"Invalid {param_name}: {address} is not a valid Ethereum address"
        )
    return to_checksum_address(address)


def validate_chain_id(chain_id: int) -> None:
    """Validate chain ID"""
    if chain_id not in CHAIN_SPECS:
        raise ValueError(
            f"Invalid chain_id: {chain_id}. Must be one of {sorted(CHAIN_SPECS)}"
        )


def validate_direction(direction: int) -> int:
    """Validate a vote direction (0 against, 1 for)"""
    if direction not in (0, 1):
        raise ValueError(f"Invalid direction: {direction}. Must be 0 or 1")
    return direction


def validate_private_key(private_key: str) -> str:
    """Validate a 32-byte hex private key"""
    if not private_key or not is_hex(private_key):
        raise ValueError("Invalid private key: must be a hex string")
    if len(private_key.removeprefix("0x")) != 64:
        raise ValueError("Invalid private key: must be 32 bytes")
    return private_key
