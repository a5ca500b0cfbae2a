"""Keccak-256 hashing primitive"""

from eth_utils import keccak


def keccak256(data: bytes) -> bytes:
    """Keccak-256 digest (original Keccak padding, not SHA3-256) -> 32 bytes"""
    return keccak(primitive=bytes(data))
