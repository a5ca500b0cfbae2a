from dao_vote_toolkit.crypto.hashing import keccak256
from dao_vote_toolkit.crypto.recovery import (
    derive_address,
    ecrecover,
    normalize_recovery_id,
    recover_public_key,
)

__all__ = [
    "keccak256",
    "normalize_recovery_id",
    "recover_public_key",
    "derive_address",
    "ecrecover",
]
