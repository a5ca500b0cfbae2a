"""
secp256k1 signer recovery.

Follows the EVM ``ecrecover`` precompile: the recovery id is normalized
from any of the historical ``v`` encodings, the public key is recovered from
a prehashed digest and reduced to a 20-byte address. Unlike the precompile,
only low-S signatures are accepted.

Recovery alone proves nothing about the message: callers must rebuild the
digest from trusted inputs before comparing the recovered address.
"""

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_utils import ValidationError

from dao_vote_toolkit.crypto.hashing import keccak256
from dao_vote_toolkit.shared.exceptions import (
    InvalidRecoveryId,
    InvalidSignature,
    InvalidSignatureEncoding,
)

# Order of the secp256k1 group
SECP256K1_N = (
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
)

# Upper bound of a canonical (low-S) s value
SECP256K1_HALF_N = SECP256K1_N // 2

# Exact v values and the recovery id they encode
_FIXED_RECOVERY_IDS = {
    0: 0,  # raw
    1: 1,
    27: 0,  # legacy Ethereum offset
    28: 1,
}

# Chain-id embedded encoding (EIP-155): v = chain_id * 2 + 35 + id
_EIP155_MIN_V = 35
_MAX_V = 0xFF


def normalize_recovery_id(v: int) -> int:
    """
    Map an Ethereum-convention v value to a recovery id in {0, 1}.

    Accepted partitions: {0, 1}, {27, 28} and [35, 255]. Everything else,
    including 2..26, 29..34 and values that do not fit a byte, is rejected.

    Raises:
        InvalidRecoveryId: v matches none of the encodings.
    """
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidRecoveryId(f"Recovery value must be an integer, got {v!r}")
    if v in _FIXED_RECOVERY_IDS:
        return _FIXED_RECOVERY_IDS[v]
    if _EIP155_MIN_V <= v <= _MAX_V:
        return (v - 1) % 2
    raise InvalidRecoveryId(f"Value for v is invalid: {v}")


def parse_rs(rs: bytes):
    """
    Split 64 signature bytes into big-endian (r, s).

    Both scalars must satisfy 0 < x < n, and s must be in the lower half of
    the range: the malleated twin (r, n - s) of a signature is rejected.
    """
    if len(rs) != 64:
        raise InvalidSignatureEncoding(
            f"Signature must be 64 bytes (r || s), got {len(rs)}"
        )
    r = int.from_bytes(rs[:32], "big")
    s = int.from_bytes(rs[32:], "big")
    for name, value in (("r", r), ("s", s)):
        if not 0 < value < SECP256K1_N:
            raise InvalidSignatureEncoding(
                f"Signature {name} is outside the secp256k1 scalar range"
            )
    if s > SECP256K1_HALF_N:
        raise InvalidSignatureEncoding(
            "Signature s is above n / 2 (non-canonical high-S)"
        )
    return r, s


def recover_public_key(
    recovery_id: int, rs: bytes, digest: bytes
) -> keys.PublicKey:
    """
    Recover the public key that produced (r, s) over a prehashed digest.

    Args:
        recovery_id: Canonical recovery id (0 or 1)
        rs: 64 bytes, r || s big-endian
        digest: 32-byte message hash, used as is

    Raises:
        InvalidSignatureEncoding: Malformed r/s, digest or recovery id.
        InvalidSignature: No valid public key recovers.
    """
    if recovery_id not in (0, 1):
        raise InvalidSignatureEncoding(
            f"Recovery id must be 0 or 1, got {recovery_id!r}"
        )
    if len(digest) != 32:
        raise InvalidSignatureEncoding(
            f"Digest must be 32 bytes, got {len(digest)}"
        )
    r, s = parse_rs(rs)

    try:
        signature = keys.Signature(vrs=(recovery_id, r, s))
        public_key = signature.recover_public_key_from_msg_hash(bytes(digest))
    except (BadSignature, ValidationError) as e:
        raise InvalidSignature(f"Signature is invalid: {e}") from e

    # Point at infinity comes back as all-zero coordinates
    if not any(public_key.to_bytes()):
        raise InvalidSignature("Recovered point is the point at infinity")

    return public_key


def derive_address(public_key: keys.PublicKey) -> bytes:
    """Ethereum address of a public key: low 20 bytes of keccak(X || Y)"""
    # to_bytes() is the uncompressed encoding without the 0x04 prefix
    return keccak256(public_key.to_bytes())[12:]


def ecrecover(v: int, rs: bytes, digest: bytes) -> bytes:
    """
    Signer address recovery from the (v, r, s) signature components.

    Only a signature validation if ``digest`` is known to be the hash of a
    trusted message.
    """
    recovery_id = normalize_recovery_id(v)
    public_key = recover_public_key(recovery_id, rs, digest)
    return derive_address(public_key)
