"""
Unit tests for the Keccak primitive and secp256k1 signer recovery.
"""

from unittest.mock import MagicMock, patch

import pytest
from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_utils import to_canonical_address

from dao_vote_toolkit.crypto.hashing import keccak256
from dao_vote_toolkit.crypto.recovery import (
    SECP256K1_HALF_N,
    SECP256K1_N,
    derive_address,
    ecrecover,
    normalize_recovery_id,
    parse_rs,
    recover_public_key,
)
from dao_vote_toolkit.shared.exceptions import (
    InvalidRecoveryId,
    InvalidSignature,
    InvalidSignatureEncoding,
)

KEY_ONE = b"\x00" * 31 + b"\x01"
KEY_TWO = b"\x00" * 31 + b"\x02"
ADDRESS_ONE = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
ADDRESS_TWO = "0x2B5AD5c4795c026514f8317c7a215E218DcCD6cF"


def _sign(private_key: bytes, digest: bytes):
    signature = keys.PrivateKey(private_key).sign_msg_hash(digest)
    rs = signature.r.to_bytes(32, "big") + signature.s.to_bytes(32, "big")
    return signature.v, rs


class TestKeccak256:
    """keccak256 must be Keccak, not the standardized SHA3-256."""

    def test_empty_input(self):
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_differs_from_sha3_256(self):
        import hashlib

        assert keccak256(b"vote") != hashlib.sha3_256(b"vote").digest()

    def test_output_is_32_bytes(self):
        assert len(keccak256(b"\x19Ethereum Signed Message:\n32")) == 32


class TestNormalizeRecoveryId:
    @pytest.mark.parametrize(
        "v,expected",
        [(0, 0), (1, 1), (27, 0), (28, 1), (35, 0), (36, 1), (37, 0), (38, 1), (255, 0)],
    )
    def test_accepted_encodings(self, v, expected):
        assert normalize_recovery_id(v) == expected

    @pytest.mark.parametrize("v", [2, 3, 26, 29, 30, 34, 256, -1])
    def test_rejected_encodings(self, v):
        with pytest.raises(InvalidRecoveryId):
            normalize_recovery_id(v)

    def test_rejects_non_integers(self):
        with pytest.raises(InvalidRecoveryId):
            normalize_recovery_id("27")
        with pytest.raises(InvalidRecoveryId):
            normalize_recovery_id(True)


class TestParseRs:
    def test_splits_big_endian(self):
        rs = (5).to_bytes(32, "big") + (7).to_bytes(32, "big")
        assert parse_rs(rs) == (5, 7)

    @pytest.mark.parametrize(
        "r,s",
        [(0, 1), (1, 0), (SECP256K1_N, 1), (1, SECP256K1_N), (2**256 - 1, 1)],
    )
    def test_out_of_range_scalars(self, r, s):
        rs = r.to_bytes(32, "big") + s.to_bytes(32, "big")
        with pytest.raises(InvalidSignatureEncoding):
            parse_rs(rs)

    def test_high_s_is_rejected(self):
        r = 5
        low = r.to_bytes(32, "big") + SECP256K1_HALF_N.to_bytes(32, "big")
        high = r.to_bytes(32, "big") + (SECP256K1_HALF_N + 1).to_bytes(32, "big")

        assert parse_rs(low) == (r, SECP256K1_HALF_N)
        with pytest.raises(InvalidSignatureEncoding, match="high-S"):
            parse_rs(high)

    def test_wrong_length(self):
        with pytest.raises(InvalidSignatureEncoding):
            parse_rs(b"\x01" * 63)


class TestRecoverPublicKey:
    def test_round_trip_for_several_keys(self):
        """deriveAddress(recover(sign(key, digest))) == address(key)."""
        for seed in range(1, 6):
            private_key = keccak256(bytes([seed]))
            digest = keccak256(b"digest" + bytes([seed]))
            v, rs = _sign(private_key, digest)

            public_key = recover_public_key(v, rs, digest)

            expected = keys.PrivateKey(private_key).public_key
            assert derive_address(public_key) == expected.to_canonical_address()

    def test_known_addresses(self):
        digest = keccak256(b"known")
        for private_key, address in ((KEY_ONE, ADDRESS_ONE), (KEY_TWO, ADDRESS_TWO)):
            v, rs = _sign(private_key, digest)
            assert ecrecover(v, rs, digest) == to_canonical_address(address)

    def test_digest_is_not_rehashed(self):
        digest = keccak256(b"prehashed")
        v, rs = _sign(KEY_ONE, digest)

        assert ecrecover(v, rs, keccak256(digest)) != to_canonical_address(
            ADDRESS_ONE
        )

    def test_flipped_recovery_id_recovers_another_key(self):
        digest = keccak256(b"flip")
        v, rs = _sign(KEY_ONE, digest)

        assert ecrecover(1 - v, rs, digest) != to_canonical_address(ADDRESS_ONE)

    def test_rejects_bad_recovery_id(self):
        digest = keccak256(b"x")
        _, rs = _sign(KEY_ONE, digest)
        with pytest.raises(InvalidSignatureEncoding):
            recover_public_key(27, rs, digest)

    def test_rejects_short_digest(self):
        digest = keccak256(b"x")
        v, rs = _sign(KEY_ONE, digest)
        with pytest.raises(InvalidSignatureEncoding):
            recover_public_key(v, rs, digest[:31])

    def test_backend_failure_is_invalid_signature(self):
        digest = keccak256(b"x")
        v, rs = _sign(KEY_ONE, digest)

        with patch.object(
            keys.Signature,
            "recover_public_key_from_msg_hash",
            side_effect=BadSignature("not on curve"),
        ):
            with pytest.raises(InvalidSignature):
                recover_public_key(v, rs, digest)

    def test_point_at_infinity_is_invalid_signature(self):
        digest = keccak256(b"x")
        v, rs = _sign(KEY_ONE, digest)
        infinity = MagicMock()
        infinity.to_bytes.return_value = b"\x00" * 64

        with patch.object(
            keys.Signature,
            "recover_public_key_from_msg_hash",
            return_value=infinity,
        ):
            with pytest.raises(InvalidSignature):
                recover_public_key(v, rs, digest)


class TestEcrecover:
    def test_malleated_signature_is_rejected(self):
        """(r, n - s) with the other recovery id recovers the same signer."""
        digest = keccak256(b"malleable")
        v, rs = _sign(KEY_ONE, digest)
        s = int.from_bytes(rs[32:], "big")
        twin = rs[:32] + (SECP256K1_N - s).to_bytes(32, "big")

        assert ecrecover(v, rs, digest) == to_canonical_address(ADDRESS_ONE)
        with pytest.raises(InvalidSignatureEncoding):
            ecrecover(1 - v, twin, digest)

    @pytest.mark.parametrize("offset", [0, 27, 37])
    def test_all_v_encodings_recover_the_signer(self, offset):
        """Raw, legacy (27/28) and EIP-155 (chain 1: 37/38) encodings."""
        digest = keccak256(b"encodings")
        v, rs = _sign(KEY_ONE, digest)

        assert ecrecover(v + offset, rs, digest) == to_canonical_address(
            ADDRESS_ONE
        )

    def test_derive_address_uses_low_twenty_bytes(self):
        public_key = keys.PrivateKey(KEY_ONE).public_key
        assert derive_address(public_key) == keccak256(public_key.to_bytes())[12:]
        assert len(derive_address(public_key)) == 20

    def test_invalid_v_fails_before_recovery(self):
        with pytest.raises(InvalidRecoveryId):
            ecrecover(2, b"\x00" * 64, b"\x00" * 32)
