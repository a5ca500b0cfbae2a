"""
Unit tests for journal ABI encoding.
"""

import pytest
from eth_utils import to_canonical_address

from dao_vote_toolkit.steel.types import BlockCommitment
from dao_vote_toolkit.verification.journal import Journal


@pytest.fixture
def journal(commitment, token_address, voter_address) -> Journal:
    return Journal(
        commitment=commitment,
        token_address=token_address,
        voter=voter_address,
        balance=1000,
        direction=1,
    )


class TestJournalEncoding:
    def test_static_word_layout(self, journal, token_address, voter_address):
        encoded = journal.abi_encode()
        words = [encoded[i : i + 32] for i in range(0, len(encoded), 32)]

        assert len(words) == 6
        assert int.from_bytes(words[0], "big") == journal.commitment.block_number
        assert words[1] == journal.commitment.block_hash
        assert words[2] == b"\x00" * 12 + to_canonical_address(token_address)
        assert words[3] == b"\x00" * 12 + to_canonical_address(voter_address)
        assert int.from_bytes(words[4], "big") == 1000
        assert int.from_bytes(words[5], "big") == 1

    def test_decode_restores_journal(self, journal):
        assert Journal.abi_decode(journal.abi_encode()) == journal

    def test_decode_rejects_wrong_size(self, journal):
        with pytest.raises(ValueError):
            Journal.abi_decode(journal.abi_encode()[:-1])

    def test_to_dict_carries_encoding(self, journal):
        data = journal.to_dict()

        assert data["encoded"] == "0x" + journal.abi_encode().hex()
        assert data["commitment"]["block_hash"] == "0x" + "ab" * 32
        assert BlockCommitment.from_dict(data["commitment"]) == journal.commitment
