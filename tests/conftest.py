"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests.
"""

from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import pytest
from eth_utils import to_checksum_address

from dao_vote_toolkit.steel.config import ETH_SEPOLIA_CHAIN_SPEC
from dao_vote_toolkit.steel.replay import ReplayStateVerifier
from dao_vote_toolkit.steel.types import BlockCommitment, StateInput
from dao_vote_toolkit.votes.models import VoteInput, VoteStatement
from dao_vote_toolkit.votes.signing import address_of, sign_vote

VOTER_KEY = "0x" + "01" * 32
OTHER_KEY = "0x" + "02" * 32

SEPOLIA_CHAIN_ID = 11155111
BLOCK_NUMBER = 6500000
BLOCK_HASH = "0x" + "ab" * 32


@pytest.fixture
def voter_key() -> str:
    """Private key of the sample voter."""
    return VOTER_KEY


@pytest.fixture
def other_key() -> str:
    """Private key unrelated to the sample voter."""
    return OTHER_KEY


@pytest.fixture
def voter_address() -> str:
    """Checksummed address of the sample voter."""
    return address_of(VOTER_KEY)


@pytest.fixture
def dao_address() -> str:
    """Sample DAO address (0x...DA0)."""
    return to_checksum_address("0x" + "0" * 37 + "da0")


@pytest.fixture
def token_address() -> str:
    """Sample governance token address."""
    return to_checksum_address("0x67a53a2b9984af64a2e27b1582bc72406a2317c3")


@pytest.fixture
def chain_spec():
    return ETH_SEPOLIA_CHAIN_SPEC


@pytest.fixture
def commitment() -> BlockCommitment:
    return BlockCommitment(block_number=BLOCK_NUMBER, block_hash=BLOCK_HASH)


@pytest.fixture
def state_input() -> StateInput:
    """State input naming the sample block; the header is opaque to replays."""
    return StateInput(
        block_number=BLOCK_NUMBER,
        block_hash=BLOCK_HASH,
        rlp_block_header=b"\xc0",
        block_timestamp=1730000000,
    )


@pytest.fixture
def make_vote_input(
    state_input, voter_address, dao_address, token_address
) -> Callable[..., VoteInput]:
    """
    Factory for signed vote inputs.

    Keyword overrides: signer_key, chain_id, dao, proposal_id, direction,
    balance, voter, token_address, signature.
    """

    def _make(**overrides: Any) -> VoteInput:
        fields: Dict[str, Any] = {
            "chain_id": SEPOLIA_CHAIN_ID,
            "dao": dao_address,
            "proposal_id": 0,
            "direction": 1,
            "balance": 1000,
        }
        fields.update(
            {k: overrides[k] for k in list(fields) if k in overrides}
        )
        statement = VoteStatement(**fields)
        signature = overrides.get("signature") or sign_vote(
            overrides.get("signer_key", VOTER_KEY), statement
        )
        return VoteInput(
            state_input=state_input,
            signature=signature,
            voter=overrides.get("voter", voter_address),
            dao=statement.dao,
            proposal_id=statement.proposal_id,
            direction=statement.direction,
            balance=statement.balance,
            token_address=overrides.get("token_address", token_address),
        )

    return _make


@pytest.fixture
def make_state_verifier(
    commitment, token_address
) -> Callable[..., ReplayStateVerifier]:
    """Factory for replay verifiers answering balanceOf with canned values."""

    def _make(
        balances: Dict[str, int], chain_id: int = SEPOLIA_CHAIN_ID
    ) -> ReplayStateVerifier:
        return ReplayStateVerifier.from_balances(
            chain_id, commitment, token_address, balances
        )

    return _make


@pytest.fixture
def mock_web3_service():
    """Mock Web3Service for unit tests."""
    service = MagicMock()
    service.w3 = MagicMock()
    service.get_chain_id.return_value = SEPOLIA_CHAIN_ID
    return service
