"""
Shared JSON shapes used across the DAO Vote Toolkit.

These describe what the CLI reads and writes; the in-memory models live in
``votes.models``, ``steel.types`` and ``verification.journal``.
"""

from typing import List, TypedDict, Union

# =============================================================================
# STATE TYPES
# =============================================================================


class BlockInfo(TypedDict):
    """Block data used as the state input of a verification run."""

    block_number: int  # Block height
    block_hash: str  # 0x-prefixed block hash
    block_timestamp: int  # Unix timestamp of the block
    rlp_block_header: str  # 0x-prefixed RLP encoded header


class CommitmentData(TypedDict):
    """Block commitment embedded in a journal."""

    block_number: int
    block_hash: str


class RecordedCallData(TypedDict):
    """One view call answered by a state environment."""

    contract: str  # Checksummed contract address
    function: str  # Function name, e.g. "balanceOf"
    args: List[str]  # Arguments as strings
    result: int


class SnapshotData(TypedDict):
    """Recorded collaborator responses, replayable offline."""

    chain_id: int
    commitment: CommitmentData
    calls: List[RecordedCallData]


# =============================================================================
# VOTE TYPES
# =============================================================================


class SignatureData(TypedDict):
    """Signature components as hex strings."""

    r: str
    s: str
    v: int


class VoteInputData(TypedDict):
    """Structured input record of a verification run."""

    state_input: BlockInfo
    signature: Union[str, SignatureData]  # 65-byte hex or components
    voter: str
    dao: str
    proposal_id: int
    direction: int
    balance: int
    token_address: str


class JournalData(TypedDict):
    """Journal fields in JSON form."""

    commitment: CommitmentData
    token_address: str
    voter: str
    balance: int
    direction: int
    encoded: str  # 0x-prefixed ABI encoding
