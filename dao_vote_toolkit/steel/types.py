"""State environment types"""

from dataclasses import dataclass
from typing import Optional

from eth_utils import to_bytes

from dao_vote_toolkit.shared.exceptions import InvalidInputEncoding
from dao_vote_toolkit.shared.types import BlockInfo, CommitmentData


def _hex_to_bytes(value, name: str, length: Optional[int] = None) -> bytes:
    raw = bytes(value) if isinstance(value, (bytes, bytearray)) else None
    if raw is None:
        try:
            raw = to_bytes(hexstr=value)
        except (TypeError, ValueError):
            raise InvalidInputEncoding(f"Invalid {name}: {value!r} is not hex")
    if length is not None and len(raw) != length:
        raise InvalidInputEncoding(
            f"Invalid {name}: expected {length} bytes, got {len(raw)}"
        )
    return raw


@dataclass(frozen=True)
class ChainSpec:
    """Chain configuration a state environment is bound to"""

    chain_id: int
    name: str


@dataclass(frozen=True)
class BlockCommitment:
    """Binds a journal to one block header"""

    block_number: int
    block_hash: bytes

    def __post_init__(self):
        object.__setattr__(
            self,
            "block_hash",
            _hex_to_bytes(self.block_hash, "block_hash", 32),
        )

    def as_abi_tuple(self):
        return (self.block_number, self.block_hash)

    def to_dict(self) -> CommitmentData:
        return {
            "block_number": self.block_number,
            "block_hash": "0x" + self.block_hash.hex(),
        }

    @classmethod
    def from_dict(cls, data: CommitmentData) -> "BlockCommitment":
        return cls(
            block_number=int(data["block_number"]),
            block_hash=data["block_hash"],
        )


@dataclass(frozen=True)
class StateInput:
    """
    Input bundle of a state environment: a block header and its claimed
    number and hash.
    """

    block_number: int
    block_hash: bytes
    rlp_block_header: bytes
    block_timestamp: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(
            self,
            "block_hash",
            _hex_to_bytes(self.block_hash, "block_hash", 32),
        )
        object.__setattr__(
            self,
            "rlp_block_header",
            _hex_to_bytes(self.rlp_block_header, "rlp_block_header"),
        )

    @property
    def commitment(self) -> BlockCommitment:
        return BlockCommitment(
            block_number=self.block_number, block_hash=self.block_hash
        )

    @classmethod
    def from_dict(cls, data: BlockInfo) -> "StateInput":
        return cls(
            block_number=int(data["block_number"]),
            block_hash=data["block_hash"],
            rlp_block_header=data["rlp_block_header"],
            block_timestamp=data.get("block_timestamp"),
        )

    def to_dict(self) -> BlockInfo:
        return {
            "block_number": self.block_number,
            "block_hash": "0x" + self.block_hash.hex(),
            "block_timestamp": self.block_timestamp,
            "rlp_block_header": "0x" + self.rlp_block_header.hex(),
        }
