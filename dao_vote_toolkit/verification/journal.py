"""Journal: the public output of a verification run"""

from dataclasses import dataclass

from eth_abi import decode, encode
from eth_utils import to_checksum_address

from dao_vote_toolkit.shared.types import JournalData
from dao_vote_toolkit.steel.types import BlockCommitment

# (commitment, tokenAddress, voter, balance, direction), all static members
JOURNAL_ABI_TYPES = ["(uint256,bytes32)", "address", "address", "uint256", "uint8"]
JOURNAL_ENCODED_SIZE = 6 * 32


@dataclass(frozen=True)
class Journal:
    commitment: BlockCommitment
    token_address: str
    voter: str
    balance: int
    direction: int

    def abi_encode(self) -> bytes:
        return encode(
            JOURNAL_ABI_TYPES,
            [
                self.commitment.as_abi_tuple(),
                self.token_address,
                self.voter,
                self.balance,
                self.direction,
            ],
        )

    @classmethod
    def abi_decode(cls, data: bytes) -> "Journal":
        if len(data) != JOURNAL_ENCODED_SIZE:
            raise ValueError(
                f"Journal must be {JOURNAL_ENCODED_SIZE} bytes, got {len(data)}"
            )
        (block_number, block_hash), token, voter, balance, direction = decode(
            JOURNAL_ABI_TYPES, data
        )
        return cls(
            commitment=BlockCommitment(
                block_number=block_number, block_hash=block_hash
            ),
            token_address=to_checksum_address(token),
            voter=to_checksum_address(voter),
            balance=balance,
            direction=direction,
        )

    def to_dict(self) -> JournalData:
        return {
            "commitment": self.commitment.to_dict(),
            "token_address": self.token_address,
            "voter": self.voter,
            "balance": self.balance,
            "direction": self.direction,
            "encoded": "0x" + self.abi_encode().hex(),
        }
