"""Vote statement, signature and input record models"""

from dataclasses import dataclass
from typing import Any, Union

from eth_utils import (
    is_address,
    is_hex,
    to_bytes,
    to_canonical_address,
    to_checksum_address,
)

from dao_vote_toolkit.shared.exceptions import InvalidInputEncoding
from dao_vote_toolkit.shared.types import SignatureData, VoteInputData
from dao_vote_toolkit.steel.types import StateInput


def parse_uint(value: Union[int, str], bits: int, name: str) -> int:
    """Parse an int, decimal string or 0x-hex string that must fit `bits`"""
    if isinstance(value, bool):
        raise InvalidInputEncoding(f"Invalid {name}: {value!r}")
    if isinstance(value, str):
        try:
            value = int(value, 16) if value.startswith("0x") else int(value)
        except ValueError:
            raise InvalidInputEncoding(f"Invalid {name}: {value!r}")
    if not isinstance(value, int) or not 0 <= value < 2**bits:
        raise InvalidInputEncoding(
            f"Invalid {name}: {value!r} is not a uint{bits}"
        )
    return value


def parse_address(address: Any, name: str = "address") -> str:
    """Validate an address and return it checksummed"""
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise InvalidInputEncoding(
                f"Invalid {name}: expected 20 bytes, got {len(address)}"
            )
        return to_checksum_address(bytes(address))
    if not isinstance(address, str) or not is_address(address):
        raise InvalidInputEncoding(
            f"Invalid {name}: {address!r} is not a valid Ethereum address"
        )
    return to_checksum_address(address)


@dataclass(frozen=True)
class VoteStatement:
    """
    The claim a voter signs.

    Field widths are checked here. Whether the direction is binary and the
    balance positive is left to the verifier, which reports those failures
    with their own error types.
    """

    chain_id: int
    dao: str
    proposal_id: int
    direction: int
    balance: int

    def __post_init__(self):
        object.__setattr__(
            self, "chain_id", parse_uint(self.chain_id, 64, "chain_id")
        )
        object.__setattr__(self, "dao", parse_address(self.dao, "dao"))
        object.__setattr__(
            self, "proposal_id", parse_uint(self.proposal_id, 256, "proposal_id")
        )
        object.__setattr__(
            self, "direction", parse_uint(self.direction, 8, "direction")
        )
        object.__setattr__(
            self, "balance", parse_uint(self.balance, 256, "balance")
        )

    @property
    def dao_bytes(self) -> bytes:
        return to_canonical_address(self.dao)


@dataclass(frozen=True)
class Signature:
    """Signature components in Ethereum wire convention"""

    r: bytes
    s: bytes
    v: int

    def __post_init__(self):
        for name in ("r", "s"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray)) or len(value) != 32:
                raise InvalidInputEncoding(
                    f"Invalid signature {name}: expected 32 bytes"
                )
            object.__setattr__(self, name, bytes(value))
        object.__setattr__(self, "v", parse_uint(self.v, 8, "signature v"))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Signature":
        """Parse the 65-byte r || s || v layout"""
        if len(raw) != 65:
            raise InvalidInputEncoding(
                f"Signature must be 65 bytes, got {len(raw)}"
            )
        return cls(r=raw[:32], s=raw[32:64], v=raw[64])

    @classmethod
    def from_hex(cls, value: str) -> "Signature":
        if not is_hex(value):
            raise InvalidInputEncoding(f"Signature is not hex: {value!r}")
        return cls.from_bytes(to_bytes(hexstr=value))

    @classmethod
    def from_dict(cls, data: Union[str, SignatureData]) -> "Signature":
        """Accept either a 65-byte hex string or {r, s, v}"""
        if isinstance(data, str):
            return cls.from_hex(data)
        try:
            r = parse_uint(data["r"], 256, "signature r")
            s = parse_uint(data["s"], 256, "signature s")
            v = data["v"]
        except KeyError as e:
            raise InvalidInputEncoding(f"Signature is missing {e}")
        return cls(r=r.to_bytes(32, "big"), s=s.to_bytes(32, "big"), v=v)

    @property
    def rs(self) -> bytes:
        return self.r + self.s

    def to_bytes(self) -> bytes:
        return self.r + self.s + bytes([self.v])

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    def to_dict(self) -> SignatureData:
        return {
            "r": "0x" + self.r.hex(),
            "s": "0x" + self.s.hex(),
            "v": self.v,
        }


@dataclass(frozen=True)
class VoteInput:
    """
    Everything a verification run reads.

    ``state_input`` is opaque to the verifier and handed to the
    state-verification collaborator as is.
    """

    state_input: StateInput
    signature: Signature
    voter: str
    dao: str
    proposal_id: int
    direction: int
    balance: int
    token_address: str

    def __post_init__(self):
        if not isinstance(self.signature, Signature):
            raise InvalidInputEncoding("signature must be a Signature")
        object.__setattr__(self, "voter", parse_address(self.voter, "voter"))
        object.__setattr__(self, "dao", parse_address(self.dao, "dao"))
        object.__setattr__(
            self, "proposal_id", parse_uint(self.proposal_id, 256, "proposal_id")
        )
        object.__setattr__(
            self, "direction", parse_uint(self.direction, 8, "direction")
        )
        object.__setattr__(
            self, "balance", parse_uint(self.balance, 256, "balance")
        )
        object.__setattr__(
            self,
            "token_address",
            parse_address(self.token_address, "token_address"),
        )

    def statement(self, chain_id: int) -> VoteStatement:
        """The statement the voter must have signed on `chain_id`"""
        return VoteStatement(
            chain_id=chain_id,
            dao=self.dao,
            proposal_id=self.proposal_id,
            direction=self.direction,
            balance=self.balance,
        )

    @classmethod
    def from_dict(cls, data: VoteInputData) -> "VoteInput":
        try:
            return cls(
                state_input=StateInput.from_dict(data["state_input"]),
                signature=Signature.from_dict(data["signature"]),
                voter=data["voter"],
                dao=data["dao"],
                proposal_id=data["proposal_id"],
                direction=data["direction"],
                balance=data["balance"],
                token_address=data["token_address"],
            )
        except KeyError as e:
            raise InvalidInputEncoding(f"Vote input is missing {e}")

    def to_dict(self) -> VoteInputData:
        return {
            "state_input": self.state_input.to_dict(),
            "signature": self.signature.to_hex(),
            "voter": self.voter,
            "dao": self.dao,
            "proposal_id": self.proposal_id,
            "direction": self.direction,
            "balance": self.balance,
            "token_address": self.token_address,
        }
