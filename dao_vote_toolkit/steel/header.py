"""Block header encoder"""

from typing import Any, Dict

import rlp
from eth_utils import big_endian_to_int
from hexbytes import HexBytes
from web3 import Web3

from dao_vote_toolkit.crypto.hashing import keccak256
from dao_vote_toolkit.shared.types import BlockInfo

BLOCK_HEADER = (
    "parentHash",
    "sha3Uncles",
    "miner",
    "stateRoot",
    "transactionsRoot",
    "receiptsRoot",
    "logsBloom",
    "difficulty",
    "number",
    "gasLimit",
    "gasUsed",
    "timestamp",
    "extraData",
    "mixHash",
    "nonce",
    "baseFeePerGas",
    "withdrawalsRoot",
    "blobGasUsed",
    "excessBlobGas",
    "parentBeaconBlockRoot",
    "requestsHash",
)

HEADER_NUMBER_INDEX = BLOCK_HEADER.index("number")
HEADER_TIMESTAMP_INDEX = BLOCK_HEADER.index("timestamp")


def encode_block_header(block: Dict[str, Any]) -> bytes:
    """Encode a block header -> RLP encoded"""
    block_header = [
        (
            HexBytes("0x")
            if isinstance(block.get(k), int) and block.get(k) == 0
            else HexBytes(block.get(k))
        )
        for k in BLOCK_HEADER
        if k in block
    ]
    return rlp.encode(block_header)


def hash_block_header(rlp_block_header: bytes) -> bytes:
    """Block hash of an RLP encoded header"""
    return keccak256(rlp_block_header)


def decode_header_fields(rlp_block_header: bytes) -> Dict[str, int]:
    """Decode the block number and timestamp from an RLP encoded header"""
    fields = rlp.decode(rlp_block_header)
    if not isinstance(fields, list) or len(fields) <= HEADER_TIMESTAMP_INDEX:
        raise ValueError("RLP payload is not a block header")
    return {
        "number": big_endian_to_int(fields[HEADER_NUMBER_INDEX]),
        "timestamp": big_endian_to_int(fields[HEADER_TIMESTAMP_INDEX]),
    }


def get_block_info(web_3: Web3, block_number: int) -> BlockInfo:
    """Get block info -> block number, block hash, block timestamp, rlp encoded block header"""
    block = web_3.eth.get_block(block_number)
    encoded_header = encode_block_header(block)

    return {
        "block_number": block_number,
        "block_hash": web_3.to_hex(HexBytes(block["hash"])),
        "block_timestamp": block["timestamp"],
        "rlp_block_header": "0x" + encoded_header.hex(),
    }
