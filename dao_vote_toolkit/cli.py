#!/usr/bin/env python3
"""
Unified CLI for the DAO Vote Toolkit.

Examples:
  - Digest of a vote
    dao-vote digest --dao 0x... --proposal-id 0 --direction 1 --balance 1000

  - Sign a vote (key from --private-key or DVT_PRIVATE_KEY)
    dao-vote sign --dao 0x... --proposal-id 0 --direction 1 --balance 1000

  - State input for a block
    dao-vote block-info --block-number 6500000 --chain-id 11155111

  - Verify a vote
    dao-vote verify --input vote.json --chain-id 11155111 [--snapshot snap.json]
    dao-vote verify --input vote.json --replay output/snap.json
"""

import argparse
import os
from typing import List, Optional

from rich.panel import Panel

from dao_vote_toolkit.commands.helpers import handle_command_error
from dao_vote_toolkit.commands.validation import (
    validate_chain_id,
    validate_direction,
    validate_eth_address,
    validate_private_key,
)
from dao_vote_toolkit.shared.constants import GlobalConstants
from dao_vote_toolkit.steel.config import get_chain_spec
from dao_vote_toolkit.steel.replay import ReplayStateVerifier
from dao_vote_toolkit.utils.formatters import (
    console,
    create_journal_table,
    format_address,
    load_json,
    save_json_output,
)
from dao_vote_toolkit.verification.service import VoteVerificationService
from dao_vote_toolkit.votes.digest import hash_vote_message, vote_digest
from dao_vote_toolkit.votes.models import VoteInput, VoteStatement
from dao_vote_toolkit.votes.signing import address_of, sign_vote


def _statement_from_args(args: argparse.Namespace) -> VoteStatement:
    validate_chain_id(args.chain_id)
    return VoteStatement(
        chain_id=args.chain_id,
        dao=validate_eth_address(args.dao, "dao"),
        proposal_id=args.proposal_id,
        direction=validate_direction(args.direction),
        balance=args.balance,
    )


def cmd_digest(args: argparse.Namespace) -> None:
    statement = _statement_from_args(args)

    console.print(f"Message hash: 0x{hash_vote_message(statement).hex()}")
    console.print(f"Signing digest: 0x{vote_digest(statement).hex()}")


def cmd_sign(args: argparse.Namespace) -> None:
    statement = _statement_from_args(args)
    private_key = validate_private_key(
        args.private_key or os.getenv("DVT_PRIVATE_KEY", "")
    )

    signature = sign_vote(private_key, statement)
    signer = address_of(private_key)

    console.print(Panel("Vote Signed", style="bold magenta"))
    console.print(f"Signer: {signer}")
    console.print(f"Signature: [green]{signature.to_hex()}[/green]")

    if args.output:
        save_json_output(
            {
                "signer": signer,
                "chain_id": statement.chain_id,
                "dao": statement.dao,
                "proposal_id": statement.proposal_id,
                "direction": statement.direction,
                "balance": statement.balance,
                "signature": signature.to_hex(),
            },
            args.output,
        )


def cmd_block_info(args: argparse.Namespace) -> None:
    chain_id = args.chain_id
    validate_chain_id(chain_id)
    if args.block_number <= 0:
        raise ValueError("Block number must be a positive integer")

    service = VoteVerificationService(chain_id)
    info = service.get_block_info(args.block_number).unwrap()

    filename = args.output or f"block_info_{args.block_number}.json"
    save_json_output(info, filename)

    console.print(f'Block Hash: {info["block_hash"]}')
    console.print(f'Block Timestamp: {info["block_timestamp"]}')


def cmd_verify(args: argparse.Namespace) -> None:
    vote_input = VoteInput.from_dict(load_json(args.input))

    if args.replay:
        snapshot = load_json(args.replay)
        chain_id = args.chain_id or int(snapshot["chain_id"])
        validate_chain_id(chain_id)
        service = VoteVerificationService(
            chain_id, state_verifier=ReplayStateVerifier(snapshot)
        )
    else:
        chain_id = args.chain_id or GlobalConstants.ETH_SEPOLIA_CHAIN_ID
        validate_chain_id(chain_id)
        service = VoteVerificationService(chain_id)

    console.print(
        Panel(
            f"Verifying vote of {format_address(vote_input.voter)} "
            f"on {get_chain_spec(chain_id).name}",
            style="bold magenta",
        )
    )

    result = service.verify(vote_input)

    last_environment = getattr(service.state_verifier, "last_environment", None)
    if args.snapshot and last_environment is not None:
        save_json_output(last_environment.snapshot(), args.snapshot)

    if not result.success:
        raise result.errors[0].exception

    journal = result.data.to_dict()
    console.print(create_journal_table(journal))
    console.print(f"Journal: [green]{journal['encoded']}[/green]")

    if args.output:
        save_json_output(journal, args.output)


def _add_statement_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chain-id", type=int, default=GlobalConstants.ETH_SEPOLIA_CHAIN_ID
    )
    parser.add_argument("--dao", type=str, required=True)
    parser.add_argument("--proposal-id", type=int, required=True)
    parser.add_argument("--direction", type=int, required=True)
    parser.add_argument("--balance", type=int, required=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dao-vote",
        description="Unified CLI for the DAO Vote Toolkit",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # digest
    p_digest = sub.add_parser("digest", help="Compute a vote's signing digest")
    _add_statement_arguments(p_digest)
    p_digest.set_defaults(func=cmd_digest)

    # sign
    p_sign = sub.add_parser("sign", help="Sign a vote with a private key")
    _add_statement_arguments(p_sign)
    p_sign.add_argument(
        "--private-key", type=str, help="Hex private key (or DVT_PRIVATE_KEY)"
    )
    p_sign.add_argument("--output", type=str, help="Output filename")
    p_sign.set_defaults(func=cmd_sign)

    # block-info
    p_block = sub.add_parser("block-info", help="Get block info")
    p_block.add_argument("--block-number", type=int, required=True)
    p_block.add_argument(
        "--chain-id", type=int, default=GlobalConstants.ETH_SEPOLIA_CHAIN_ID
    )
    p_block.add_argument("--output", type=str, help="Output filename")
    p_block.set_defaults(func=cmd_block_info)

    # verify
    p_verify = sub.add_parser("verify", help="Verify a signed vote")
    p_verify.add_argument(
        "--input", type=str, required=True, help="Vote input JSON file"
    )
    p_verify.add_argument("--chain-id", type=int, help="Chain ID")
    p_verify.add_argument(
        "--replay", type=str, help="Answer view calls from a snapshot file"
    )
    p_verify.add_argument(
        "--snapshot", type=str, help="Save RPC responses to this filename"
    )
    p_verify.add_argument("--output", type=str, help="Output filename")
    p_verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except Exception as e:
        handle_command_error(e)


if __name__ == "__main__":
    main()
