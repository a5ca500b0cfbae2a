"""Shared formatting and file utilities for commands."""

import json
from pathlib import Path
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

# Shared console instance
console = Console()


def load_json(file_path: str) -> Dict[str, Any]:
    """Load and parse a JSON file."""
    with open(file_path, "r") as file:
        return json.load(file)


def format_address(address: str, length: int = 10) -> str:
    """
    Format an Ethereum address to show first and last characters.

    Args:
        address: Ethereum address
        length: Total visible characters (default: 10)

    Returns:
        Formatted address like "0x1234...5678"
    """
    if not address:
        return "N/A"
    if len(address) <= length:
        return address
    return f"{address[:6]}...{address[-4:]}"


def save_json_output(
    data: Dict[str, Any],
    filename: str,
    output_dir: str = "output",
    print_path: bool = True,
) -> str:
    """
    Save data to a JSON file with automatic directory creation.

    Args:
        data: Data to save
        filename: Output filename (can include subdirectories)
        output_dir: Base output directory (default: 'output')
        print_path: Whether to print the saved file path

    Returns:
        Full path to saved file
    """
    output_path = Path(output_dir)
    filepath = output_path / filename
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)

    if print_path:
        console.print(f"[cyan]Data saved to:[/cyan] {filepath}")

    return str(filepath)


def create_journal_table(journal: Dict[str, Any]) -> Table:
    """Render journal fields as a two-column table."""
    table = Table(title="Vote Journal", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    commitment = journal["commitment"]
    table.add_row("Block", str(commitment["block_number"]))
    table.add_row("Block hash", commitment["block_hash"])
    table.add_row("Token", journal["token_address"])
    table.add_row("Voter", journal["voter"])
    table.add_row("Balance", str(journal["balance"]))
    table.add_row("Direction", "for" if journal["direction"] == 1 else "against")
    return table
