"""Command implementations behind the `pfid` CLI.

Each run_* function prints to the given console (stdout for results,
stderr for diagnostics) and returns a process exit code.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pfid.codec import decode, encode, extract_partition, is_valid_text_id, parse, timestamp_of
from pfid.errors import PFIDError
from pfid.fixtures import build_fixtures, read_fixtures, verify_fixtures, write_fixtures
from pfid.generator import generate, random_partition

logger = logging.getLogger(__name__)


def run_generate(
    partition: int | None = None,
    timestamp: int | None = None,
    root: bool = False,
    related: str | None = None,
    count: int = 1,
    console: Console | None = None,
) -> int:
    """Print ``count`` new ids.

    Args:
        partition: Partition to mint into
        timestamp: Fixed Unix millisecond timestamp (default: now)
        root: Use a fresh random partition for each id
        related: Mint into the same partition as this existing id
        count: Number of ids to print

    The timestamp applies to every source, so ``--root`` and ``--related``
    honour it too.

    Returns:
        Exit code (0 = success, 1 = bad input)
    """
    console = console or Console()
    err = Console(stderr=True)

    chosen = sum((partition is not None, root, related is not None))
    if chosen != 1:
        err.print("Pass exactly one of --partition, --root or --related", style="bold red")
        return 1

    try:
        if related is not None:
            partition = extract_partition(related)
        for _ in range(count):
            pfid = generate(random_partition() if root else partition, timestamp)
            console.print(pfid, highlight=False)
    except PFIDError as e:
        err.print(str(e), style="bold red", markup=False)
        return 1
    return 0


def run_encode(binary_hex: str, console: Console | None = None) -> int:
    """Print the text form of a 40-hex-digit binary id."""
    console = console or Console()
    err = Console(stderr=True)
    try:
        binary = bytes.fromhex(binary_hex)
    except ValueError:
        err.print(f"Not a hex string: {binary_hex!r}", style="bold red", markup=False)
        return 1
    try:
        console.print(encode(binary), highlight=False)
    except PFIDError as e:
        err.print(str(e), style="bold red", markup=False)
        return 1
    return 0


def run_decode(pfid: str, console: Console | None = None) -> int:
    """Print the binary form of a text id as hex."""
    console = console or Console()
    try:
        console.print(decode(pfid).hex(), highlight=False)
    except PFIDError as e:
        Console(stderr=True).print(str(e), style="bold red", markup=False)
        return 1
    return 0


def run_inspect(pfid: str, output_json: bool = False, console: Console | None = None) -> int:
    """Show the timestamp, partition and randomness inside a text id."""
    console = console or Console()
    try:
        fields = parse(pfid)
    except PFIDError as e:
        Console(stderr=True).print(str(e), style="bold red", markup=False)
        return 1

    try:
        created = timestamp_of(pfid).isoformat()
    except PFIDError:
        created = None

    if output_json:
        payload = {
            "pfid": pfid.lower(),
            "timestamp": fields.timestamp,
            "created": created,
            "partition": fields.partition,
            "randomness": fields.randomness.hex(),
        }
        console.print(json.dumps(payload, indent=2), markup=False, highlight=False)
        return 0

    table = Table(title=pfid.lower(), show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("timestamp", str(fields.timestamp))
    table.add_row("created", created or "[dim]out of datetime range[/dim]")
    table.add_row("partition", str(fields.partition))
    table.add_row("randomness", fields.randomness.hex())
    console.print(table)
    return 0


def run_validate(pfids: list[str], console: Console | None = None) -> int:
    """Report validity of each id; exit 1 if any is invalid."""
    console = console or Console()
    invalid = 0
    for pfid in pfids:
        if is_valid_text_id(pfid):
            console.print(f"[green]valid[/green]   {escape(pfid)}", highlight=False)
        else:
            invalid += 1
            console.print(f"[red]invalid[/red] {escape(pfid)}", highlight=False)
    return 1 if invalid else 0


def run_fixtures(path: Path, count: int, seed: int, console: Console | None = None) -> int:
    """Write a fresh fixture CSV."""
    console = console or Console(stderr=True)
    rows = build_fixtures(count=count, seed=seed)
    written = write_fixtures(path, rows)
    console.print(f"Generated {len(rows)} test fixtures in {written}", style="green")
    return 0


def run_verify_fixtures(path: Path, console: Console | None = None) -> int:
    """Check every row of a fixture CSV against this implementation."""
    console = console or Console(stderr=True)
    try:
        rows = read_fixtures(path)
    except ValueError as e:
        Console(stderr=True).print(f"Cannot read fixtures: {e}", style="bold red", markup=False)
        return 1
    logger.debug("Verifying %d fixtures from %s", len(rows), path)
    failures = verify_fixtures(rows)
    if failures:
        for failure in failures:
            console.print(str(failure), style="red", markup=False)
        console.print(f"{len(failures)} of {len(rows)} fixtures failed", style="bold red")
        return 1
    console.print(f"All {len(rows)} fixtures passed", style="green")
    return 0
