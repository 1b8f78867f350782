"""CLI entrypoint for pfid."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .spec import FIXTURE_FILENAME, FIXTURE_RANDOM_COUNT, FIXTURE_SEED


@click.group()
@click.version_option(__version__, prog_name="pfid")
@click.option("--verbose", "-V", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """pfid - Partitioned, sortable 160-bit identifiers.

    Generate, encode, decode and inspect PFIDs, and maintain the
    cross-implementation fixture file.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--partition", "-p", type=int, default=None, help="Partition to mint into")
@click.option("--root", is_flag=True, help="Use a random partition")
@click.option("--related", type=str, default=None, metavar="PFID", help="Reuse the partition of an existing id")
@click.option("--timestamp", "-t", type=int, default=None, help="Unix milliseconds (default: now)")
@click.option("--count", "-n", type=click.IntRange(min=1), default=1, help="Number of ids")
def generate(partition: int | None, root: bool, related: str | None, timestamp: int | None, count: int) -> None:
    """Mint new ids."""
    from .commands import run_generate

    sys.exit(run_generate(partition, timestamp, root, related, count))


@cli.command()
@click.argument("binary_hex")
def encode(binary_hex: str) -> None:
    """Encode a 20-byte binary id given as hex."""
    from .commands import run_encode

    sys.exit(run_encode(binary_hex))


@cli.command()
@click.argument("pfid")
def decode(pfid: str) -> None:
    """Decode a text id to hex."""
    from .commands import run_decode

    sys.exit(run_decode(pfid))


@cli.command()
@click.argument("pfid")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect(pfid: str, output_json: bool) -> None:
    """Show the fields inside a text id."""
    from .commands import run_inspect

    sys.exit(run_inspect(pfid, output_json))


@cli.command()
@click.argument("pfids", nargs=-1, required=True)
def validate(pfids: tuple[str, ...]) -> None:
    """Check that each argument is a well-formed text id."""
    from .commands import run_validate

    sys.exit(run_validate(list(pfids)))


@cli.command()
@click.argument(
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("fixtures") / FIXTURE_FILENAME,
)
@click.option("--count", type=click.IntRange(min=0), default=FIXTURE_RANDOM_COUNT, help="Number of random rows")
@click.option("--seed", type=int, default=FIXTURE_SEED, help="Seed for the random rows")
def fixtures(path: Path, count: int, seed: int) -> None:
    """Write the cross-implementation fixture CSV."""
    from .commands import run_fixtures

    sys.exit(run_fixtures(path, count, seed))


@cli.command("verify-fixtures")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def verify_fixtures(path: Path) -> None:
    """Check a fixture CSV against this implementation."""
    from .commands import run_verify_fixtures

    sys.exit(run_verify_fixtures(path))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
