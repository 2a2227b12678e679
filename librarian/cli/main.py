"""Top-level CLI callback: logging and --version."""

import logging

import typer

from librarian import __version__


def main_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Generate, configure and release Google API client libraries."""
    if version:
        typer.echo(f"librarian {__version__}")
        raise typer.Exit(0)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
