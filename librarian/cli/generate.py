"""Generate command: regenerate libraries with the language container."""

from typing import Optional

import typer

from librarian.cli.utils import check_library_selection, find_repo_root, load_repo_config
from librarian.config import ConfigError, load_librarian_state
from librarian.fetch import FetchError
from librarian.generate import GenerateError, generate_all, generate_library


def generate_command(
    library: Optional[str] = typer.Argument(
        None,
        help="Name of the library to generate",
    ),
    all_libraries: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Generate every library",
    ),
    image: Optional[str] = typer.Option(
        None,
        "--image",
        "-i",
        help="Language container image (defaults to the image in .librarian/state.yaml)",
    ),
) -> None:
    """Generate one library, or all of them with --all."""
    check_library_selection(library, all_libraries)
    repo_root = find_repo_root()
    config = load_repo_config(repo_root)

    try:
        if not image:
            state = load_librarian_state(repo_root)
            image = state.image if state is not None else ""
        if not image:
            typer.echo("Error: no container image, pass --image", err=True)
            raise typer.Exit(1)

        if all_libraries:
            generated = generate_all(config, repo_root, image)
            typer.echo(f"✓ Generated {len(generated)} libraries")
        elif generate_library(config, repo_root, library, image):
            typer.echo(f"✓ Generated {library}")
        else:
            typer.echo(f"Skipped {library} (skip_generate is set)")
    except (ConfigError, FetchError, GenerateError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
