"""Language container invocation.

Contains:
- GENERATE_REQUEST_FILE: Request file read by the container
- build_generate_args: docker arguments for a generate run
- write_generate_request: Write the library request for the container
- run_generate: Run the container's generate command
"""

import json
import logging
import subprocess
from pathlib import Path

from librarian.config import Library
from librarian.generate.exceptions import GenerateError

logger = logging.getLogger(__name__)

LIBRARIAN_DIR = ".librarian"
GENERATOR_INPUT_DIR = "generator-input"
GENERATE_REQUEST_FILE = "generate-request.json"


def build_generate_args(image: str, repo_root: Path, output: Path, source: Path) -> list[str]:
    """Build the docker arguments for a generate run.

    The .librarian directory, the generator input, the output and the
    read-only API sources are mounted at fixed container paths.
    """
    librarian_dir = f"{repo_root}/{LIBRARIAN_DIR}"
    return [
        "run",
        "--rm",
        "-v",
        f"{librarian_dir}:/librarian",
        "-v",
        f"{librarian_dir}/{GENERATOR_INPUT_DIR}:/input",
        "-v",
        f"{output}:/output",
        "-v",
        f"{source}:/source:ro",
        image,
        "generate",
        "--librarian=/librarian",
        "--input=/input",
        "--output=/output",
        "--source=/source",
    ]


def write_generate_request(repo_root: Path, library: Library) -> Path:
    """Write the effective library configuration for the container.

    Returns:
        Path to the request file.
    """
    librarian_dir = repo_root / LIBRARIAN_DIR
    (librarian_dir / GENERATOR_INPUT_DIR).mkdir(parents=True, exist_ok=True)
    request_file = librarian_dir / GENERATE_REQUEST_FILE
    request_file.write_text(json.dumps(library.model_dump(exclude_defaults=True), indent=2))
    return request_file


def run_generate(image: str, repo_root: Path, library: Library, output: Path, source: Path) -> None:
    """Generate a library by running the language container.

    Args:
        image: Language container image.
        repo_root: The repository root.
        library: The library with defaults filled in.
        output: Directory the container writes generated code to.
        source: Root of the API sources.

    Raises:
        GenerateError: If docker is missing or the container fails.
    """
    request_file = write_generate_request(repo_root, library)
    args = build_generate_args(image, repo_root, output, source)
    logger.info("Running docker %s", " ".join(args))
    try:
        subprocess.run(["docker"] + args, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        raise GenerateError(
            f"Container generate failed for {library.name}:\n{(e.stderr or '').strip()}"
        )
    except FileNotFoundError:
        raise GenerateError("Docker is not installed or not in PATH.")
    finally:
        request_file.unlink(missing_ok=True)
