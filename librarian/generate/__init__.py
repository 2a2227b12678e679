"""Code generation for librarian.

This package provides:
- driver: generate_library, generate_all, clean_output, fetch_googleapis_dir
- docker: Language container invocation
- serviceconfig: Service config discovery
- exceptions: GenerateError
"""

from librarian.generate.docker import (
    GENERATE_REQUEST_FILE,
    build_generate_args,
    run_generate,
    write_generate_request,
)
from librarian.generate.driver import (
    GOOGLEAPIS_REPO,
    clean_output,
    fetch_googleapis_dir,
    generate_all,
    generate_library,
    prepare_library,
)
from librarian.generate.exceptions import GenerateError
from librarian.generate.serviceconfig import find_service_config


__all__ = [
    "GENERATE_REQUEST_FILE",
    "GOOGLEAPIS_REPO",
    "GenerateError",
    "build_generate_args",
    "clean_output",
    "fetch_googleapis_dir",
    "find_service_config",
    "generate_all",
    "generate_library",
    "prepare_library",
    "run_generate",
    "write_generate_request",
]
