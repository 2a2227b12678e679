"""Default-filling for library configuration.

Contains:
- fill_defaults: Populate unset library fields from Default
- fill_rust: Populate unset Rust crate settings from the Rust defaults
- merge_package_dependencies: Merge dependency lists by name
"""

from typing import Optional

from librarian.config.models import Default, Library, RustCrate, RustPackageDependency


def fill_defaults(library: Library, default: Optional[Default]) -> Library:
    """Populate empty library fields from the defaults.

    output, release_level and transport are copied from the default only when
    the library value is an empty string. When the default carries Rust
    settings, fill_rust runs as well.

    Args:
        library: Library to fill. Modified in place.
        default: Defaults from librarian.yaml, or None.

    Returns:
        The same library, for chaining.
    """
    if default is None:
        return library

    if not library.output:
        library.output = default.output
    if not library.release_level:
        library.release_level = default.release_level
    if not library.transport:
        library.transport = default.transport

    if default.rust is not None:
        return fill_rust(library, default)
    return library


def fill_rust(library: Library, default: Default) -> Library:
    """Populate empty Rust crate settings from the Rust defaults.

    Package dependencies are merged by name. disabled_rustdoc_warnings is
    all-or-nothing: the default list is used only when the library has none.

    Args:
        library: Library to fill. Modified in place.
        default: Defaults with a non-None rust section.

    Returns:
        The same library, for chaining.
    """
    if library.rust is None:
        library.rust = RustCrate()

    library.rust.package_dependencies = merge_package_dependencies(
        default.rust.package_dependencies,
        library.rust.package_dependencies,
    )
    if not library.rust.disabled_rustdoc_warnings:
        library.rust.disabled_rustdoc_warnings = list(default.rust.disabled_rustdoc_warnings)
    return library


def merge_package_dependencies(
    defaults: list[RustPackageDependency],
    library: list[RustPackageDependency],
) -> list[RustPackageDependency]:
    """Merge default and library package dependencies.

    Library dependencies are kept as-is and come first. Default dependencies
    whose name is not already present are appended as copies, so later edits
    to the result never touch the shared defaults.

    Args:
        defaults: Dependencies from the Rust defaults.
        library: Dependencies declared by the library.

    Returns:
        The merged list.
    """
    seen = set()
    result = []
    for dep in library:
        seen.add(dep.name)
        result.append(dep)
    for dep in defaults:
        if dep.name in seen:
            continue
        result.append(dep.model_copy(deep=True))
    return result
