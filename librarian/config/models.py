"""Data models for librarian.yaml.

Contains Pydantic models for the repository configuration:
- Source, Sources: Pinned or local external source repositories
- Default: Settings applied to every library
- Channel: A binding from a library to one source API
- Library: One releasable unit
- RustDefault, RustCrate: Rust-specific default and crate settings
- RustPackageDependency, RustDocumentationOverride, RustPaginationOverride,
  RustDiscovery, RustPoller: Rust sub-settings
- Config: The root of librarian.yaml

Field names match the YAML keys. Empty strings, empty lists and False mean
"unset" and are omitted when the file is written.
"""

from typing import Optional

from pydantic import BaseModel, field_validator


def _none_to_list(v):
    """Treat an explicit YAML null as an empty list."""
    if v is None:
        return []
    return v


class Source(BaseModel):
    """An external source repository.

    Attributes:
        commit: Git commit hash or tag to fetch.
        sha256: Expected SHA-256 of the tarball for that commit.
        dir: Local directory to use instead of fetching. Overrides commit/sha256.
    """

    commit: str = ""
    sha256: str = ""
    dir: str = ""


class Sources(BaseModel):
    """External source repositories keyed by name."""

    discovery: Optional[Source] = None
    googleapis: Optional[Source] = None


class RustPackageDependency(BaseModel):
    """A Rust package dependency mapping a proto package to a crate."""

    name: str
    ignore: bool = False
    package: str = ""
    source: str = ""
    feature: str = ""
    force_used: bool = False
    used_if: str = ""


class RustDocumentationOverride(BaseModel):
    """Replaces text in the documentation of one element."""

    id: str
    match: str
    replace: str


class RustPaginationOverride(BaseModel):
    """Overrides the pagination item field of one method."""

    id: str
    item_field: str


class RustPoller(BaseModel):
    """Maps a URL path prefix to an LRO poller method."""

    prefix: str
    method_id: str


class RustDiscovery(BaseModel):
    """Discovery-specific LRO polling configuration."""

    operation_id: str
    pollers: list[RustPoller] = []

    @field_validator("pollers", mode="before")
    @classmethod
    def ensure_pollers_list(cls, v):
        """Ensure pollers is a list."""
        return _none_to_list(v)


class RustDefault(BaseModel):
    """Rust settings shared by every library."""

    package_dependencies: list[RustPackageDependency] = []
    disabled_rustdoc_warnings: list[str] = []

    @field_validator("package_dependencies", "disabled_rustdoc_warnings", mode="before")
    @classmethod
    def ensure_lists(cls, v):
        """Ensure list fields are lists."""
        return _none_to_list(v)


class RustCrate(RustDefault):
    """Rust settings for a single crate."""

    per_service_features: bool = False
    module_path: str = ""
    template_override: str = ""
    title_override: str = ""
    package_name_override: str = ""
    root_name: str = ""
    roots: list[str] = []
    default_features: list[str] = []
    extra_modules: list[str] = []
    include_list: list[str] = []
    included_ids: list[str] = []
    skipped_ids: list[str] = []
    disabled_clippy_warnings: list[str] = []
    has_veneer: bool = False
    routing_required: bool = False
    include_grpc_only_methods: bool = False
    generate_setter_samples: bool = False
    post_process_protos: str = ""
    detailed_tracing_attributes: bool = False
    documentation_overrides: list[RustDocumentationOverride] = []
    pagination_overrides: list[RustPaginationOverride] = []
    name_overrides: str = ""
    discovery: Optional[RustDiscovery] = None

    @field_validator(
        "roots",
        "default_features",
        "extra_modules",
        "include_list",
        "included_ids",
        "skipped_ids",
        "disabled_clippy_warnings",
        "documentation_overrides",
        "pagination_overrides",
        mode="before",
    )
    @classmethod
    def ensure_crate_lists(cls, v):
        """Ensure list fields are lists."""
        return _none_to_list(v)


class Default(BaseModel):
    """Fallback settings applied to every library.

    Attributes:
        output: Directory where generated code is written (e.g., "src/generated").
        transport: Transport protocol (e.g., "grpc+rest").
        release_level: "stable" or "preview".
        tag_format: Template for git tags, using {id} and {version}.
        rust: Rust-specific defaults.
    """

    output: str = ""
    transport: str = ""
    release_level: str = ""
    tag_format: str = ""
    rust: Optional[RustDefault] = None


class Channel(BaseModel):
    """A source API included in a library."""

    path: str = ""
    service_config: str = ""


class Library(BaseModel):
    """One releasable library.

    Attributes:
        name: Library name. Identity key, written first.
        channels: Source APIs the library is generated from.
        version: Current library version.
        output: Output directory. Overrides Default.output.
        release_level: Overrides Default.release_level.
        transport: Overrides Default.transport.
        skip_generate: Disable code generation.
        skip_release: Disable releasing.
        skip_publish: Disable publishing.
        keep: Paths under output preserved during regeneration.
        copyright_year: Copyright year for generated files.
        specification_format: "protobuf" (default) or "discovery".
        description_override: Overrides the library description.
        rust: Rust crate settings.
    """

    name: str
    channels: list[Channel] = []
    skip_generate: bool = False
    skip_release: bool = False
    skip_publish: bool = False
    output: str = ""
    version: str = ""
    copyright_year: str = ""
    keep: list[str] = []
    release_level: str = ""
    specification_format: str = ""
    transport: str = ""
    description_override: str = ""
    rust: Optional[RustCrate] = None

    @field_validator("channels", "keep", mode="before")
    @classmethod
    def ensure_lists(cls, v):
        """Ensure list fields are lists."""
        return _none_to_list(v)


class Config(BaseModel):
    """The root of a librarian.yaml file.

    Attributes:
        language: Generation language for this repository (e.g., "rust").
        repo: Repository name, such as "googleapis/google-cloud-rust".
        sources: External source repositories.
        default: Settings applied to every library.
        libraries: Libraries that differ from the defaults.
    """

    language: str = ""
    repo: str = ""
    sources: Optional[Sources] = None
    default: Optional[Default] = None
    libraries: list[Library] = []

    @field_validator("libraries", mode="before")
    @classmethod
    def ensure_libraries_list(cls, v):
        """Ensure libraries is a list."""
        return _none_to_list(v)
