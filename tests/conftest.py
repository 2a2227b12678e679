"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from librarian.config import Config, config_from_yaml


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_yaml():
    """Sample librarian.yaml for a Rust repository."""
    return """language: rust
repo: googleapis/google-cloud-rust
sources:
  googleapis:
    commit: 9fcfbea0aa5b50fa22e190faceb073d74504172b
    sha256: 81e6057ffd85154af5268c2c3c8f2408745ca0f7fa03d43c68f4847f31eb5f98
default:
  output: src/generated
  transport: grpc+rest
  release_level: stable
  tag_format: '{id}-v{version}'
  rust:
    package_dependencies:
    - name: wkt
      package: google-cloud-wkt
      source: google.protobuf
    disabled_rustdoc_warnings:
    - redundant_explicit_links
libraries:
- name: google-cloud-secretmanager-v1
  channels:
  - path: google/cloud/secretmanager/v1
    service_config: google/cloud/secretmanager/v1/secretmanager_v1.yaml
  version: 1.2.0
- name: google-cloud-storage
  output: src/storage
  version: 0.5.0
  rust:
    package_dependencies:
    - name: wkt
      package: google-cloud-wkt-custom
"""


@pytest.fixture
def sample_config(sample_config_yaml) -> Config:
    """Parsed sample librarian.yaml."""
    return config_from_yaml(sample_config_yaml)


@pytest.fixture
def repo_with_config(temp_dir, sample_config_yaml):
    """A repository directory holding the sample librarian.yaml."""
    (temp_dir / "librarian.yaml").write_text(sample_config_yaml)
    return temp_dir
