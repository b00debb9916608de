"""
Configuration Module for Release Tag Resolver

This module contains constants and the configuration structure consumed
by the resolution pipeline.

Constants:
    VERSION_PLACEHOLDER: Token marking where the version sits in a tag format
    CHANNEL_SEPARATOR: Character separating a tag from its channel qualifier
    DEFAULT_TAG_FORMAT: Tag format used when none is configured
    DEFAULT_BRANCHES: Release branches used when none are configured
    DEFAULT_CONFIG_FILE: YAML file read from the repository root if present
    DEFAULT_MAX_WORKERS: Number of branches fetched concurrently
    OUTPUT_FORMATS: Supported CLI output formats

Classes:
    ResolveConfig: Settings for one resolution run
"""

from dataclasses import dataclass, field
from typing import List

# Constants
VERSION_PLACEHOLDER = "${version}"
CHANNEL_SEPARATOR = "@"
DEFAULT_TAG_FORMAT = "v${version}"
DEFAULT_BRANCHES = ["master"]
DEFAULT_CONFIG_FILE = ".releaserc.yaml"
DEFAULT_MAX_WORKERS = 4
OUTPUT_FORMATS = ("json", "text")


@dataclass
class ResolveConfig:
    """Configuration class for a resolution run."""

    tag_format: str = DEFAULT_TAG_FORMAT
    branches: List[str] = field(default_factory=lambda: list(DEFAULT_BRANCHES))
    max_workers: int = DEFAULT_MAX_WORKERS
