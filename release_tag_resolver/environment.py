"""
Environment Configuration Module

Handles parsing and validation of environment variables and of the optional
YAML configuration file. This is a pure module - no side effects, just data
transformation.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional
import logging

import dpath

from .config import (
    DEFAULT_BRANCHES,
    DEFAULT_CONFIG_FILE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_TAG_FORMAT,
    OUTPUT_FORMATS,
    VERSION_PLACEHOLDER,
    ResolveConfig,
)

logger = logging.getLogger(__name__)


def parse_branches(value: Any) -> List[str]:
    """Normalize a branch list given as a comma separated string, names or {name: ...} mappings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [name.strip() for name in value.split(",") if name.strip()]
    if isinstance(value, dict):
        value = [value]

    branches = []
    for item in value:
        if isinstance(item, str) and item.strip():
            branches.append(item.strip())
        elif isinstance(item, dict) and str(item.get("name", "")).strip():
            branches.append(str(item["name"]).strip())
        else:
            logger.warning(f"Ignoring invalid branch definition: {item!r}")
    return branches


def lookup_setting(data: Dict[str, Any], key: str, section: str = "") -> Any:
    """Look up ``key`` in a config document, under a dotted ``section`` path if given."""
    path = f"{section}.{key}" if section else key
    try:
        return dpath.get(data, path, separator=".")
    except (KeyError, ValueError):
        return None


@dataclass
class EnvironmentConfig:
    """Configuration parsed from environment variables."""

    tag_format: str = ""
    branches: List[str] = field(default_factory=list)
    repo_path: str = "."
    config_file: str = DEFAULT_CONFIG_FILE
    config_section: str = ""
    remote: str = ""
    max_workers: int = DEFAULT_MAX_WORKERS
    output_format: str = "json"
    debug: bool = False
    _max_workers_error: Optional[str] = field(default=None, init=False, repr=False)

    @classmethod
    def from_env(cls, env: Dict[str, str]) -> "EnvironmentConfig":
        """Create configuration from environment variables.

        Args:
            env: Dictionary of environment variables (typically os.environ)

        Returns:
            EnvironmentConfig instance
        """
        max_workers = DEFAULT_MAX_WORKERS
        max_workers_error = None
        if workers_str := env.get("MAX_WORKERS", "").strip():
            try:
                max_workers = int(workers_str)
            except ValueError:
                max_workers_error = f"MAX_WORKERS must be an integer, got '{workers_str}'"

        config = cls(
            tag_format=env.get("TAG_FORMAT", "").strip(),
            branches=parse_branches(env.get("BRANCHES", "")),
            repo_path=env.get("REPO_PATH", ".").strip() or ".",
            config_file=env.get("CONFIG_FILE", DEFAULT_CONFIG_FILE).strip(),
            config_section=env.get("CONFIG_SECTION", "").strip(),
            remote=env.get("REMOTE", "").strip(),
            max_workers=max_workers,
            output_format=env.get("OUTPUT_FORMAT", "json").strip().lower(),
            debug=env.get("DEBUG", "false").lower() == "true",
        )
        config._max_workers_error = max_workers_error
        return config

    def merge_file_config(self, data: Optional[Dict[str, Any]]) -> "EnvironmentConfig":
        """Fill settings not given in the environment from a config file document.

        Environment variables always win over the file.

        Args:
            data: Parsed YAML document, or None if there is no file

        Returns:
            New EnvironmentConfig with file settings applied
        """
        if not isinstance(data, dict):
            return self

        tag_format = self.tag_format
        if not tag_format:
            file_format = lookup_setting(data, "tagFormat", self.config_section)
            if isinstance(file_format, str):
                tag_format = file_format

        branches = self.branches
        if not branches:
            branches = parse_branches(lookup_setting(data, "branches", self.config_section))

        merged = replace(self, tag_format=tag_format, branches=branches)
        merged._max_workers_error = self._max_workers_error
        return merged

    @property
    def effective_tag_format(self) -> str:
        return self.tag_format or DEFAULT_TAG_FORMAT

    @property
    def effective_branches(self) -> List[str]:
        return self.branches or list(DEFAULT_BRANCHES)

    def to_resolve_config(self) -> ResolveConfig:
        """Build the ResolveConfig used by the resolution pipeline."""
        return ResolveConfig(
            tag_format=self.effective_tag_format,
            branches=self.effective_branches,
            max_workers=self.max_workers,
        )

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        placeholders = self.effective_tag_format.count(VERSION_PLACEHOLDER)
        if placeholders != 1:
            errors.append(
                f"TAG_FORMAT must contain exactly one {VERSION_PLACEHOLDER} placeholder, "
                f"found {placeholders} in '{self.effective_tag_format}'"
            )

        seen = set()
        for branch in self.effective_branches:
            if branch in seen:
                errors.append(f"Branch '{branch}' is listed more than once")
            seen.add(branch)

        if self._max_workers_error:
            errors.append(self._max_workers_error)
        elif self.max_workers < 1:
            errors.append(f"MAX_WORKERS must be at least 1, got {self.max_workers}")

        if self.output_format not in OUTPUT_FORMATS:
            errors.append(
                f"Invalid OUTPUT_FORMAT '{self.output_format}'. "
                f"Valid options are: {', '.join(OUTPUT_FORMATS)}"
            )

        return errors
