"""Unit tests for environment and config file parsing."""

import pytest

from release_tag_resolver.config import DEFAULT_BRANCHES, DEFAULT_MAX_WORKERS, DEFAULT_TAG_FORMAT
from release_tag_resolver.environment import EnvironmentConfig, lookup_setting, parse_branches


class TestFromEnv:
    """Test parsing environment variables."""

    def test_defaults(self):
        """Test an empty environment falls back to defaults."""
        config = EnvironmentConfig.from_env({})
        assert config.effective_tag_format == DEFAULT_TAG_FORMAT
        assert config.effective_branches == DEFAULT_BRANCHES
        assert config.max_workers == DEFAULT_MAX_WORKERS
        assert config.output_format == "json"
        assert not config.debug
        assert config.validate() == []

    def test_values(self):
        """Test every supported variable is read."""
        config = EnvironmentConfig.from_env({
            "TAG_FORMAT": "pkg@${version}",
            "BRANCHES": "1.x, master ,next,",
            "REPO_PATH": "/src/project",
            "CONFIG_FILE": "release.yaml",
            "CONFIG_SECTION": "release",
            "REMOTE": "origin",
            "MAX_WORKERS": "2",
            "OUTPUT_FORMAT": "TEXT",
            "DEBUG": "true",
        })
        assert config.tag_format == "pkg@${version}"
        assert config.branches == ["1.x", "master", "next"]
        assert config.repo_path == "/src/project"
        assert config.config_file == "release.yaml"
        assert config.config_section == "release"
        assert config.remote == "origin"
        assert config.max_workers == 2
        assert config.output_format == "text"
        assert config.debug

    def test_to_resolve_config(self):
        """Test the resolve config carries the effective settings."""
        resolve_config = EnvironmentConfig.from_env({"BRANCHES": "main"}).to_resolve_config()
        assert resolve_config.tag_format == DEFAULT_TAG_FORMAT
        assert resolve_config.branches == ["main"]


class TestValidation:
    """Test configuration validation."""

    @pytest.mark.parametrize("tag_format", ["v1", "${version}/${version}"])
    def test_invalid_tag_format(self, tag_format):
        """Test the placeholder count is checked."""
        errors = EnvironmentConfig.from_env({"TAG_FORMAT": tag_format}).validate()
        assert len(errors) == 1
        assert "exactly one ${version}" in errors[0]

    def test_duplicate_branches(self):
        """Test a branch listed twice is reported."""
        errors = EnvironmentConfig.from_env({"BRANCHES": "master,next,master"}).validate()
        assert errors == ["Branch 'master' is listed more than once"]

    def test_invalid_max_workers(self):
        """Test non-integer and non-positive worker counts are reported."""
        assert EnvironmentConfig.from_env({"MAX_WORKERS": "many"}).validate() == [
            "MAX_WORKERS must be an integer, got 'many'"
        ]
        assert EnvironmentConfig.from_env({"MAX_WORKERS": "0"}).validate() == [
            "MAX_WORKERS must be at least 1, got 0"
        ]

    def test_invalid_output_format(self):
        """Test unknown output formats are reported."""
        errors = EnvironmentConfig.from_env({"OUTPUT_FORMAT": "xml"}).validate()
        assert errors == ["Invalid OUTPUT_FORMAT 'xml'. Valid options are: json, text"]


class TestFileConfig:
    """Test merging settings from a config file."""

    def test_file_fills_missing_settings(self):
        """Test tagFormat and branches come from the file when not in the environment."""
        config = EnvironmentConfig.from_env({}).merge_file_config({
            "tagFormat": "release-${version}",
            "branches": ["1.x", {"name": "master"}, {"name": "next", "prerelease": True}],
        })
        assert config.tag_format == "release-${version}"
        assert config.branches == ["1.x", "master", "next"]

    def test_environment_wins(self):
        """Test environment variables are not overridden by the file."""
        config = EnvironmentConfig.from_env({"TAG_FORMAT": "v${version}", "BRANCHES": "main"})
        merged = config.merge_file_config({"tagFormat": "x${version}", "branches": ["other"]})
        assert merged.tag_format == "v${version}"
        assert merged.branches == ["main"]

    def test_nested_section(self):
        """Test settings are looked up under a dotted section path."""
        config = EnvironmentConfig.from_env({"CONFIG_SECTION": "tools.release"})
        merged = config.merge_file_config(
            {"tools": {"release": {"tagFormat": "r${version}", "branches": "master,beta"}}}
        )
        assert merged.tag_format == "r${version}"
        assert merged.branches == ["master", "beta"]

    def test_validation_errors_survive_merge(self):
        """Test errors found while parsing the environment are kept."""
        config = EnvironmentConfig.from_env({"MAX_WORKERS": "x"}).merge_file_config({"tagFormat": "v${version}"})
        assert config.validate() == ["MAX_WORKERS must be an integer, got 'x'"]

    @pytest.mark.parametrize("data", [None, [], "text"])
    def test_non_mapping_documents_are_ignored(self, data):
        """Test empty or non-mapping documents leave the config unchanged."""
        config = EnvironmentConfig.from_env({})
        assert config.merge_file_config(data) is config


class TestHelpers:
    """Test parsing helpers."""

    def test_parse_branches(self):
        """Test the accepted branch definitions."""
        assert parse_branches(None) == []
        assert parse_branches("a,b") == ["a", "b"]
        assert parse_branches({"name": "master"}) == ["master"]
        assert parse_branches(["a", {"name": "b"}, {"channel": "c"}, 3, ""]) == ["a", "b"]

    def test_lookup_setting(self):
        """Test missing keys return None."""
        data = {"release": {"tagFormat": "v${version}"}}
        assert lookup_setting(data, "tagFormat", "release") == "v${version}"
        assert lookup_setting(data, "branches", "release") is None
        assert lookup_setting(data, "tagFormat") is None
