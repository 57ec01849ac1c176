"""
Unit tests for configuration parser.

Tests the YAML defaults parsing, validation, discovery and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import yaml
from pathlib import Path
from unittest.mock import patch

from fwalker.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    validate_config_file,
    create_config_template
)
from fwalker.models.search_options import SearchOptions, SearchSettings


def _write_temp_yaml(content):
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(content)
        return f.name


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.fwalker.yaml',
            '.fwalker.yml',
            'fwalker.yaml',
            'fwalker.yml'
        ]

    def test_load_config_with_valid_file(self):
        """Test loading settings from a valid YAML file."""
        temp_path = _write_temp_yaml(yaml.dump({
            'case_sensitive': False,
            'max_depth': 3,
            'file_pattern': '*.py'
        }))

        try:
            result = ConfigParser().load_config(temp_path)

            assert isinstance(result, ConfigParseResult)
            assert isinstance(result.settings, SearchSettings)
            assert result.settings.case_sensitive is False
            assert result.settings.max_depth == 3
            assert result.settings.file_pattern == '*.py'
            assert result.config_path == Path(temp_path)
            assert result.is_default is False
            assert result.warnings == []
        finally:
            os.unlink(temp_path)

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        temp_path = _write_temp_yaml("max_depth: [\n")

        try:
            with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_empty_file(self):
        """Test that an empty file yields default settings."""
        temp_path = _write_temp_yaml("")

        try:
            result = ConfigParser().load_config(temp_path)

            assert result.settings == SearchSettings()
            assert result.config_path == Path(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_non_dict_yaml(self):
        """Test loading configuration with non-dictionary YAML."""
        temp_path = _write_temp_yaml("- item1\n- item2")

        try:
            with pytest.raises(ConfigurationError, match="must contain a YAML object"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_unknown_key(self):
        """Test that unknown settings are rejected."""
        temp_path = _write_temp_yaml("roots: ['.']\n")

        try:
            with pytest.raises(ConfigurationError, match="Configuration validation failed"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_invalid_value(self):
        """Test that invalid values are rejected."""
        temp_path = _write_temp_yaml("min_size: -10\n")

        try:
            with pytest.raises(ConfigurationError):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_warnings_for_suspicious_settings(self):
        """Test warnings for settings that cannot produce visible results."""
        temp_path = _write_temp_yaml(yaml.dump({
            'search_content': False,
            'search_filenames': False,
            'min_size': 100,
            'max_size': 10,
            'names_only': True,
            'count_only': True
        }))

        try:
            result = ConfigParser().load_config(temp_path)

            assert len(result.warnings) == 3
            assert any("nothing can match" in w for w in result.warnings)
            assert any("smaller than min_size" in w for w in result.warnings)
            assert any("names_only" in w for w in result.warnings)
        finally:
            os.unlink(temp_path)

    def test_strict_mode_rejects_warnings(self):
        """Test that strict mode turns warnings into errors."""
        temp_path = _write_temp_yaml("search_content: false\nsearch_filenames: false\n")

        try:
            with pytest.raises(ConfigurationError, match="strict mode"):
                ConfigParser(strict_mode=True).load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_discovers_config_in_current_directory(self, tmp_path, monkeypatch):
        """Test configuration file discovery."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / '.fwalker.yaml').write_text("recursive: false\n")

        with patch.object(Path, 'home', return_value=tmp_path / 'home'):
            result = ConfigParser().load_config()

        assert result.is_default is False
        assert result.config_path.resolve() == (tmp_path / '.fwalker.yaml').resolve()
        assert result.settings.recursive is False

    def test_discovery_skips_broken_files(self, tmp_path, monkeypatch):
        """Test that an unparsable discovered file is skipped."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / '.fwalker.yaml').write_text("max_depth: [\n")
        (tmp_path / 'fwalker.yml').write_text("max_depth: 4\n")

        with patch.object(Path, 'home', return_value=tmp_path / 'home'):
            result = ConfigParser().load_config()

        assert result.config_path.resolve() == (tmp_path / 'fwalker.yml').resolve()
        assert result.settings.max_depth == 4

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        """Test fallback to built-in defaults."""
        monkeypatch.chdir(tmp_path)

        with patch.object(Path, 'home', return_value=tmp_path / 'home'):
            result = ConfigParser().load_config()

        assert result.is_default is True
        assert result.config_path is None
        assert result.settings == SearchSettings()


class TestBuildOptions:
    """Test cases for ConfigParser.build_options."""

    def test_merges_defaults_and_overrides(self):
        settings = SearchSettings(case_sensitive=False, max_depth=2)

        options = ConfigParser().build_options(settings, ["foo"], max_depth=0)

        assert isinstance(options, SearchOptions)
        assert options.case_sensitive is False
        assert options.max_depth == 0
        assert options.keywords == ["foo"]

    def test_no_keywords(self):
        with pytest.raises(ConfigurationError, match="No keywords specified"):
            ConfigParser().build_options(SearchSettings(), [])

    def test_invalid_override(self):
        with pytest.raises(ConfigurationError, match="Invalid search options"):
            ConfigParser().build_options(SearchSettings(), ["foo"], min_size=-1)

    def test_strict_mode_checks_final_options(self):
        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).build_options(
                SearchSettings(), ["foo"], search_content=False, search_filenames=False
            )


class TestConvenienceFunctions:
    """Test cases for module-level helpers."""

    def test_validate_config_file(self):
        valid = _write_temp_yaml("max_depth: 1\n")
        invalid = _write_temp_yaml("unknown_option: 1\n")

        try:
            assert validate_config_file(valid) == []
            errors = validate_config_file(invalid)
            assert len(errors) == 1
            assert "Configuration validation failed" in errors[0]
        finally:
            os.unlink(valid)
            os.unlink(invalid)

    def test_validate_missing_file(self):
        errors = validate_config_file("/nonexistent/fwalker.yaml")
        assert errors == ["Configuration file not found: /nonexistent/fwalker.yaml"]

    def test_template_round_trip(self, tmp_path):
        target = tmp_path / 'nested' / '.fwalker.yaml'

        create_config_template(target)

        content = target.read_text()
        assert content.startswith("# fwalker default settings")
        assert "# Maximum directory depth" in content
        assert ConfigParser().load_config(target).settings == SearchSettings()
