"""
YAML defaults parser for fwalker.

This module loads, parses and validates the optional YAML file holding
default search settings, and merges those defaults with command-line values
into a validated SearchOptions. It handles configuration file discovery and
turns every validation problem into a ConfigurationError.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass
from pydantic import ValidationError

from ..models.search_options import SearchOptions, SearchSettings


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        settings: The parsed and validated default settings
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether built-in defaults were used
    """
    settings: SearchSettings
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Loads a defaults file, validates it against SearchSettings and reports
    settings combinations that are legal but probably unintended.
    """

    DEFAULT_CONFIG_NAMES = [
        '.fwalker.yaml',
        '.fwalker.yml',
        'fwalker.yaml',
        'fwalker.yml'
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse default settings from file or use built-in defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed settings and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")

            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        settings = self._validate_config_data(config_data)

        warnings = self._get_settings_warnings(settings)

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded from {config_path or 'defaults'}")

        return ConfigParseResult(
            settings=settings,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        search_paths = [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'fwalker',
        ]

        for search_path in search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                        self.logger.info(f"Found configuration file: {config_file}")
                        return config_file, config_data
                    except ConfigurationError as e:
                        self.logger.warning(f"Failed to load {config_file}: {e}")
                        continue

        self.logger.debug("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any]) -> SearchSettings:
        """
        Validate configuration data against the settings model.

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid
        """
        try:
            return SearchSettings.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def _get_settings_warnings(self, settings: SearchSettings) -> List[str]:
        """
        Get warnings for legal but suspicious settings combinations.

        Args:
            settings: The parsed settings

        Returns:
            List of warning messages
        """
        warnings = []

        if not settings.search_content and not settings.search_filenames:
            warnings.append("Both content and filename search are disabled - nothing can match")

        if settings.has_max_size() and settings.max_size < settings.min_size:
            warnings.append(
                f"max_size ({settings.max_size}) is smaller than min_size ({settings.min_size}) - no file will be searched"
            )

        if settings.names_only and settings.count_only:
            warnings.append("names_only has no visible effect while count_only is set")

        return warnings

    def build_options(self, settings: SearchSettings, keywords: List[str],
                      **overrides: Any) -> SearchOptions:
        """
        Merge default settings, keywords and overrides into SearchOptions.

        Args:
            settings: Default settings, usually from load_config
            keywords: Keywords to search for
            **overrides: Settings given explicitly, e.g. on the command line

        Returns:
            Validated SearchOptions

        Raises:
            ConfigurationError: If no keywords are given or a value is invalid
        """
        if not keywords:
            raise ConfigurationError("No keywords specified")

        try:
            options = SearchOptions.from_settings(settings, keywords, **overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid search options: {e}") from e

        if self.strict_mode:
            warnings = self._get_settings_warnings(options)
            if warnings:
                raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        return options

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without using it.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        config_path = Path(config_path)
        if not config_path.exists():
            errors.append(f"Configuration file not found: {config_path}")
            return errors

        try:
            config_data = self._load_yaml_file(config_path)
            self._validate_config_data(config_data)
        except ConfigurationError as e:
            errors.append(str(e))

        return errors

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all settings and comments.

        Returns:
            YAML template as string
        """
        lines = [
            "# fwalker default settings",
            "# Command-line flags override every value in this file",
            "",
        ]

        comments = {
            'case_sensitive': "Case-sensitive keyword matching",
            'recursive': "Descend into subdirectories",
            'search_filenames': "Match keywords against file basenames",
            'search_content': "Match keywords against file lines",
            'show_line_numbers': "Prefix content matches with their line number",
            'names_only': "Only print the names of matching files",
            'count_only': "Only count matches, print statistics",
            'max_depth': "Maximum directory depth below the start (-1 = unlimited)",
            'min_size': "Minimum file size in bytes",
            'max_size': "Maximum file size in bytes (-1 = unlimited)",
            'file_pattern': "Only search files matching this name or '*.ext' pattern",
            'start_dir': "Directory the search starts from",
        }

        defaults = SearchSettings().to_dict()
        for key, comment in comments.items():
            lines.append(f"# {comment}")
            lines.append(yaml.dump({key: defaults[key]}, default_flow_style=False).rstrip())
            lines.append("")

        return "\n".join(lines)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
