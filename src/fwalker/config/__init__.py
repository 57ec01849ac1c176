"""
Configuration management package for fwalker.

This package loads default search settings from YAML files and merges them
with explicit values into validated search options.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'validate_config_file',
    'create_config_template'
]
