"""
Data models for fwalker.

This module contains the option and statistics structures shared by the
walker, the scanner and the reporting layer.
"""

from .search_options import SearchOptions, SearchSettings
from .search_stats import FileMatch, SearchStats

__all__ = ['SearchOptions', 'SearchSettings', 'SearchStats', 'FileMatch']
