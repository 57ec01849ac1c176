"""
Search option data models for fwalker.

This module defines the structures that parameterize a search run: the
keyword list, case handling, traversal limits and the size and filename
filters applied to every file.
"""

import logging
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


logger = logging.getLogger(__name__)

MAX_KEYWORDS = 20
MAX_KEYWORD_LENGTH = 255


class SearchSettings(BaseModel):
    """
    Every search option except the keywords.

    These are the values a defaults file may provide. They are immutable once
    built; a run derives a SearchOptions from them.

    Attributes:
        case_sensitive: Whether keyword matching respects case
        recursive: Whether subdirectories are descended into
        search_filenames: Whether keywords are tested against file basenames
        search_content: Whether keywords are tested against file lines
        show_line_numbers: Whether content matches include the line number
        names_only: Report each matching file once, by path only
        count_only: Suppress all match output, only count
        max_depth: Maximum recursion depth below the start (negative = unbounded)
        min_size: Inclusive minimum file size in bytes
        max_size: Inclusive maximum file size in bytes (negative = unbounded)
        file_pattern: Optional basename filter (exact name or ``*.ext``)
        start_dir: Directory the walk starts from
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    case_sensitive: bool = Field(True, description="Case-sensitive keyword matching")
    recursive: bool = Field(True, description="Descend into subdirectories")
    search_filenames: bool = Field(True, description="Match keywords against filenames")
    search_content: bool = Field(True, description="Match keywords against file content")
    show_line_numbers: bool = Field(True, description="Prefix content matches with line numbers")
    names_only: bool = Field(False, description="Only report names of matching files")
    count_only: bool = Field(False, description="Only count matches, do not print them")
    max_depth: int = Field(-1, description="Maximum directory depth, negative for unlimited")
    min_size: int = Field(0, ge=0, description="Minimum file size in bytes")
    max_size: int = Field(-1, description="Maximum file size in bytes, negative for unlimited")
    file_pattern: Optional[str] = Field(None, description="Filename filter, e.g. '*.c'")
    start_dir: str = Field(".", min_length=1, description="Starting directory")

    @field_validator('file_pattern')
    @classmethod
    def validate_file_pattern(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank pattern as no pattern."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def has_max_depth(self) -> bool:
        """Check if recursion depth is bounded."""
        return self.max_depth >= 0

    def has_max_size(self) -> bool:
        """Check if an upper size bound is configured."""
        return self.max_size >= 0

    def has_file_pattern(self) -> bool:
        """Check if a filename filter is configured."""
        return bool(self.file_pattern)

    def size_in_range(self, size: int) -> bool:
        """Check a file size against the inclusive size bounds."""
        if size < self.min_size:
            return False
        if self.has_max_size() and size > self.max_size:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert the settings to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchSettings':
        """Create an instance from a dictionary."""
        return cls.model_validate(data)


class SearchOptions(SearchSettings):
    """
    Complete, validated parameters of one search run.

    Adds the keyword list to SearchSettings. At least one keyword is required,
    so an options object that exists is always safe to start a walk with.

    Attributes:
        keywords: Ordered keywords; a line or filename matches if any occurs in it
    """

    keywords: List[str] = Field(..., min_length=1, max_length=MAX_KEYWORDS,
                                description="Keywords to search for")

    @field_validator('keywords')
    @classmethod
    def validate_keywords(cls, v: List[str]) -> List[str]:
        """Bound the length of each keyword."""
        normalized = []
        for keyword in v:
            if len(keyword) > MAX_KEYWORD_LENGTH:
                logger.warning(
                    f"Keyword truncated to {MAX_KEYWORD_LENGTH} characters: {keyword[:20]}..."
                )
                keyword = keyword[:MAX_KEYWORD_LENGTH]
            normalized.append(keyword)
        return normalized

    @classmethod
    def from_settings(cls, settings: SearchSettings, keywords: List[str],
                      **overrides: Any) -> 'SearchOptions':
        """
        Build options from a settings object plus keywords.

        Args:
            settings: Defaults to start from
            keywords: Keywords to search for
            **overrides: Individual settings replacing the defaults

        Returns:
            Validated SearchOptions

        Raises:
            pydantic.ValidationError: If the combined values are invalid
        """
        data = settings.model_dump()
        data.update(overrides)
        data['keywords'] = list(keywords)
        return cls.model_validate(data)
