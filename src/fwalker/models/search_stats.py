"""
Search statistics and match models for fwalker.

This module defines the counters accumulated during a walk and the
ephemeral record emitted for each content match.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class FileMatch(BaseModel):
    """
    A single content hit inside a file.

    Built when a line matches and emitted straight away; matches are never
    collected.

    Attributes:
        path: Path of the file, as the walker reached it
        line_number: 1-based number of the matching line
        line_text: Line content without its terminator
    """

    path: str = Field(..., min_length=1, description="Path of the matching file")
    line_number: int = Field(..., ge=1, description="1-based line number")
    line_text: str = Field(..., description="Text of the matching line")

    def format(self, show_line_numbers: bool = True) -> str:
        """Render the match as an output line."""
        if show_line_numbers:
            return f"{self.path}:{self.line_number}:{self.line_text}"
        return f"{self.path}:{self.line_text}"


class SearchStats(BaseModel):
    """
    Counters accumulated over one search run.

    One instance is created per run and passed by reference to every
    scanner and walker call. Reporting code only reads it.

    Attributes:
        files_searched: Files that passed the size and pattern filters
        files_matched: Files with at least one content or filename match
        total_matches: Matching lines plus filename matches
        total_size: Bytes of every file that could be opened, filtered or not
        started_at: When the run started
    """

    files_searched: int = Field(0, ge=0, description="Files that passed all filters")
    files_matched: int = Field(0, ge=0, description="Files with at least one match")
    total_matches: int = Field(0, ge=0, description="Total number of matches")
    total_size: int = Field(0, ge=0, description="Bytes of all opened files")
    started_at: datetime = Field(default_factory=datetime.now, description="Run start time")

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        """Get wall-clock seconds since the run started."""
        now = now or datetime.now()
        return max((now - self.started_at).total_seconds(), 0.0)

    def average_file_size_kb(self) -> Optional[float]:
        """Get total size per searched file in KB, or None if nothing was searched."""
        if self.files_searched <= 0:
            return None
        return self.total_size / self.files_searched / 1024

    def matches_per_file(self) -> Optional[float]:
        """Get matches per searched file, or None if there is nothing to divide."""
        if self.files_searched <= 0 or self.total_matches <= 0:
            return None
        return self.total_matches / self.files_searched

    def __str__(self) -> str:
        """String representation of the statistics."""
        parts = [f"Searched {self.files_searched} files"]
        parts.append(f"Matched {self.files_matched} files")
        parts.append(f"{self.total_matches} matches")
        parts.append(f"{self.total_size} bytes")
        return " | ".join(parts)
