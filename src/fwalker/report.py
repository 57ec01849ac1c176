"""
Statistics reporting for fwalker.

Renders the counters of a finished run as the plain-text block printed after
the matches.
"""

import sys
from datetime import datetime
from typing import List, Optional, TextIO

from .models.search_stats import SearchStats


def format_stats(stats: SearchStats, now: Optional[datetime] = None) -> str:
    """
    Format run statistics.

    Average size and matches per file are only included when at least one
    file was searched (and, for the latter, something matched).

    Args:
        stats: Statistics of a finished run
        now: End time used for the elapsed figure (defaults to now)

    Returns:
        Multi-line statistics block
    """
    lines: List[str] = [
        "=== Search Statistics ===",
        f"Files searched:    {stats.files_searched}",
        f"Files matched:     {stats.files_matched}",
        f"Total matches:     {stats.total_matches}",
        f"Total size:        {stats.total_size} bytes",
        f"Time elapsed:      {stats.elapsed_seconds(now):.2f} seconds",
    ]

    average_kb = stats.average_file_size_kb()
    if average_kb is not None:
        lines.append(f"Avg file size:     {average_kb:.2f} KB")

    per_file = stats.matches_per_file()
    if per_file is not None:
        lines.append(f"Matches per file:  {per_file:.2f}")

    return "\n".join(lines)


def print_stats(stats: SearchStats, stream: Optional[TextIO] = None) -> None:
    """Print the statistics block, preceded by a blank line."""
    stream = stream or sys.stdout
    print(file=stream)
    print(format_stats(stats), file=stream)
