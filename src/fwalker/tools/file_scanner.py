"""
Single-file scanner for fwalker.

This module applies the size and filename filters to one file, searches its
lines and then its basename for keywords, updates the shared statistics and
emits one output line per reportable match.
"""

import os
import logging
from typing import Callable, Iterator, Optional, TextIO

from ..models.search_options import SearchOptions
from ..models.search_stats import FileMatch, SearchStats
from .matchers import basename_of, display_path, line_matches, line_matches_any, matches_pattern


logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 2047

FILENAME_MATCH_PREFIX = "Filename match: "


def iter_bounded_lines(handle: TextIO, max_length: int = MAX_LINE_LENGTH) -> Iterator[str]:
    """
    Yield the lines of an open text file without their terminators.

    A line longer than ``max_length`` is cut to that length; the rest of it is
    read and discarded, so it never shows up as a separate line.

    Args:
        handle: File opened in text mode
        max_length: Maximum characters kept per line

    Yields:
        Lines, each at most ``max_length`` characters long
    """
    while True:
        line = handle.readline(max_length)
        if not line:
            return
        if line.endswith('\n'):
            yield line[:-1]
            continue

        # No terminator: either the last line of the file or an overlong one
        rest = handle.readline(max_length)
        while rest and not rest.endswith('\n'):
            rest = handle.readline(max_length)
        yield line


class FileScanner:
    """
    Scans individual files for keyword matches.

    The scanner holds no per-file state. Every call to ``scan`` mutates the
    SearchStats it was built with and writes output lines through ``emit``.
    """

    def __init__(self, options: SearchOptions, stats: SearchStats,
                 emit: Optional[Callable[[str], None]] = None):
        """
        Initialize the file scanner.

        Args:
            options: Validated search options
            stats: Statistics accumulator shared with the walker
            emit: Output sink for match lines (defaults to print)
        """
        self.options = options
        self.stats = stats
        self.emit = emit or print

    def scan(self, path: str) -> bool:
        """
        Search one file for the configured keywords.

        Files that cannot be opened are skipped without touching the
        statistics. Every file that can be opened adds its size to
        ``total_size``, even when the size or pattern filter then rejects it.

        Args:
            path: Path of a regular file

        Returns:
            True if the file matched in its content or its name
        """
        try:
            handle = open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            return False

        with handle:
            try:
                size = os.fstat(handle.fileno()).st_size
            except OSError as e:
                logger.debug(f"Cannot stat {path}: {e}")
                size = None

            if size is not None:
                self.stats.total_size += size
                if not self.options.size_in_range(size):
                    return False

            if self.options.has_file_pattern() and not matches_pattern(path, self.options.file_pattern):
                return False

            self.stats.files_searched += 1

            match_in_file = False
            if self.options.search_content:
                match_in_file = self._scan_content(path, handle)
                if match_in_file and self.options.names_only:
                    self.stats.files_matched += 1
                    if not self.options.count_only:
                        self.emit(display_path(path))
                    return True

        if self.options.search_filenames and not match_in_file:
            if self._scan_filename(path):
                return True

        if match_in_file:
            self.stats.files_matched += 1

        return match_in_file

    def _scan_content(self, path: str, handle: TextIO) -> bool:
        """
        Search the lines of an open file.

        Each matching line counts once, however many keywords it contains.
        In names-only mode the scan stops at the first matching line.

        Returns:
            True if at least one line matched
        """
        options = self.options
        emit_lines = not options.count_only and not options.names_only
        matched = False

        try:
            for line_number, line in enumerate(iter_bounded_lines(handle), 1):
                if not line_matches_any(line, options.keywords, options.case_sensitive):
                    continue

                self.stats.total_matches += 1
                matched = True

                if options.names_only:
                    break

                if emit_lines:
                    file_match = FileMatch(path=display_path(path), line_number=line_number, line_text=line)
                    self.emit(file_match.format(options.show_line_numbers))
        except OSError as e:
            logger.debug(f"Read error in {path}, content scan stopped: {e}")

        return matched

    def _scan_filename(self, path: str) -> bool:
        """Search the basename of a file, stopping at the first keyword found."""
        basename = basename_of(path)

        for keyword in self.options.keywords:
            if line_matches(basename, keyword, self.options.case_sensitive):
                self.stats.total_matches += 1
                self.stats.files_matched += 1
                if not self.options.count_only:
                    self.emit(f"{FILENAME_MATCH_PREFIX}{display_path(path)}")
                return True

        return False
