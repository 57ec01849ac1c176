"""
Filesystem walker for fwalker.

This module provides the recursive directory traversal that feeds regular
files to the FileScanner. Symlinks are classified without being followed and
never traversed, so a link back to an ancestor cannot cause a loop.
Unreadable entries are skipped and never abort the walk.
"""

import os
import logging
from typing import Callable, Optional

from ..config.parser import ConfigurationError
from ..models.search_options import SearchOptions
from ..models.search_stats import SearchStats
from .file_scanner import FileScanner


logger = logging.getLogger(__name__)

MAX_PATH_LENGTH = 4096


class FSWalker:
    """
    Depth-first directory walker.

    Directories are descended into while the recursive flag is set and the
    depth bound allows it; regular files are handed to the scanner; every
    other entry type is ignored.
    """

    def __init__(self, options: SearchOptions, stats: SearchStats,
                 scanner: Optional[FileScanner] = None,
                 emit: Optional[Callable[[str], None]] = None,
                 max_path_length: int = MAX_PATH_LENGTH):
        """
        Initialize the filesystem walker.

        Args:
            options: Validated search options
            stats: Statistics accumulator shared with the scanner
            scanner: File scanner to dispatch to (built from options if omitted)
            emit: Output sink used when building the default scanner
            max_path_length: Longest child path, in encoded bytes, the walker will construct
        """
        self.options = options
        self.stats = stats
        self.scanner = scanner or FileScanner(options, stats, emit)
        self.max_path_length = max_path_length

    def walk(self, path: Optional[str], depth: int = 0) -> None:
        """
        Walk one directory and everything below it.

        Args:
            path: Directory to enumerate; None is a no-op
            depth: Recursion depth of ``path`` below the start directory
        """
        if path is None:
            return

        if self.options.has_max_depth() and depth > self.options.max_depth:
            return

        try:
            entries = os.scandir(path)
        except OSError as e:
            logger.debug(f"Cannot open directory {path}: {e}")
            return

        with entries:
            try:
                for entry in entries:
                    self._visit(path, entry, depth)
            except OSError as e:
                logger.debug(f"Error reading directory {path}: {e}")

    def _visit(self, parent: str, entry: os.DirEntry, depth: int) -> None:
        """Classify one directory entry and dispatch it. scandir never yields '.' or '..'."""
        name = entry.name

        # limit is in bytes of the encoded path, not characters
        if len(os.fsencode(parent)) + len(os.fsencode(name)) + 2 > self.max_path_length:
            logger.debug(f"Path too long, skipping: {name} in {parent}")
            return

        child = os.path.join(parent, name)

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file(follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Cannot stat {child}: {e}")
            return

        if is_dir:
            if self.options.recursive:
                self.walk(child, depth + 1)
        elif is_file:
            self.scanner.scan(child)


def search(options: SearchOptions, emit: Optional[Callable[[str], None]] = None,
           stats: Optional[SearchStats] = None) -> SearchStats:
    """
    Run a complete search from ``options.start_dir``.

    Args:
        options: Validated search options
        emit: Output sink for match lines (defaults to print)
        stats: Accumulator to fill; a fresh one is created if omitted

    Returns:
        The statistics of the run

    Raises:
        ConfigurationError: If no keywords are configured
    """
    if not options.keywords:
        raise ConfigurationError("No keywords specified")

    if stats is None:
        stats = SearchStats()

    logger.info(f"Walking directory tree: {options.start_dir}")
    walker = FSWalker(options, stats, emit=emit)
    walker.walk(options.start_dir, 0)
    logger.info(f"Search finished: {stats}")

    return stats
