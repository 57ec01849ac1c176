"""
Filename and keyword matchers for fwalker.

Two small predicates: one decides whether a filename passes the optional
file pattern filter, the other whether a keyword occurs in a line of text.
Neither raises on missing input.
"""

import os
from typing import Iterable, Optional


def basename_of(filename: str) -> str:
    """Return the part of a path after its last separator."""
    return os.path.basename(filename)


def display_path(path: str) -> str:
    """
    Return a printable form of a path.

    Names that are not valid in the filesystem encoding reach Python as
    strings with lone surrogates; their raw bytes are shown as ``\\xNN``
    escapes instead.
    """
    return os.fsencode(path).decode('utf-8', errors='backslashreplace')


def matches_pattern(filename: Optional[str], pattern: Optional[str]) -> bool:
    """
    Check a filename against a file pattern filter.

    Only two pattern forms exist: ``*.ext`` matches basenames whose extension
    equals ``ext``, anything else must equal the basename. Both comparisons
    ignore case.

    Args:
        filename: File name or path; only its basename is compared
        pattern: Filter pattern; empty matches everything

    Returns:
        True if the filename passes the filter
    """
    if filename is None or pattern is None:
        return False
    if not pattern:
        return True

    basename = basename_of(filename)

    if pattern.startswith('*.'):
        _, dot, extension = basename.rpartition('.')
        if not dot:
            return False
        return extension.lower() == pattern[2:].lower()

    return basename.lower() == pattern.lower()


def line_matches(line: Optional[str], keyword: Optional[str], case_sensitive: bool = True) -> bool:
    """
    Check whether a keyword occurs in a line.

    An empty keyword never matches.

    Args:
        line: Text to search in
        keyword: Substring to look for
        case_sensitive: Compare characters exactly, or after lowercasing

    Returns:
        True if the keyword is a substring of the line
    """
    if line is None or not keyword:
        return False
    if case_sensitive:
        return keyword in line
    return keyword.lower() in line.lower()


def line_matches_any(line: Optional[str], keywords: Iterable[str], case_sensitive: bool = True) -> bool:
    """Check whether any of the keywords occurs in a line."""
    return any(line_matches(line, keyword, case_sensitive) for keyword in keywords)
