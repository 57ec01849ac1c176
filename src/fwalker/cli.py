"""
cli.py - Command-line entry point for fwalker.

Usage:
    fwalker error                   # Search for 'error' in current dir
    fwalker /etc error              # Search /etc directory
    fwalker -f "*.c" main           # Search 'main' in all .c files
    fwalker -d 2 -s 1000 test       # Search 'test' in files >1KB
    fwalker --init-config .fwalker.yaml   # Write a settings template

Matches and statistics go to stdout; log messages and errors go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from .config.parser import (
    ConfigParser,
    ConfigurationError,
    create_config_template,
    validate_config_file,
)
from .models.search_options import MAX_KEYWORDS, SearchOptions
from .report import print_stats
from .tools.fs_walker import search


logger = logging.getLogger(__name__)

RULE = "-" * 40


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Unset flags stay None so config defaults apply."""
    parser = argparse.ArgumentParser(
        prog="fwalker",
        description="File Walker - Safe recursive file search",
        usage="%(prog)s [OPTIONS] [DIRECTORY] keyword1 [keyword2 ...]",
    )
    parser.add_argument("terms", nargs="*", metavar="TERM",
                        help="optional start directory followed by keywords")
    parser.add_argument("-i", dest="case_sensitive", action="store_const", const=False,
                        help="case-insensitive search")
    parser.add_argument("-r", dest="recursive", action="store_const", const=True,
                        help="recursive search (default: on)")
    parser.add_argument("--no-recursive", dest="recursive", action="store_const", const=False,
                        help="only search the start directory itself")
    parser.add_argument("-l", dest="names_only", action="store_const", const=True,
                        help="only show names of files with matches")
    parser.add_argument("-c", dest="count_only", action="store_const", const=True,
                        help="only count matches, don't show them")
    parser.add_argument("-n", dest="show_line_numbers", action="store_const", const=True,
                        help="show line numbers (default: on)")
    parser.add_argument("--no-line-numbers", dest="show_line_numbers", action="store_const", const=False,
                        help="omit line numbers from content matches")
    parser.add_argument("--no-filenames", dest="search_filenames", action="store_const", const=False,
                        help="do not match keywords against filenames")
    parser.add_argument("--no-content", dest="search_content", action="store_const", const=False,
                        help="do not match keywords against file content")
    parser.add_argument("-f", dest="file_pattern", metavar="PATTERN",
                        help="search only files matching pattern (e.g., *.c)")
    parser.add_argument("-d", dest="max_depth", metavar="DEPTH", type=int,
                        help="maximum directory depth (default: unlimited)")
    parser.add_argument("-s", dest="min_size", metavar="MIN_SIZE", type=int,
                        help="minimum file size in bytes")
    parser.add_argument("-S", dest="max_size", metavar="MAX_SIZE", type=int,
                        help="maximum file size in bytes")
    parser.add_argument("--config", metavar="PATH",
                        help="YAML file with default settings")
    parser.add_argument("--init-config", metavar="PATH",
                        help="write a commented settings template to PATH and exit")
    parser.add_argument("--check-config", metavar="PATH",
                        help="validate a settings file and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log skipped entries and progress to stderr")
    return parser


def split_terms(terms: List[str]) -> Tuple[Optional[str], List[str]]:
    """
    Separate the start directory from the keywords.

    An existing directory seen before the first keyword is the start
    directory; everything else is a keyword. Keywords past MAX_KEYWORDS are
    dropped.

    Returns:
        (start_dir or None, keywords)
    """
    start_dir = None
    keywords: List[str] = []

    for term in terms:
        if not keywords and os.path.isdir(term):
            start_dir = term
            continue

        if len(keywords) >= MAX_KEYWORDS:
            logger.warning(f"Too many keywords, ignoring: {term}")
            continue
        keywords.append(term)

    return start_dir, keywords


def _collect_overrides(args: argparse.Namespace, start_dir: Optional[str]) -> Dict[str, Any]:
    """Gather the settings given explicitly on the command line."""
    names = (
        "case_sensitive", "recursive", "names_only", "count_only",
        "show_line_numbers", "search_filenames", "search_content",
        "file_pattern", "max_depth", "min_size", "max_size",
    )
    overrides = {name: getattr(args, name) for name in names if getattr(args, name) is not None}
    if start_dir is not None:
        overrides["start_dir"] = start_dir
    return overrides


def print_header(options: SearchOptions) -> None:
    """Print what is about to be searched."""
    print("Searching for: " + "".join(f'"{keyword}" ' for keyword in options.keywords))
    print(f"Starting directory: {options.start_dir}")
    print("Case sensitive" if options.case_sensitive else "Case insensitive")
    if options.has_file_pattern():
        print(f"File pattern: {options.file_pattern}")
    print(RULE)


def init_config(path: str) -> int:
    """Write a settings template."""
    try:
        create_config_template(path)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote settings template to {path}")
    return 0


def check_config(path: str) -> int:
    """Validate a settings file, listing every problem found."""
    errors = validate_config_file(path)
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"{path}: OK")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run fwalker.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_intermixed_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.init_config is not None:
        return init_config(args.init_config)
    if args.check_config is not None:
        return check_config(args.check_config)

    # undecodable file names still reach stdout as \xNN escapes
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="backslashreplace")

    start_dir, keywords = split_terms(args.terms)

    try:
        config_parser = ConfigParser()
        result = config_parser.load_config(args.config)
        for warning in result.warnings:
            logger.warning(warning)

        if not keywords:
            raise ConfigurationError("No keywords specified")

        options = config_parser.build_options(
            result.settings, keywords, **_collect_overrides(args, start_dir)
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    print_header(options)

    stats = search(options)

    if not options.count_only and not options.names_only:
        print()

    print_stats(stats)

    return 0


if __name__ == "__main__":
    sys.exit(main())
