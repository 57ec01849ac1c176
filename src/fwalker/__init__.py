"""
fwalker - Core Package

A recursive filesystem search tool that walks a directory tree and reports
keyword matches found in file content or in filenames.
"""

__version__ = "0.1.0"
__author__ = "fwalker Team"
