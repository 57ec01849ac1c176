"""
Search tools for fwalker.

This module contains the directory walker, the single-file scanner and the
filename and keyword matchers they share.
"""
