"""Fuzzy path query resolution."""

__version__ = "1.0.0"
