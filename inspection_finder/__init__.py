"""Inspection Finder: search, filter and sort restaurant inspection records."""

__version__ = "1.0.0"
