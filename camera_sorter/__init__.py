"""Rename Sony camera videos and photos into a date-based library."""

__version__ = "0.1.0"
