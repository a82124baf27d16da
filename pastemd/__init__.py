"""Pluggable pastebin backend."""

__version__ = "0.6.0"
