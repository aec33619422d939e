"""Persistence backend for grouped tree documents."""

__version__ = "0.1.0"
