"""Utility modules for the todo API."""

from .logging import setup_logging

__all__ = [
    "setup_logging",
]
