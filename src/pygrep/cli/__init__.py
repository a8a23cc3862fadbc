"""
Command-line interface implementation.

This module provides the command-line interface for pygrep:
- The ``pygrep`` click group and its ``grep`` command
- Mapping of a run's outcome to the process exit status
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
