"""
Utility functions and helper modules.

This module contains the supporting pieces of a run:
- Output formatting and highlighting
- Error classification, collection and reporting
- Logging configuration
"""

from .error_handling import (
    ConfigurationError,
    EncodingError,
    ErrorCollector,
    FileAccessError,
    InvalidPatternError,
    NotRegularFileError,
    PermissionError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from .formatter import Reporter, format_source_block
from .helpers import highlight_spans
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "ConfigurationError",
    "EncodingError",
    "ErrorCollector",
    "FileAccessError",
    "InvalidPatternError",
    "NotRegularFileError",
    "PermissionError",
    "SearchError",
    "create_error_report",
    "handle_file_error",
    # Formatting
    "Reporter",
    "format_source_block",
    "highlight_spans",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
