"""
Core functionality for the pygrep package.

This module contains the fundamental components of a grep run:
- The orchestrator driving resolution, scanning and reporting
- Configuration of one invocation
- Core data types and structures
"""

from .api import PyGrep
from .config import GrepConfig
from .types import (
    STDIN_LABEL,
    ColorMode,
    ExitStatus,
    GrepOutcome,
    LineMatch,
    MatcherConfig,
    MatchSpan,
    ReportConfig,
    ResolvedPath,
    RunState,
    ScanStats,
    SourceMatches,
)

__all__ = [
    # Main classes
    "PyGrep",
    "GrepConfig",
    # Data types
    "STDIN_LABEL",
    "ColorMode",
    "ExitStatus",
    "GrepOutcome",
    "LineMatch",
    "MatcherConfig",
    "MatchSpan",
    "ReportConfig",
    "ResolvedPath",
    "RunState",
    "ScanStats",
    "SourceMatches",
]
