"""
Core type definitions for pygrep.

All types live in ``basic_types`` and are re-exported from this package.
"""

from .basic_types import (
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
