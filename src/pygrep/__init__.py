"""
pygrep: Line-oriented pattern search for files, directory trees and streams.

Given a compiled pattern and a set of input sources, pygrep scans each source
line by line, keeps the lines that satisfy the match predicate and reports
them as matched lines, as per-source counts, or (for a live terminal) as a
highlighted pass-through of everything typed.

Key Features:
    - **Source Resolution**: Files and recursively expanded directories, with
      per-entry errors instead of aborted runs
    - **Line Scanning**: 1-based line numbers, invert match as a plain XOR
      on the match predicate
    - **Three Output Modes**: Matched lines, counts, interactive pass-through
    - **Color Highlighting**: Labels, line numbers and matched spans
    - **Pluggable Matching**: Any object with ``is_match``/``locate_spans``
      can drive a run; a ``regex`` backed matcher is built in
    - **Error Handling**: Diagnostics per source, collected for reporting

Main Classes:
    PyGrep: Orchestrator of one invocation
    GrepConfig: Parsed options of one invocation
    GrepOutcome: Whether anything matched, run statistics and exit status
    RegexMatcher: Matcher capability backed by the ``regex`` engine

Example Usage:
    API usage:
        >>> from pygrep import GrepConfig, PyGrep
        >>> engine = PyGrep(GrepConfig(pattern="foo", file_paths=["notes.txt"]))
        >>> outcome = engine.run()
        notes.txt
        1:foo
        3:foobar
        >>> outcome.has_matches
        True

    CLI usage:
        $ pygrep grep foo notes.txt
        $ pygrep grep -r -c TODO src
        $ cat log.txt | pygrep grep -v DEBUG
"""

from .core.api import PyGrep
from .core.config import GrepConfig
from .core.types import (
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
from .search.matchers import LineMatcher, RegexMatcher, compile_matcher
from .search.resolver import resolve_sources
from .search.scanner import scan_file, scan_stdin, scan_stream
from .utils.error_handling import (
    ConfigurationError,
    EncodingError,
    FileAccessError,
    InvalidPatternError,
    NotRegularFileError,
    PermissionError,
    SearchError,
)
from .utils.formatter import Reporter
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

# Package metadata
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Line-oriented pattern search for files, directory trees and streams"

# Public API
__all__ = [
    # Main classes
    "PyGrep",
    "GrepConfig",
    "Reporter",
    # Matching
    "LineMatcher",
    "RegexMatcher",
    "compile_matcher",
    # Resolution and scanning
    "resolve_sources",
    "scan_file",
    "scan_stdin",
    "scan_stream",
    # Data types
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
    # Logging and configuration
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exception classes
    "SearchError",
    "ConfigurationError",
    "EncodingError",
    "FileAccessError",
    "InvalidPatternError",
    "NotRegularFileError",
    "PermissionError",
    # Package metadata
    "__version__",
    "__license__",
    "__description__",
]
