"""
Basic type definitions for pygrep.

This module contains the values passed between the resolver, the scanner,
the reporter and the orchestrator. Per-run configuration objects are frozen:
one run builds them once and lends them to every component.

Key Types:
    LineMatch: One qualifying line and its 1-based line number
    SourceMatches: All qualifying lines of one source, in input order
    MatcherConfig: Matcher capability plus the invert flag
    ReportConfig: Count-only and color switches for the reporter
    ResolvedPath: A scannable file path, or the reason a path is not one
    ScanStats / GrepOutcome: What a run did and how it should exit

Example:
    >>> from pygrep.core.types import LineMatch, SourceMatches
    >>> source = SourceMatches("notes.txt", [LineMatch("foo", 1), LineMatch("foobar", 3)])
    >>> source.count
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...search.matchers import LineMatcher
    from ...utils.error_handling import SearchError

# Display label used for piped standard input
STDIN_LABEL = "stdin"

# (start, end) offsets of matched text within one line
MatchSpan = tuple[int, int]


class ColorMode(str, Enum):
    """When to highlight output."""

    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class RunState(str, Enum):
    """States of one grep invocation."""

    INIT = "init"
    INTERACTIVE_STDIN = "interactive_stdin"
    BATCH_STDIN = "batch_stdin"
    BATCH_FILES = "batch_files"
    DONE = "done"


class ExitStatus(IntEnum):
    """Conventional line-filter exit codes."""

    MATCHED = 0
    NO_MATCHES = 1
    ERROR = 2


@dataclass(frozen=True, slots=True)
class LineMatch:
    """A line that satisfied the match predicate.

    ``text`` is the line as read, terminator removed; trimming happens only
    when it is rendered.
    """

    text: str
    line_number: int


@dataclass(slots=True)
class SourceMatches:
    """
    Qualifying lines of one source, in input order.

    Attributes:
        source_label: Display path of the source, or ``"stdin"``
        matches: LineMatch values with strictly increasing line numbers
        from_stdin: True when the source is piped standard input; such
            blocks are rendered without a label
    """

    source_label: str
    matches: list[LineMatch] = field(default_factory=list)
    from_stdin: bool = False

    def __len__(self) -> int:
        return len(self.matches)

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Read-only matching policy shared by every scan of a run."""

    pattern: LineMatcher
    invert: bool = False


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Read-only rendering policy shared by every block of a run."""

    count_only: bool = False
    color: bool = False


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """
    Outcome of resolving one requested path entry.

    Exactly one of ``path`` and ``error`` is set.

    Attributes:
        requested: The path string as given by the caller
        path: A regular file ready to be scanned
        error: Why the entry cannot be scanned
        label: How ``path`` is displayed; keeps the form the caller typed
    """

    requested: str
    path: Path | None = None
    error: SearchError | None = None
    label: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ScanStats:
    """
    Counters for one run.

    Attributes:
        sources_scanned: Sources whose scan completed
        sources_matched: Sources with at least one qualifying line
        lines_matched: Total lines satisfying the match predicate
        errors: Resolution and scan errors reported as diagnostics
        elapsed_ms: Wall time of the run in milliseconds
    """

    sources_scanned: int = 0
    sources_matched: int = 0
    lines_matched: int = 0
    errors: int = 0
    elapsed_ms: float = 0.0


@dataclass(slots=True)
class GrepOutcome:
    """Result of one invocation, used for the process exit contract."""

    state: RunState
    has_matches: bool
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def exit_status(self) -> ExitStatus:
        if self.state == RunState.INTERACTIVE_STDIN or self.has_matches:
            return ExitStatus.MATCHED
        return ExitStatus.NO_MATCHES
