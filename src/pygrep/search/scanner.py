"""
Line scanner for pygrep.

A scan reads exactly one source, one line at a time, and keeps the lines for
which ``pattern.is_match(line) XOR invert`` holds. Line numbers are 1-based
and advance for every line read, matching or not.

Read and decode failures are not caught here: they leave the scan of that one
source as ``OSError`` or ``UnicodeDecodeError`` and the orchestrator turns
them into a diagnostic before moving on to the next source.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from ..core.types import STDIN_LABEL, LineMatch, MatcherConfig, SourceMatches

# Files are searched as text; anything that is not valid UTF-8 is a per-source error
SOURCE_ENCODING = "utf-8"


def strip_line_terminator(line: str) -> str:
    """Remove one trailing ``\\n`` or ``\\r\\n``."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def is_line_match(line: str, matcher_config: MatcherConfig) -> bool:
    """The single match policy: base predicate XOR invert."""
    return matcher_config.pattern.is_match(line) ^ matcher_config.invert


def iter_line_matches(
    lines: Iterable[str], matcher_config: MatcherConfig
) -> Iterator[LineMatch]:
    """Yield qualifying lines of ``lines`` in encounter order."""
    for line_number, raw in enumerate(lines, start=1):
        line = strip_line_terminator(raw)
        if is_line_match(line, matcher_config):
            yield LineMatch(text=line, line_number=line_number)


def scan_stream(
    stream: Iterable[str],
    matcher_config: MatcherConfig,
    label: str,
    from_stdin: bool = False,
) -> SourceMatches:
    """Scan an open text stream into a ``SourceMatches`` block."""
    return SourceMatches(
        source_label=label,
        matches=list(iter_line_matches(stream, matcher_config)),
        from_stdin=from_stdin,
    )


def scan_file(
    path: Path, matcher_config: MatcherConfig, label: str | None = None
) -> SourceMatches:
    """
    Scan one regular file, labelled ``label`` or else ``str(path)``.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the content is not valid UTF-8.
    """
    # lines end at "\n" only; a lone "\r" stays part of the line
    with path.open("r", encoding=SOURCE_ENCODING, newline="\n") as f:
        return scan_stream(f, matcher_config, label=label or str(path))


def scan_stdin(stream: Iterable[str], matcher_config: MatcherConfig) -> SourceMatches:
    """Scan piped standard input, labelled ``"stdin"``."""
    return scan_stream(stream, matcher_config, label=STDIN_LABEL, from_stdin=True)
