"""
Output formatting module for pygrep.

This module renders scan results to the output sink. There are three ways a
source reaches the output:

    - Matched lines (batch mode): a label line, then ``<n>:<text>`` per match
    - Counts (batch mode, ``count_only``): one ``<label>:<count>`` line
    - Pass-through (interactive mode): every line echoed as it arrives

Consecutive blocks are separated by one blank line in matched-lines mode and
by nothing in count mode. Labels are omitted for piped standard input.

When color is enabled, labels are bold magenta, line numbers green and
matched text red. Styles are rendered to ANSI escapes with ``rich``; the
formatting helpers are pure functions so they can be used without a sink.

Example:
    >>> import io
    >>> from pygrep.core.types import LineMatch, ReportConfig, SourceMatches
    >>> from pygrep.search.matchers import compile_matcher
    >>> out = io.StringIO()
    >>> reporter = Reporter(out, ReportConfig(), compile_matcher("foo"))
    >>> reporter.render_single_source(SourceMatches("a.txt", [LineMatch("foo", 1)]))
    >>> out.getvalue()
    'a.txt\\n1:foo\\n'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from rich.color import ColorSystem
from rich.style import Style

from ..core.types import LineMatch, ReportConfig, SourceMatches
from .helpers import highlight_spans, trim_line

if TYPE_CHECKING:
    from ..search.matchers import LineMatcher

LABEL_STYLE = Style(color="magenta", bold=True)
LINE_NUMBER_STYLE = Style(color="green")
MATCH_STYLE = Style(color="red")


def paint(text: str, style: Style, color: bool) -> str:
    """Wrap ``text`` in the ANSI escapes of ``style`` when color is on."""
    if not color or not text:
        return text
    return style.render(text, color_system=ColorSystem.STANDARD)


def format_line_text(text: str, matcher: LineMatcher, color: bool) -> str:
    """Trim a line and highlight its matched spans when color is on."""
    line = trim_line(text)
    if not color:
        return line
    return highlight_spans(
        line, matcher.locate_spans(line), lambda s: paint(s, MATCH_STYLE, color)
    )


def format_label(source: SourceMatches, color: bool) -> str:
    return paint(source.source_label, LABEL_STYLE, color)


def format_count(source: SourceMatches, color: bool) -> str:
    """``<label>:<count>``, or the bare count for standard input."""
    if source.from_stdin:
        return str(source.count)
    return f"{format_label(source, color)}:{source.count}"


def format_match(match: LineMatch, matcher: LineMatcher, color: bool) -> str:
    """``<line_number>:<trimmed text>``."""
    number = paint(str(match.line_number), LINE_NUMBER_STYLE, color)
    return f"{number}:{format_line_text(match.text, matcher, color)}"


def format_source_block(
    source: SourceMatches, config: ReportConfig, matcher: LineMatcher
) -> list[str]:
    """All output lines of one source, without line terminators."""
    if config.count_only:
        return [format_count(source, config.color)]
    lines: list[str] = []
    if not source.from_stdin:
        lines.append(format_label(source, config.color))
    lines.extend(format_match(m, matcher, config.color) for m in source.matches)
    return lines


class Reporter:
    """
    Writes rendered blocks to one append-only text sink.

    The reporter holds no state between blocks: the caller decides when a
    separator is due and when the sink is flushed.
    """

    def __init__(self, sink: TextIO, config: ReportConfig, matcher: LineMatcher) -> None:
        self.sink = sink
        self.config = config
        self.matcher = matcher

    def _write_lines(self, lines: list[str]) -> None:
        self.sink.write("".join(f"{line}\n" for line in lines))

    def render_interactive_line(self, line: str) -> None:
        """Echo one live line, highlighted when it matches and color is on."""
        text = trim_line(line)
        if self.config.color and self.matcher.is_match(text):
            text = format_line_text(text, self.matcher, color=True)
        self._write_lines([text])

    def render_single_source(self, source: SourceMatches) -> None:
        """Render one batch-mode block: a count line or the matched lines."""
        self._write_lines(format_source_block(source, self.config, self.matcher))

    def render_separator(self, has_prior_output: bool) -> None:
        """Blank line between two producing sources, in matched-lines mode only."""
        if has_prior_output and not self.config.count_only:
            self.sink.write("\n")

    def flush(self) -> None:
        self.sink.flush()
