"""
Pattern matching capability for pygrep.

The scanner and the reporter only ever talk to a matcher through the
``LineMatcher`` protocol: ``is_match`` decides whether a line qualifies and
``locate_spans`` returns the offsets to highlight. Any backend that offers
these two calls can drive a run; ``RegexMatcher`` is the one the command line
builds, on top of the ``regex`` engine.

Example:
    >>> from pygrep.search.matchers import compile_matcher
    >>> matcher = compile_matcher(r"fo+", ignore_case=True)
    >>> matcher.is_match("FOObar")
    True
    >>> matcher.locate_spans("foo and FOO")
    [(0, 3), (8, 11)]
"""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol, runtime_checkable

import regex as regex_mod  # better regex engine

from ..core.types import MatchSpan
from ..utils.error_handling import InvalidPatternError


@runtime_checkable
class LineMatcher(Protocol):
    """Capability interface for an already-compiled pattern."""

    def is_match(self, line: str) -> bool: ...

    def locate_spans(self, line: str) -> list[MatchSpan]: ...


@lru_cache(maxsize=64)
def _get_compiled_regex(pattern: str, flags: int) -> regex_mod.Pattern:
    return regex_mod.compile(pattern, flags=flags)


class RegexMatcher:
    """``LineMatcher`` backed by a compiled ``regex`` pattern."""

    __slots__ = ("pattern", "ignore_case", "_rx")

    def __init__(self, pattern: str, ignore_case: bool = False) -> None:
        self.pattern = pattern
        self.ignore_case = ignore_case
        flags = 0
        if ignore_case:
            flags |= regex_mod.IGNORECASE
        try:
            self._rx = _get_compiled_regex(pattern, flags)
        except regex_mod.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    def is_match(self, line: str) -> bool:
        return self._rx.search(line) is not None

    def locate_spans(self, line: str) -> list[MatchSpan]:
        # zero-width matches have nothing to highlight
        return [m.span() for m in self._rx.finditer(line) if m.end() > m.start()]

    def __repr__(self) -> str:
        return f"RegexMatcher({self.pattern!r}, ignore_case={self.ignore_case})"


def compile_matcher(pattern: str, ignore_case: bool = False) -> RegexMatcher:
    """
    Compile ``pattern`` into a matcher.

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression.
    """
    return RegexMatcher(pattern, ignore_case=ignore_case)
