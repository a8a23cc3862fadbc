"""
Configuration module for pygrep.

This module defines ``GrepConfig``, the already-parsed options of one grep
invocation. The command line builds it; library callers may build it
directly. From it the orchestrator derives the two frozen per-run configs
(``MatcherConfig`` and ``ReportConfig``) that the scanner and the reporter
share read-only.

Example:
    >>> from pygrep.core.config import GrepConfig
    >>> from pygrep.core.types import ColorMode
    >>>
    >>> config = GrepConfig(
    ...     pattern="TODO",
    ...     file_paths=["src"],
    ...     recursive=True,
    ...     count_only=True,
    ...     color=ColorMode.NEVER,
    ... )
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from ..utils.error_handling import ConfigurationError
from .types import ColorMode, MatcherConfig, ReportConfig

if TYPE_CHECKING:
    from ..search.matchers import LineMatcher


@dataclass(slots=True)
class GrepConfig:
    pattern: str
    # Sources; empty means standard input
    file_paths: list[str] = field(default_factory=list)
    recursive: bool = False
    follow_symlinks: bool = True

    # Matching
    invert: bool = False
    ignore_case: bool = False

    # Output
    count_only: bool = False
    color: ColorMode = ColorMode.AUTO

    def validate(self) -> None:
        """Validate the options and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if self.pattern is None:
            raise ConfigurationError(
                "A search pattern must be specified",
                context={"field": "pattern"},
            )

        if not isinstance(self.color, ColorMode):
            try:
                self.color = ColorMode(self.color)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown color mode '{self.color}', expected one of: "
                    + ", ".join(mode.value for mode in ColorMode),
                    context={"field": "color", "value": self.color},
                ) from None

        for path in self.file_paths:
            if not path:
                raise ConfigurationError(
                    "File paths must not be empty",
                    context={"field": "file_paths", "value": list(self.file_paths)},
                )

    def resolve_color(self, stream: TextIO | None) -> bool:
        """Decide whether to emit color; ``auto`` follows whether ``stream`` is a terminal."""
        if self.color == ColorMode.ALWAYS:
            return True
        if self.color == ColorMode.NEVER:
            return False
        return stream_is_terminal(stream)

    def matcher_config(self, matcher: LineMatcher) -> MatcherConfig:
        return MatcherConfig(pattern=matcher, invert=self.invert)

    def report_config(self, stream: TextIO | None) -> ReportConfig:
        return ReportConfig(count_only=self.count_only, color=self.resolve_color(stream))


def stream_is_terminal(stream: TextIO | None) -> bool:
    """True when ``stream`` is attached to an interactive terminal."""
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False
