"""
Main API module for pygrep.

This module provides the ``PyGrep`` class, the orchestrator of one grep
invocation. It decides how input is read, drives the resolver and the
scanner across all sources, hands results to the reporter, and aggregates
whether anything matched.

A run is an explicit state machine::

    INIT ──┬── no paths, stdin is a terminal ──> INTERACTIVE_STDIN ──┐
           ├── no paths, stdin is piped ───────> BATCH_STDIN ────────┼──> DONE
           └── paths given ────────────────────> BATCH_FILES ────────┘

- INTERACTIVE_STDIN echoes every line as it arrives (highlighted when it
  matches) and always ends in success.
- BATCH_STDIN scans standard input as one source labelled ``"stdin"``.
- BATCH_FILES resolves the paths and scans each file in order, separating
  the blocks of producing sources.

Per-source failures are written to the error stream as diagnostics, collected
in an ``ErrorCollector`` and never stop the remaining sources. A failure to
write the output itself (e.g. ``BrokenPipeError``) propagates to the caller.

Example:
    >>> from pygrep import GrepConfig, PyGrep
    >>> engine = PyGrep(GrepConfig(pattern="foo", file_paths=["notes.txt"]))
    >>> outcome = engine.run()
    >>> outcome.has_matches, outcome.exit_status
"""

from __future__ import annotations

import sys
import time
from typing import Any, TextIO

from ..search.matchers import LineMatcher, compile_matcher
from ..search.resolver import iter_resolved_paths
from ..search.scanner import is_line_match, scan_file, scan_stdin, strip_line_terminator
from ..utils.error_handling import ErrorCollector, create_error_report, handle_file_error
from ..utils.formatter import Reporter
from ..utils.logging_config import GrepLogger, get_logger
from .config import GrepConfig, stream_is_terminal
from .types import STDIN_LABEL, GrepOutcome, RunState, ScanStats

PROG_NAME = "pygrep"


class PyGrep:
    """
    Orchestrates one grep invocation.

    Attributes:
        cfg (GrepConfig): Parsed options of the invocation
        matcher (LineMatcher): Compiled pattern capability
        matcher_config (MatcherConfig): Frozen matching policy shared by every scan
        report_config (ReportConfig): Frozen rendering policy shared by every block
        reporter (Reporter): Renderer writing to the output stream
        state (RunState): Current state of the run
        logger (GrepLogger): Logging interface
        error_collector (ErrorCollector): Per-source errors of the last run
    """

    def __init__(
        self,
        config: GrepConfig,
        matcher: LineMatcher | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        logger: GrepLogger | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Parsed options. Validated here.
            matcher: Pre-compiled matcher. If None, ``config.pattern`` is
                compiled with ``regex``.
            stdin: Input stream used when no file paths are given. Defaults to sys.stdin.
            stdout: Output sink. Defaults to sys.stdout.
            stderr: Diagnostic stream. Defaults to sys.stderr.
            logger: Custom logger instance. If None, uses default logger.

        Raises:
            ConfigurationError: If the options are invalid.
            InvalidPatternError: If the pattern does not compile.
        """
        config.validate()
        self.cfg = config
        self.matcher = matcher if matcher is not None else compile_matcher(
            config.pattern, ignore_case=config.ignore_case
        )
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector()

        self.matcher_config = config.matcher_config(self.matcher)
        self.report_config = config.report_config(self.stdout)
        self.reporter = Reporter(self.stdout, self.report_config, self.matcher)
        self.state = RunState.INIT

    def select_state(self) -> RunState:
        """Pick the scanning strategy for this run."""
        if self.cfg.file_paths:
            return RunState.BATCH_FILES
        if stream_is_terminal(self.stdin):
            return RunState.INTERACTIVE_STDIN
        return RunState.BATCH_STDIN

    def run(self) -> GrepOutcome:
        """
        Execute the invocation and flush the output.

        Returns:
            GrepOutcome with the strategy used, whether anything matched and
            the run statistics. ``outcome.exit_status`` gives the process
            exit code.

        Raises:
            OSError: If writing to the output stream fails.
        """
        start = time.perf_counter()
        self.error_collector.clear()
        stats = ScanStats()

        mode = self.select_state()
        self.state = mode
        self.logger.log_run_start(
            self.cfg.pattern, mode.value, list(self.cfg.file_paths) or [STDIN_LABEL]
        )

        if mode == RunState.INTERACTIVE_STDIN:
            has_matches = self._run_interactive_stdin(stats)
        elif mode == RunState.BATCH_STDIN:
            has_matches = self._run_batch_stdin(stats)
        else:
            has_matches = self._run_batch_files(stats)

        self.reporter.flush()
        self.state = RunState.DONE

        stats.errors = self.error_collector.total_errors
        stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.logger.log_run_complete(
            mode.value, has_matches, stats.sources_scanned, stats.errors, stats.elapsed_ms
        )
        return GrepOutcome(state=mode, has_matches=has_matches, stats=stats)

    def _run_interactive_stdin(self, stats: ScanStats) -> bool:
        """Echo lines as they are typed until end of input."""
        try:
            for raw in self.stdin:
                line = strip_line_terminator(raw)
                if is_line_match(line, self.matcher_config):
                    stats.lines_matched += 1
                self.reporter.render_interactive_line(line)
                # the user expects feedback per line, not per buffer
                self.reporter.flush()
        except (OSError, UnicodeDecodeError) as e:
            self._report_error(STDIN_LABEL, "read", e)
        stats.sources_scanned += 1
        return True

    def _run_batch_stdin(self, stats: ScanStats) -> bool:
        try:
            source = scan_stdin(self.stdin, self.matcher_config)
        except (OSError, UnicodeDecodeError) as e:
            self._report_error(STDIN_LABEL, "read", e)
            return False

        stats.sources_scanned += 1
        self.logger.log_scan_complete(source.source_label, source.count, 0.0)
        if source.is_empty:
            return False

        self.reporter.render_single_source(source)
        stats.sources_matched += 1
        stats.lines_matched += source.count
        return True

    def _run_batch_files(self, stats: ScanStats) -> bool:
        has_matches = False
        for entry in iter_resolved_paths(
            self.cfg.file_paths,
            self.cfg.recursive,
            follow_symlinks=self.cfg.follow_symlinks,
            error_collector=self.error_collector,
            logger=self.logger,
        ):
            if entry.error is not None:
                self._diagnostic(entry.error.message)
                continue

            assert entry.path is not None
            label = entry.label or str(entry.path)
            scan_start = time.perf_counter()
            try:
                source = scan_file(entry.path, self.matcher_config, label=label)
            except (OSError, UnicodeDecodeError) as e:
                self._report_error(label, "read", e)
                continue

            stats.sources_scanned += 1
            self.logger.log_scan_complete(
                source.source_label,
                source.count,
                (time.perf_counter() - scan_start) * 1000.0,
            )
            if source.is_empty:
                continue

            self.reporter.render_separator(has_prior_output=has_matches)
            self.reporter.render_single_source(source)
            stats.sources_matched += 1
            stats.lines_matched += source.count
            has_matches = True

        return has_matches

    def _report_error(self, label: str, operation: str, exception: Exception) -> None:
        error = handle_file_error(label, operation, exception, self.error_collector, self.logger)
        self._diagnostic(error.message)

    def _diagnostic(self, message: str) -> None:
        self.stderr.write(f"{PROG_NAME}: {message}\n")
        self.stderr.flush()

    def get_error_summary(self) -> dict[str, Any]:
        """Get summary of errors encountered during the last run."""
        return self.error_collector.get_summary()

    def get_error_report(self) -> str:
        """Get detailed error report."""
        return create_error_report(self.error_collector)
