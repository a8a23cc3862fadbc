"""
Command-line interface for pygrep.

This module parses the command line, compiles the pattern, runs the
orchestrator and maps its outcome to the process exit status:

    0  at least one line matched (always 0 for interactive input)
    1  no line matched
    2  usage or pattern error, or the output could not be written

Main Commands:
    grep: Search PATTERN in files, directories or standard input

Example Usage:
    Search files:
        $ pygrep grep "def main" app.py lib.py

    Count matches below a directory:
        $ pygrep grep -r -c TODO src

    Filter piped input, case-insensitively, keeping non-matching lines:
        $ dmesg | pygrep grep -i -v usb

For more information, run: pygrep grep --help
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from .. import __version__
from ..core.api import PROG_NAME, PyGrep
from ..core.config import GrepConfig
from ..core.types import ColorMode, ExitStatus, GrepOutcome
from ..utils.error_handling import SearchError
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


@click.group()
@click.version_option(__version__, prog_name=PROG_NAME)
def cli() -> None:
    """pygrep - Line-oriented pattern search for files and streams"""
    pass


@cli.command("grep")
@click.option("-r", "--recursive", is_flag=True, default=False, help="Recursively search files in directory")
@click.option("-c", "--count", "count_only", is_flag=True, default=False, help="Count matching lines per source")
@click.option("-v", "--invert-match", "invert", is_flag=True, default=False, help="Select non-matching lines")
@click.option("-i", "--ignore-case", is_flag=True, default=False, help="Case insensitive pattern match")
@click.option(
    "--color",
    "color",
    type=click.Choice([mode.value for mode in ColorMode]),
    is_flag=False,
    flag_value=ColorMode.ALWAYS.value,
    default=ColorMode.AUTO.value,
    help="Highlight labels, line numbers and matched text; a bare --color means always",
)
@click.option(
    "--follow-symlinks/--no-follow-symlinks",
    default=True,
    help="Descend into symlinked directories when searching recursively",
)
@click.option("--stats", is_flag=True, default=False, help="Print run statistics to stderr")
# Logging and debugging options
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Log level",
)
@click.option("--log-file", help="Log file path")
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.option("--show-errors", is_flag=True, default=False, help="Print a detailed error report")
@click.argument("pattern")
@click.argument("files", nargs=-1)
def grep_cmd(
    recursive: bool,
    count_only: bool,
    invert: bool,
    ignore_case: bool,
    color: str,
    follow_symlinks: bool,
    stats: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
    show_errors: bool,
    pattern: str,
    files: tuple[str, ...],
) -> None:
    """Search PATTERN in FILES or directories.

    Reads standard input when no FILES are given: piped input is filtered,
    terminal input is echoed line by line with matches highlighted.
    """
    if debug:
        log_level = LogLevel.DEBUG.value

    try:
        logger = configure_logging(
            level=LogLevel(log_level),
            format_type=LogFormat(log_format),
            log_file=Path(log_file) if log_file else None,
            enable_file=bool(log_file),
            enable_console=True,
        )
    except (OSError, ValueError) as e:
        click.echo(f"Error configuring logging: {e}", err=True)
        sys.exit(int(ExitStatus.ERROR))

    cfg = GrepConfig(
        pattern=pattern,
        file_paths=list(files),
        recursive=recursive,
        follow_symlinks=follow_symlinks,
        invert=invert,
        ignore_case=ignore_case,
        count_only=count_only,
        color=ColorMode(color),
    )

    try:
        engine = PyGrep(cfg, logger=logger)
    except SearchError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(int(ExitStatus.ERROR))

    try:
        outcome = engine.run()
    except BrokenPipeError:
        # the interpreter flushes stdout again at exit; send that to devnull
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(int(ExitStatus.ERROR))

    if stats:
        _print_stats(outcome)

    if show_errors:
        error_summary = engine.get_error_summary()
        if error_summary["total_errors"] > 0:
            click.echo("\n" + "=" * 50, err=True)
            click.echo("ERROR REPORT", err=True)
            click.echo("=" * 50, err=True)
            click.echo(engine.get_error_report(), err=True)

    sys.exit(int(outcome.exit_status))


def _print_stats(outcome: GrepOutcome) -> None:
    s = outcome.stats
    click.echo(
        f"# mode={outcome.state.value} sources_scanned={s.sources_scanned} "
        f"sources_matched={s.sources_matched} lines_matched={s.lines_matched} "
        f"errors={s.errors} elapsed_ms={s.elapsed_ms:.2f}",
        err=True,
    )


def main() -> None:
    cli(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
