"""
Shared test fixtures and utilities for pygrep tests.

This module provides common fixtures, test data, and helper functions
to reduce code duplication and improve test consistency across the test suite.
"""

import io
from pathlib import Path

import pytest

from pygrep import ColorMode, GrepConfig, MatcherConfig, PyGrep, compile_matcher
from pygrep.utils.logging_config import GrepLogger, configure_logging

# Test data constants
SAMPLE_TEXT = "foo\nbar\nfoobar\n"

SAMPLE_LOG = """\
2024-01-01 INFO  service started
2024-01-01 DEBUG loading config
2024-01-01 ERROR connection refused
2024-01-01 INFO  retrying
2024-01-01 ERROR connection refused again
"""


class TtyStringIO(io.StringIO):
    """In-memory stream that claims to be an interactive terminal."""

    def isatty(self) -> bool:
        return True


def make_engine(
    pattern: str,
    files: list[str] | None = None,
    stdin: io.StringIO | None = None,
    **options,
) -> tuple[PyGrep, io.StringIO, io.StringIO]:
    """Build a PyGrep wired to in-memory streams; returns (engine, stdout, stderr)."""
    options.setdefault("color", ColorMode.NEVER)
    cfg = GrepConfig(pattern=pattern, file_paths=list(files or []), **options)
    out = io.StringIO()
    err = io.StringIO()
    engine = PyGrep(
        cfg,
        stdin=stdin if stdin is not None else io.StringIO(""),
        stdout=out,
        stderr=err,
        logger=GrepLogger(enable_console=False),
    )
    return engine, out, err


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A file with lines foo, bar, foobar."""
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "service.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Directory tree a/{1.txt, b/2.txt}."""
    root = tmp_path / "a"
    (root / "b").mkdir(parents=True)
    (root / "1.txt").write_text("one foo\n", encoding="utf-8")
    (root / "b" / "2.txt").write_text("two\nfoo two\n", encoding="utf-8")
    return root


@pytest.fixture
def foo_config() -> MatcherConfig:
    return MatcherConfig(pattern=compile_matcher("foo"))


@pytest.fixture
def quiet_logger() -> GrepLogger:
    return GrepLogger(enable_console=False)


@pytest.fixture(autouse=True)
def _reset_global_logger():
    """CLI runs reconfigure the process-wide logger; leave a quiet one behind."""
    yield
    configure_logging(enable_console=False)
