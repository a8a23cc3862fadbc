"""
Tests for pygrep.cli.main module.

Tests are organized the way main.py is laid out:
- TestCliGroup: cli group, version, help
- TestGrepCmd: grep command output and exit status
- TestGrepCmdErrors: usage errors and per-source diagnostics
- TestGrepCmdDiagnostics: --stats, --show-errors and logging options
- TestMainFunction: main() entry point
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from pygrep import __version__
from pygrep.cli import cli, main


def _invoke(args, **kwargs):
    return CliRunner().invoke(cli, args, **kwargs)


class TestCliGroup:
    def test_help(self):
        result = _invoke(["--help"])
        assert result.exit_code == 0
        assert "Line-oriented pattern search" in result.output
        assert "grep" in result.output

    def test_version(self):
        result = _invoke(["--version"])
        assert result.exit_code == 0
        assert f"pygrep, version {__version__}" in result.output

    def test_grep_help(self):
        result = _invoke(["grep", "--help"])
        assert result.exit_code == 0
        for option in ("--recursive", "--count", "--invert-match", "--ignore-case", "--color"):
            assert option in result.output


class TestGrepCmd:
    def test_file(self, sample_file: Path):
        result = _invoke(["grep", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert result.output == f"{sample_file}\n1:foo\n3:foobar\n"

    def test_count(self, sample_file: Path):
        result = _invoke(["grep", "-c", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert result.output == f"{sample_file}:2\n"

    def test_invert(self, sample_file: Path):
        result = _invoke(["grep", "--invert-match", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert result.output == f"{sample_file}\n2:bar\n"

    def test_ignore_case(self, log_file: Path):
        result = _invoke(["grep", "-i", "-c", "error", str(log_file)])
        assert result.output == f"{log_file}:2\n"

    def test_recursive(self, sample_tree: Path):
        result = _invoke(["grep", "-r", "-c", "foo", str(sample_tree)])
        assert result.exit_code == 0
        assert sorted(result.output.splitlines()) == sorted(
            [f"{sample_tree / '1.txt'}:1", f"{sample_tree / 'b' / '2.txt'}:1"]
        )

    def test_no_matches_exits_one(self, sample_file: Path):
        result = _invoke(["grep", "zzz", str(sample_file)])
        assert result.exit_code == 1
        assert result.output == ""

    def test_piped_stdin(self):
        result = _invoke(["grep", "foo"], input="foo\nbar\nfoobar\n")
        assert result.exit_code == 0
        assert result.output == "1:foo\n3:foobar\n"

    def test_piped_stdin_count(self):
        result = _invoke(["grep", "-c", "foo"], input="foo\nbar\nfoobar\n")
        assert result.output == "2\n"

    def test_piped_stdin_no_matches(self):
        result = _invoke(["grep", "foo"], input="bar\n")
        assert result.exit_code == 1
        assert result.output == ""

    def test_color_always(self, sample_file: Path):
        result = _invoke(["grep", "--color", "always", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert "\x1b[" in result.output

    def test_color_auto_without_terminal(self, sample_file: Path):
        result = _invoke(["grep", "--color", "auto", "foo", str(sample_file)])
        assert "\x1b[" not in result.output

    def test_bare_color_means_always(self, sample_file: Path):
        result = _invoke(["grep", "foo", str(sample_file), "--color"])
        assert result.exit_code == 0
        assert "\x1b[" in result.output

    def test_bare_color_before_another_option(self, sample_file: Path):
        result = _invoke(["grep", "--color", "-c", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert "\x1b[" in result.output
        assert result.output.endswith(":2\n")

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinked_directories(self, tmp_path: Path, sample_tree: Path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(sample_tree, target_is_directory=True)
        result = _invoke(["grep", "-r", "-c", "foo", str(root)])
        assert result.exit_code == 0
        assert len(result.output.splitlines()) == 2

        result = _invoke(["grep", "-r", "--no-follow-symlinks", "foo", str(root)])
        assert result.exit_code == 1
        assert result.output == ""


class TestGrepCmdErrors:
    def test_invalid_pattern(self, sample_file: Path):
        result = _invoke(["grep", "(foo", str(sample_file)])
        assert result.exit_code == 2
        assert "Error: Invalid regex pattern '(foo'" in result.output

    def test_missing_pattern(self):
        result = _invoke(["grep"])
        assert result.exit_code == 2

    def test_unknown_color(self, sample_file: Path):
        result = _invoke(["grep", "--color", "sometimes", "foo", str(sample_file)])
        assert result.exit_code == 2

    def test_directory_without_recursion(self, sample_tree: Path, sample_file: Path):
        result = _invoke(["grep", "foo", str(sample_tree), str(sample_file)])
        assert result.exit_code == 0
        assert f"pygrep: {sample_tree} is a directory, use -r to search recursively" in result.output
        assert f"{sample_file}\n1:foo\n3:foobar\n" in result.output

    def test_only_missing_files(self, tmp_path: Path):
        missing = tmp_path / "missing.txt"
        result = _invoke(["grep", "foo", str(missing)])
        assert result.exit_code == 1
        assert f"pygrep: Cannot access {missing}" in result.output


class TestGrepCmdDiagnostics:
    def test_stats(self, sample_file: Path):
        result = _invoke(["grep", "--stats", "foo", str(sample_file)])
        assert result.exit_code == 0
        assert "# mode=batch_files sources_scanned=1 sources_matched=1 lines_matched=2 errors=0" in result.output

    def test_show_errors(self, tmp_path: Path, sample_file: Path):
        result = _invoke(["grep", "--show-errors", "foo", str(tmp_path / "missing.txt"), str(sample_file)])
        assert result.exit_code == 0
        assert "ERROR REPORT" in result.output
        assert "Total errors: 1" in result.output

    def test_show_errors_without_errors(self, sample_file: Path):
        result = _invoke(["grep", "--show-errors", "foo", str(sample_file)])
        assert "ERROR REPORT" not in result.output

    def test_debug_log_file(self, tmp_path: Path, sample_file: Path):
        log_path = tmp_path / "logs" / "run.log"
        result = _invoke(
            ["grep", "--log-level", "DEBUG", "--log-file", str(log_path), "foo", str(sample_file)]
        )
        assert result.exit_code == 0
        content = log_path.read_text(encoding="utf-8")
        assert "Starting batch_files run for pattern 'foo'" in content
        assert "Run complete: mode=batch_files, matched=True" in content


class TestMainFunction:
    def test_main_version(self, capsys):
        with patch.object(sys, "argv", ["pygrep", "--version"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
