"""Tests for pygrep.utils.error_handling module."""

from __future__ import annotations

import builtins
import errno
import json
from pathlib import Path
from unittest.mock import Mock

from pygrep.utils.error_handling import (
    ConfigurationError,
    EncodingError,
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    FileAccessError,
    InvalidPatternError,
    NotRegularFileError,
    PermissionError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from pygrep.utils.logging_config import GrepLogger, LogFormat, LogLevel

BuiltinPermissionError = builtins.PermissionError


class TestSearchErrors:
    def test_search_error_defaults(self):
        err = SearchError("boom")
        assert str(err) == "boom"
        assert err.category == ErrorCategory.UNKNOWN
        assert err.severity == ErrorSeverity.MEDIUM
        assert err.suggestions == []
        assert err.context == {}

    def test_not_regular_file_is_file_access(self):
        err = NotRegularFileError("d is a directory", Path("d"))
        assert isinstance(err, FileAccessError)
        assert err.category == ErrorCategory.FILE_ACCESS
        assert err.severity == ErrorSeverity.LOW

    def test_encoding_error_context(self):
        err = EncodingError("bad", Path("x.bin"), context={"offset": 3})
        assert err.context == {"offset": 3, "encoding": "utf-8"}
        assert err.category == ErrorCategory.ENCODING

    def test_configuration_error_is_critical(self):
        assert ConfigurationError("bad").severity == ErrorSeverity.CRITICAL

    def test_invalid_pattern(self):
        err = InvalidPatternError("(a", "missing )")
        assert err.message == "Invalid regex pattern '(a': missing )"
        assert err.reason == "missing )"
        assert err.context == {"pattern": "(a"}


class TestHandleFileError:
    def test_missing_file(self, tmp_path: Path):
        path = tmp_path / "nope.txt"
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        err = handle_file_error(path, "access", exc)
        assert isinstance(err, FileAccessError)
        assert err.message == f"Cannot access {path}: No such file or directory"

    def test_permission_denied(self):
        path = Path("secret.txt")
        err = handle_file_error(path, "read", BuiltinPermissionError(errno.EACCES, "Permission denied"))
        assert isinstance(err, PermissionError)
        assert err.message == "Cannot read secret.txt: permission denied"

    def test_decode_error(self):
        exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        err = handle_file_error(Path("blob.bin"), "read", exc)
        assert isinstance(err, EncodingError)
        assert err.message == "Cannot read blob.bin: not valid UTF-8 text"

    def test_other_os_error(self):
        err = handle_file_error(Path("f"), "read", OSError(errno.EIO, "Input/output error"))
        assert err.category == ErrorCategory.IO
        assert err.message == "Cannot read f: Input/output error"

    def test_search_error_passes_through(self):
        original = NotRegularFileError("d is a directory", Path("d"))
        assert handle_file_error(Path("d"), "access", original) is original

    def test_collector_and_logger(self):
        collector = ErrorCollector()
        logger = Mock()
        handle_file_error(Path("f"), "read", OSError(errno.EIO, "Input/output error"), collector, logger)
        assert collector.total_errors == 1
        logger.log_file_error.assert_called_once()
        assert logger.log_file_error.call_args.args[0] == "f"

    def test_real_logger_records_failed_operation(self, tmp_path: Path):
        log_path = tmp_path / "errors.jsonl"
        logger = GrepLogger(
            name="pygrep.test.file_error",
            level=LogLevel.DEBUG,
            format_type=LogFormat.JSON,
            log_file=log_path,
            enable_console=False,
            enable_file=True,
        )
        path = tmp_path / "gone.txt"
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        err = handle_file_error(path, "access", exc, ErrorCollector(), logger)
        for handler in logger.logger.handlers:
            handler.flush()
        entry = json.loads(log_path.read_text(encoding="utf-8").splitlines()[0])
        assert entry["operation"] == "file_error"
        assert entry["failed_operation"] == "access"
        assert entry["error"] == err.message


class TestErrorCollector:
    def test_add_and_classify_plain_exceptions(self):
        collector = ErrorCollector()
        collector.add_error(FileNotFoundError("x"))
        collector.add_error(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"))
        collector.add_error(ValueError("v"))
        assert collector.error_counts == {
            ErrorCategory.FILE_ACCESS: 1,
            ErrorCategory.ENCODING: 1,
            ErrorCategory.UNKNOWN: 1,
        }

    def test_search_error_keeps_its_classification(self):
        collector = ErrorCollector()
        collector.add_error(ConfigurationError("bad"))
        assert collector.error_counts == {ErrorCategory.CONFIGURATION: 1}
        assert collector.errors[0].severity == ErrorSeverity.CRITICAL
        assert collector.errors[0].suggestions == ["Check the command line options"]

    def test_max_errors_still_counts(self):
        collector = ErrorCollector(max_errors=2)
        for _ in range(5):
            collector.add_error(SearchError("e"))
        assert len(collector.errors) == 2
        assert collector.total_errors == 5

    def test_summary(self):
        collector = ErrorCollector()
        collector.add_error(FileAccessError("gone", Path("a")))
        summary = collector.get_summary()
        assert summary["total_errors"] == 1
        assert summary["by_category"] == {"file_access": 1}
        assert summary["by_severity"]["medium"] == 1
        assert summary["by_severity"]["critical"] == 0

    def test_clear(self):
        collector = ErrorCollector()
        collector.add_error(SearchError("e"))
        collector.clear()
        assert collector.total_errors == 0
        assert collector.errors == []


class TestErrorReport:
    def test_empty(self):
        assert create_error_report(ErrorCollector()) == "No errors occurred during the run."

    def test_report_lists_messages_and_suggestions(self):
        collector = ErrorCollector()
        collector.add_error(
            NotRegularFileError("d is a directory", Path("d"), suggestions=["Pass -r"])
        )
        report = create_error_report(collector)
        assert report.startswith("Error Report")
        assert "Total errors: 1" in report
        assert "  - d is a directory" in report
        assert "Suggestions: Pass -r" in report
