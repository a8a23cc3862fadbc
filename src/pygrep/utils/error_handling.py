"""
Error handling and reporting for pygrep.

Errors met while resolving and scanning sources are local to one source: they
are classified, reported as a diagnostic and collected here, and the run moves
on to the next source. Only usage errors (bad pattern, bad options) and
failures of the output sink itself stop an invocation.

Error Categories:
    - FILE_ACCESS: Missing files, directories given without recursion
    - PERMISSION: Permission denied while reading metadata or content
    - ENCODING: Content that is not valid UTF-8 text
    - CONFIGURATION: Invalid options
    - VALIDATION: Invalid patterns
    - IO: Any other read failure

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ErrorCollector: Batch error collection and analysis
    SearchError: Base exception class for pygrep errors

Functions:
    handle_file_error: Classify, collect and log a per-source failure
    create_error_report: Generate a human-readable error report

Example:
    >>> from pathlib import Path
    >>> from pygrep.utils.error_handling import ErrorCollector, handle_file_error
    >>>
    >>> collector = ErrorCollector()
    >>> try:
    ...     Path("missing.txt").read_text()
    ... except OSError as e:
    ...     error = handle_file_error(Path("missing.txt"), "read", e, collector)
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

# Import built-in exceptions before defining custom ones
import builtins
import sys
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

BuiltinPermissionError = builtins.PermissionError


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ENCODING = "encoding"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    IO = "io"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for pygrep errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class FileAccessError(SearchError):
    """Error accessing files."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            context=context,
        )


class NotRegularFileError(FileAccessError):
    """A requested path that cannot be scanned as a file (directory, FIFO, device)."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, file_path, context=context)
        self.severity = ErrorSeverity.LOW
        self.suggestions = suggestions or []


class PermissionError(SearchError):
    """Permission-related errors."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            file_path=file_path,
            suggestions=[
                "Check file permissions",
                "Run with appropriate user privileges",
            ],
            context=context,
        )


class EncodingError(SearchError):
    """Content that cannot be decoded as text."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        encoding: str = "utf-8",
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["encoding"] = encoding

        super().__init__(
            message,
            category=ErrorCategory.ENCODING,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            suggestions=[
                f"Only {encoding} text is searched",
                "Check if file is binary",
            ],
            context=merged_context,
        )


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            suggestions=["Check the command line options"],
            context=context,
        )


class InvalidPatternError(SearchError):
    """The search pattern failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid regex pattern '{pattern}': {reason}",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.CRITICAL,
            suggestions=["Escape regex metacharacters such as ( [ { * + ? or \\"],
            context={"pattern": pattern},
        )
        self.pattern: str = pattern
        self.reason: str = reason


class ErrorCollector:
    """Collects and manages errors during a grep run."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: Path | None = None,
        context: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions or suggestions or []
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = suggestions or []
            error_context = context or {}

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
            return ErrorCategory.FILE_ACCESS
        if isinstance(exception, BuiltinPermissionError):
            return ErrorCategory.PERMISSION
        if isinstance(exception, UnicodeError):
            return ErrorCategory.ENCODING
        if isinstance(exception, OSError):
            return ErrorCategory.IO
        return ErrorCategory.UNKNOWN

    @property
    def total_errors(self) -> int:
        """Number of errors seen, including ones past ``max_errors``."""
        return sum(self.error_counts.values())

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": self.total_errors,
            "by_category": {category.value: n for category, n in self.error_counts.items()},
            "by_severity": {
                severity.value: sum(1 for error in self.errors if error.severity == severity)
                for severity in ErrorSeverity
            },
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self.error_counts.clear()


def handle_file_error(
    file_path: str | Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> SearchError:
    """
    Handle file-related errors with appropriate classification and logging.

    Args:
        file_path: The file that caused the error, as it should be displayed
        operation: Operation being performed (e.g., "access", "read")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional logger to log the error

    Returns:
        The classified SearchError, whose message is suitable as a diagnostic.
    """
    path = Path(file_path)
    error: SearchError
    if isinstance(exception, SearchError):
        error = exception
    elif isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        error = FileAccessError(f"Cannot {operation} {file_path}: {_reason(exception)}", path)
    elif isinstance(exception, BuiltinPermissionError):
        error = PermissionError(f"Cannot {operation} {file_path}: permission denied", path)
    elif isinstance(exception, UnicodeError):
        error = EncodingError(f"Cannot {operation} {file_path}: not valid UTF-8 text", path)
    elif isinstance(exception, OSError):
        error = SearchError(
            f"Cannot {operation} {file_path}: {_reason(exception)}",
            category=ErrorCategory.IO,
            file_path=path,
        )
    else:
        error = SearchError(
            f"Unexpected error during {operation} of {file_path}: {exception}",
            file_path=path,
        )

    if error_collector:
        error_collector.add_error(error)

    if logger:
        logger.log_file_error(str(file_path), error.message, failed_operation=operation)

    return error


def _reason(exception: OSError) -> str:
    return exception.strerror or str(exception)


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the run."

    summary = error_collector.get_summary()

    report = ["Error Report", "=" * 50, ""]

    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by severity:")
    for severity, count in summary["by_severity"].items():
        if count:
            report.append(f"  {severity}: {count}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Errors:")
    for error in error_collector.errors:
        report.append(f"  - {error.message}")
        if error.suggestions:
            report.append(f"    Suggestions: {', '.join(error.suggestions)}")

    return "\n".join(report)
