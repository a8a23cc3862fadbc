"""
Source resolution, line scanning and pattern matching.

This module contains the parts of a run that read input:
- The matcher capability and its regex implementation
- Expansion of requested paths into scannable files
- The line-by-line scan loop
"""

from .matchers import LineMatcher, RegexMatcher, compile_matcher
from .resolver import iter_resolved_paths, resolve_sources
from .scanner import is_line_match, iter_line_matches, scan_file, scan_stdin, scan_stream

__all__ = [
    # Pattern matching
    "LineMatcher",
    "RegexMatcher",
    "compile_matcher",
    # Source resolution
    "iter_resolved_paths",
    "resolve_sources",
    # Scanning
    "is_line_match",
    "iter_line_matches",
    "scan_file",
    "scan_stdin",
    "scan_stream",
]
