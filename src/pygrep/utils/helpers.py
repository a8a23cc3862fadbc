from __future__ import annotations

from collections.abc import Callable, Iterable

from ..core.types import MatchSpan


def highlight_spans(line: str, spans: Iterable[MatchSpan], paint: Callable[[str], str]) -> str:
    """Apply ``paint`` to each span of ``line``, leaving the rest untouched.

    Spans are clamped to the line, sorted, and overlaps are cut at the end of
    the previous span. Empty spans are ignored.
    """
    spans = sorted(spans, key=lambda x: x[0])
    if not spans:
        return line
    out: list[str] = []
    last = 0
    for a, b in spans:
        a = max(0, min(len(line), a))
        b = max(0, min(len(line), b))
        if a < last:
            a = last
        if b <= a:
            continue
        out.append(line[last:a])
        out.append(paint(line[a:b]))
        last = b
    out.append(line[last:])
    return "".join(out)


def trim_line(text: str) -> str:
    """Rendered lines drop leading and trailing whitespace."""
    return text.strip()
