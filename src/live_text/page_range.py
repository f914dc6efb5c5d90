from __future__ import annotations


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def resolve_page_range(*, start: int | None, end: int | None, page_count: int) -> range:
    """
    1-indexed pages to process for optional inclusive `start`/`end` bounds.

    Out-of-range bounds clamp instead of failing, so the result is always a
    (possibly empty) ascending subset of 1..page_count.
    """

    n = max(0, page_count)
    first = _clamp(1 if start is None else start, 1, n + 1)
    stop = n + 1 if end is None else _clamp(end + 1, first, n + 1)
    return range(first, stop)
