"""
Calendar-day helpers.

Task dates are plain ``YYYY-MM-DD`` strings. They are split into their
components and turned into ``datetime.date`` values directly, never through a
timezone-aware parser, so a date never drifts by a day with the local offset.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None: return None
    if isinstance(value, datetime): return value.date()
    return value


def try_parse_local_date(text) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; ``None`` when the text is not a usable date."""
    if not text or not isinstance(text, str):
        return None
    parts = text.strip().split('-')
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        return None
    # out-of-range month/day roll over into the following month/year
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def parse_local_date(text, today: Optional[date] = None) -> date:
    """
    Parse ``YYYY-MM-DD`` into a local calendar date.

    Malformed input falls back to "now" (or ``today`` when given) instead of
    raising, so a broken record still renders somewhere on the timeline.
    """
    parsed = try_parse_local_date(text)
    if parsed is None:
        return today if today is not None else datetime.now().date()
    return parsed


def days_diff(a: Optional[DateLike], b: Optional[DateLike]) -> int:
    """Whole days from ``a`` to ``b``; positive when ``b`` is later."""
    a, b = _as_date(a), _as_date(b)
    if a is None or b is None:
        return 0
    return (b - a).days


def add_days(value: Optional[DateLike], days: int):
    """Offset by ``days``; results past the calendar range clamp to its first or last day."""
    if value is None: return None
    try:
        return value + timedelta(days=days)
    except OverflowError:
        edge = date.max if days > 0 else date.min
        return datetime.combine(edge, value.timetz()) if isinstance(value, datetime) else edge


def format_date(value: Optional[DateLike]) -> str:
    value = _as_date(value)
    if value is None:
        return ""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
