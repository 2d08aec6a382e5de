"""Date filters: formatDate, fromNow, addDays, isoDate, timestamp.

Accepted inputs:
    - ``datetime`` / ``date`` objects (naive values are taken as UTC)
    - ``"DD/MM/YYYY"`` strings, read as UTC midnight
    - anything else ``dateutil`` can read: ISO 8601 (``"2024-01-15T10:30:00Z"``),
      ``"January 15, 2024"``, ``"2024/01/15"``, RFC 2822 headers
    - numbers, as milliseconds since the Unix epoch

Everything is computed and formatted in UTC so output does not depend on
the host timezone. Unparseable input yields ``"Invalid Date"`` (or ``0``
for ``timestamp``).
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime, timedelta
from typing import Any

from dateutil import parser as date_parser

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import is_nan, js_truthy, to_js_string, to_number

INVALID_DATE = "Invalid Date"

_DMY_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII)
_FORMAT_TOKENS = (
    ("YYYY", lambda d: f"{d.year:04d}"),
    ("MM", lambda d: f"{d.month:02d}"),
    ("DD", lambda d: f"{d.day:02d}"),
    ("HH", lambda d: f"{d.hour:02d}"),
    ("mm", lambda d: f"{d.minute:02d}"),
    ("ss", lambda d: f"{d.second:02d}"),
)


def parse_date(value: Any) -> datetime | None:
    """Parse a template value into an aware UTC datetime, or None."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if is_nan(value) or math.isinf(value):
            return None
        try:
            return datetime(1970, 1, 1, tzinfo=UTC) + timedelta(milliseconds=value)
        except OverflowError:
            return None

    text = to_js_string(value).strip()
    match = _DMY_RE.fullmatch(text)
    try:
        if match:
            day, month, year = (int(part) for part in match.groups())
            return datetime(year, month, day, tzinfo=UTC)
        parsed = date_parser.parse(text)
        return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def to_iso_string(moment: datetime) -> str:
    """``2024-01-15T10:30:00.000Z``: millisecond precision, ``Z`` suffix."""
    moment = moment.astimezone(UTC)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )


def _format_date(value: Any, *args: Any) -> str:
    """Replace ``YYYY MM DD HH mm ss`` tokens in the pattern (default ``YYYY-MM-DD``)."""
    pattern = to_js_string(args[0]) if args and js_truthy(args[0]) else "YYYY-MM-DD"
    moment = parse_date(value)
    if moment is None:
        return INVALID_DATE
    result = pattern
    for token, render in _FORMAT_TOKENS:
        result = result.replace(token, render(moment))
    return result


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def _from_now(value: Any) -> str:
    moment = parse_date(value)
    if moment is None:
        return INVALID_DATE
    elapsed_ms = (datetime.now(UTC) - moment) // timedelta(milliseconds=1)
    seconds = math.floor(elapsed_ms / 1000)
    minutes = math.floor(seconds / 60)
    hours = math.floor(minutes / 60)
    days = math.floor(hours / 24)
    months = math.floor(days / 30)
    years = math.floor(days / 365)

    for count, unit in (
        (years, "year"),
        (months, "month"),
        (days, "day"),
        (hours, "hour"),
        (minutes, "minute"),
    ):
        if count > 0:
            return _plural(count, unit)
    return "just now"


def _add_days(value: Any, *args: Any) -> str:
    amount = to_number(args[0]) if args else 0
    days = 0 if is_nan(amount) or math.isinf(amount) else int(amount)
    moment = parse_date(value)
    if moment is None:
        return INVALID_DATE
    try:
        return to_iso_string(moment + timedelta(days=days))
    except OverflowError:
        return INVALID_DATE


def _iso_date(value: Any) -> str:
    moment = parse_date(value)
    return INVALID_DATE if moment is None else to_iso_string(moment)


def _timestamp(value: Any) -> int:
    moment = parse_date(value)
    if moment is None:
        return 0
    return (moment - datetime(1970, 1, 1, tzinfo=UTC)) // timedelta(milliseconds=1)


DATE_FILTERS: dict[str, FilterFunction] = {
    "formatDate": _format_date,
    "fromNow": _from_now,
    "addDays": _add_days,
    "isoDate": _iso_date,
    "timestamp": _timestamp,
}


def register_date_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(DATE_FILTERS)
