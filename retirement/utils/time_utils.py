"""
Date / time utility helpers.

Timestamps are accepted as ``"YYYY-MM-DD HH:mm"`` or ``"YYYY-MM-DD HH:mm:ss"``
and serialised as ``"YYYY-MM-DD HH:mm:ss"``.
"""

from __future__ import annotations

import calendar
import re
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2})(?::(\d{2}))?$"
)


class MalformedTimestamp(ValueError):
    """Raised when a date string matches none of the accepted patterns."""

    def __init__(self, raw: object) -> None:
        super().__init__(
            f"Invalid timestamp {raw!r}. Expected format: YYYY-MM-DD HH:mm[:ss]"
        )
        self.raw = raw


def parse_timestamp(raw: str) -> datetime:
    """
    Parse *raw* into a :class:`~datetime.datetime`.

    Seconds are optional and default to 0.  A day-of-month past the end of
    its month (``"2023-11-31"``) is clamped to the month's last day.

    Raises
    ------
    MalformedTimestamp
        If *raw* is not a string in one of the accepted formats.
    """
    if not isinstance(raw, str):
        raise MalformedTimestamp(raw)
    match = _TIMESTAMP_RE.match(raw.strip())
    if match is None:
        raise MalformedTimestamp(raw)

    year, month, day, hour, minute, second = (
        int(g) if g is not None else 0 for g in match.groups()
    )
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise MalformedTimestamp(raw)
    day = min(day, calendar.monthrange(year, month)[1])

    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError as exc:
        raise MalformedTimestamp(raw) from exc


def format_timestamp(dt: datetime) -> str:
    return dt.strftime(TIMESTAMP_FORMAT)


def truncate_seconds(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)


def is_valid_timestamp(raw: str) -> bool:
    try:
        parse_timestamp(raw)
        return True
    except MalformedTimestamp:
        return False


def is_within_range(dt: datetime, start: datetime, end: datetime) -> bool:
    return start <= dt <= end
