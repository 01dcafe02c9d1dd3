"""
System performance snapshot utilities.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone

import psutil

UPTIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_process_uptime_seconds() -> float:
    """Seconds elapsed since the current process was started."""
    return max(time.time() - psutil.Process().create_time(), 0.0)


def format_uptime(seconds: float) -> str:
    """
    Render an uptime as an epoch-based timestamp with milliseconds.

    >>> format_uptime(3723.5)
    '1970-01-01 01:02:03.500'
    """
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{moment.strftime(UPTIME_FORMAT)}.{moment.microsecond // 1000:03d}"


def get_process_memory_mb() -> float:
    """
    Return the RSS (Resident Set Size) of the current process in megabytes.
    Uses :mod:`psutil` for cross-platform accuracy.
    """
    rss_bytes: int = psutil.Process().memory_info().rss
    return rss_bytes / (1024 * 1024)


def get_active_thread_count() -> int:
    """Return the number of currently active Python threads."""
    return threading.active_count()


def collect_performance_snapshot() -> dict:
    """
    Build a performance metrics dictionary.

    Returns
    -------
    dict
        ``{"time": "...", "memory": "...", "threads": int}``
    """
    return {
        "time": format_uptime(get_process_uptime_seconds()),
        "memory": f"{get_process_memory_mb():.2f} MB",
        "threads": get_active_thread_count(),
    }
