from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from .forms import TimeEntry


def elapsed(entry: TimeEntry) -> timedelta:
    """Return `end - start` for an entry on its own date.

    No wrap-around is applied: an entry ending before it starts yields a
    negative timedelta.
    """
    return datetime.combine(entry.date, entry.end) - datetime.combine(entry.date, entry.start)


def total_elapsed(entries: Iterable[TimeEntry]) -> timedelta:
    """Sum the elapsed time of the given entries."""
    return sum((elapsed(e) for e in entries), timedelta())


def format_elapsed(delta: timedelta) -> str:
    """Format a timedelta as HH:MM (hours may exceed 23; negative gets a '-')."""
    seconds = int(delta.total_seconds())
    sign = "-" if seconds < 0 else ""
    hours, mins = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours:02d}:{mins:02d}"
