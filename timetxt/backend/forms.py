"""Records for parsed time.txt entries.

A parsed file is a `TimeLog`: dates mapped to the entries logged under them,
in the order they were written. Entries convert to flat rows for exporters.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date as _date, time as _time
from types import MappingProxyType

from typing_extensions import NotRequired, TypedDict

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


class EntryRow(TypedDict):
    """Flat representation of a `TimeEntry`, used by exporters.

    Fields:
        date: Date in YYYY-MM-DD.
        start: Start time in HH:MM.
        end: End time in HH:MM.
        description: Free text.
        elapsed: Optional elapsed time in HH:MM.
    """

    date: str
    start: str
    end: str
    description: str
    elapsed: NotRequired[str]


@dataclass(frozen=True)
class Duration:
    """Start/end pair found at the head of an entry line."""

    start: _time
    end: _time


@dataclass(frozen=True)
class TimeEntry:
    """A single logged activity."""

    date: _date
    start: _time
    end: _time
    description: str

    def __str__(self) -> str:
        return (
            f"{self.start.strftime(TIME_FORMAT)} "
            f"{self.end.strftime(TIME_FORMAT)} {self.description}"
        )

    def to_dict(self) -> EntryRow:
        return {
            "date": self.date.isoformat(),
            "start": self.start.strftime(TIME_FORMAT),
            "end": self.end.strftime(TIME_FORMAT),
            "description": self.description,
        }


class TimeLog:
    """Entries grouped by date, read-only once built.

    Dates keep the order in which they first appeared. Entries under a date
    keep source order.
    """

    def __init__(self, entries: Mapping[_date, Iterable[TimeEntry]] | None = None) -> None:
        self._entries: dict[_date, tuple[TimeEntry, ...]] = {
            day: tuple(day_entries) for day, day_entries in (entries or {}).items()
        }

    @property
    def entries(self) -> Mapping[_date, tuple[TimeEntry, ...]]:
        return MappingProxyType(self._entries)

    def dates(self, *, sort: bool = False) -> list[_date]:
        return sorted(self._entries) if sort else list(self._entries)

    def entries_for(self, day: _date) -> tuple[TimeEntry, ...]:
        return self._entries.get(day, ())

    def __iter__(self) -> Iterator[TimeEntry]:
        for day_entries in self._entries.values():
            yield from day_entries

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeLog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"TimeLog({self._entries!r})"

    def to_text(self, *, sort_dates: bool = False) -> str:
        # Imported lazily: the exporter depends on this module.
        from .exporters.text import render_text

        return render_text(self, sort_dates=sort_dates)

    def __str__(self) -> str:
        return self.to_text()


def validate(entry: TimeEntry) -> list[str]:
    """Return a list of human-readable issues if validation fails."""
    issues: list[str] = []
    if not entry.description.strip():
        issues.append("Description is empty.")
    if entry.end < entry.start:
        issues.append(
            f"End time {entry.end.strftime(TIME_FORMAT)} is before "
            f"start time {entry.start.strftime(TIME_FORMAT)}."
        )
    return issues
