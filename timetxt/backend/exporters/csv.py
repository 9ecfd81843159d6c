"""CSV export utilities for time entries."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence

from ..forms import EntryRow, TimeLog
from ..utils import elapsed, format_elapsed

DEFAULT_FIELDS = ("date", "start", "end", "description")


def render_csv(rows: Iterable[EntryRow | dict[str, object]], fieldnames: Sequence[str]) -> str:
    """Render an iterable of dict rows to a CSV string with given headers.

    - Unknown keys are ignored to keep output stable.
    - Values are stringified via the csv module.
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(fieldnames), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row or {})
    return buf.getvalue()


def log_rows(log: TimeLog, *, sort_dates: bool = False, with_elapsed: bool = False) -> list[EntryRow]:
    """Flatten a log into rows, one per entry."""
    rows: list[EntryRow] = []
    for day in log.dates(sort=sort_dates):
        for entry in log.entries_for(day):
            row = entry.to_dict()
            if with_elapsed:
                row["elapsed"] = format_elapsed(elapsed(entry))
            rows.append(row)
    return rows


def render_log_csv(log: TimeLog, *, sort_dates: bool = False, with_elapsed: bool = False) -> str:
    fields = list(DEFAULT_FIELDS) + (["elapsed"] if with_elapsed else [])
    return render_csv(log_rows(log, sort_dates=sort_dates, with_elapsed=with_elapsed), fields)
