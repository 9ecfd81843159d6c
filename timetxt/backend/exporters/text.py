"""Text rendering for parsed time logs."""

from __future__ import annotations

from ..forms import TimeLog
from ..utils import elapsed, format_elapsed, total_elapsed


def render_text(log: TimeLog, *, sort_dates: bool = False) -> str:
    """Render a `TimeLog` back into time.txt form.

    Each date is written as YYYY-MM-DD on its own line, followed by one
    `HH:MM HH:MM description` line per entry. Dates keep their stored order
    unless `sort_dates` is set.
    """
    lines: list[str] = []
    for day in log.dates(sort=sort_dates):
        lines.append(day.isoformat())
        lines.extend(str(e) for e in log.entries_for(day))
    return "".join(f"{line}\n" for line in lines)


def format_log(log: TimeLog, *, show_elapsed: bool = False, sort_dates: bool = False) -> str:
    """Render a log for display.

    Without `show_elapsed` this is `render_text`. With it, every entry line is
    prefixed by its elapsed HH:MM and each date block ends with a total line.
    """
    if not show_elapsed:
        return render_text(log, sort_dates=sort_dates)
    lines: list[str] = []
    for day in log.dates(sort=sort_dates):
        day_entries = log.entries_for(day)
        lines.append(day.isoformat())
        for e in day_entries:
            lines.append(f"{format_elapsed(elapsed(e))}  {e}")
        lines.append(f"total {format_elapsed(total_elapsed(day_entries))}")
    return "".join(f"{line}\n" for line in lines)
