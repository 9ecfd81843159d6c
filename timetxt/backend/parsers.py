"""Parser for the time.txt format.

A time.txt file is a list of date headers, each followed by the entries
logged on that day::

    1822-01-15
    // comments start with two slashes
    3:00 4:00 Sketched ideas for a new machine
    4:00 11:00 Created the first computer

Entry lines start with a start time and an end time (24-hour, one or two hour
digits, always two minute digits) separated by single spaces. The rest of the
line is the description.
"""

from __future__ import annotations

import logging
import re
from datetime import date as _date, datetime, time as _time

from .forms import DATE_FORMAT, TIME_FORMAT, Duration, TimeEntry, TimeLog

logger = logging.getLogger(__name__)

# Shortest line that can hold either a date or two times ("H:MM H:MM").
MIN_LINE_LENGTH = 9
# Width limits of the time prefix: "H:MM" up to "HH:MM HH:MM".
MIN_START_WIDTH = 4
MIN_PREFIX_WIDTH = 9
MAX_SCAN_INDEX = 11

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{1,2}:[0-9]{2}")


class TimeError(Exception):
    """Base class for time.txt parse errors.

    `line` and `text` are filled in by `parse_time` with the 1-based line
    number and the offending line.
    """

    def __init__(self, message: str, *, line: int | None = None, text: str | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.text = text

    def __str__(self) -> str:
        pieces = ["Parse error"]
        if self.line is not None:
            pieces.append(f" at line {self.line}")
        pieces.append(f": {self.message}")
        if self.text is not None:
            pieces.append(f": {self.text!r}")
        return "".join(pieces)


class DateParseError(TimeError):
    """A date string is not a valid YYYY-MM-DD calendar date."""


class TimeParseError(TimeError):
    """A time token is not a valid H:MM or HH:MM 24-hour time."""


class TimeNotFound(TimeError):
    """The start or end time is missing from an entry line."""


def parse_time(contents: str) -> TimeLog:
    """Parse time.txt contents into a `TimeLog`.

    - Lines starting with `//`, empty lines and lines under 9 characters are skipped.
    - A line that is exactly a YYYY-MM-DD date starts a new date block.
    - Every other line is an entry line; the first malformed one aborts the parse.
    - Entries appearing before any date header are dropped.

    Raises:
        TimeError: A subclass describing the first malformed line.
    """
    grouped: dict[_date, list[TimeEntry]] = {}
    current: _date | None = None
    for lineno, line in enumerate(_lines(contents), start=1):
        logger.debug("line %d: %r", lineno, line)
        if line.startswith("//") or not line:
            continue
        if len(line) < MIN_LINE_LENGTH:
            continue

        day = parse_date_line(line)
        if day is not None:
            current = day
            continue

        try:
            index, duration = find_duration(line)
        except TimeError as err:
            err.line = lineno
            err.text = line
            raise

        if current is None:
            logger.debug("line %d: no date header yet, dropping entry", lineno)
            continue
        grouped.setdefault(current, []).append(
            TimeEntry(
                date=current,
                start=duration.start,
                end=duration.end,
                description=line[index:].strip(),
            )
        )
    return TimeLog(grouped)


def find_duration(line: str) -> tuple[int, Duration]:
    """Find the start and end times at the head of an entry line.

    Returns the index of the space that ends the end time, and the times.
    The description is whatever follows that index.

    Raises:
        TimeNotFound: A space comes too early or fewer than two spaces exist.
        TimeParseError: A time token is not a valid time.
    """
    spaces = 0
    start_space = 0
    end_space = 0
    start: _time | None = None
    end: _time | None = None
    for i, c in enumerate(line):
        if c != " ":
            continue
        spaces += 1

        if spaces == 1:
            if i < MIN_START_WIDTH:
                raise TimeNotFound("Start time not found")
            start_space = i
            start = parse_clock(line[:start_space])

        if spaces == 2:
            if i < MIN_PREFIX_WIDTH:
                raise TimeNotFound("End time not found")
            end_space = i
            end = parse_clock(line[start_space + 1 : end_space])

        if spaces > 2 or i > MAX_SCAN_INDEX:
            break

    if spaces < 2 or start is None or end is None:
        raise TimeNotFound("Neither start or end time found")
    return end_space, Duration(start=start, end=end)


def parse_clock(token: str) -> _time:
    """Parse a H:MM or HH:MM 24-hour time."""
    if not _TIME_RE.fullmatch(token):
        raise TimeParseError(f"Invalid time {token!r}, expected HH:MM")
    try:
        return datetime.strptime(token, TIME_FORMAT).time()
    except ValueError as exc:
        raise TimeParseError(f"Invalid time {token!r}: {exc}") from exc


def parse_date_line(line: str, *, strict: bool = False) -> _date | None:
    """Return the date if `line` is exactly a YYYY-MM-DD calendar date.

    Returns None for anything else, unless `strict` is set, in which case
    DateParseError is raised.
    """
    if _DATE_RE.fullmatch(line):
        try:
            return datetime.strptime(line, DATE_FORMAT).date()
        except ValueError as exc:
            if strict:
                raise DateParseError(f"Invalid date {line!r}: {exc}") from exc
            return None
    if strict:
        raise DateParseError(f"Invalid date {line!r}, expected YYYY-MM-DD")
    return None


def _lines(contents: str) -> list[str]:
    # Lines end at "\n" only; one trailing "\r" is dropped.
    lines = contents.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]
