"""Text source for time.txt files.

Reading is kept apart from parsing so I/O failures surface as `SourceError`
rather than as parse errors.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A time.txt file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path!r}: {reason}")
        self.path = path
        self.reason = reason


def read_source(path: str | os.PathLike[str]) -> str:
    """Read a UTF-8 time.txt file into a string.

    Raises:
        SourceError: The file is missing, unreadable or not valid UTF-8.
    """
    name = os.fspath(path)
    logger.info("reading %s", name)
    try:
        with open(name, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise SourceError(name, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceError(name, exc.strerror or str(exc)) from exc
