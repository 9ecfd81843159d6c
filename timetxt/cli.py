from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .backend.config import TimeTxtConfig, load_from_env
from .backend.exporters.csv import render_log_csv
from .backend.exporters.text import format_log
from .backend.forms import validate
from .backend.io.source import SourceError, read_source
from .backend.parsers import TimeError, parse_time

logger = logging.getLogger("timetxt")

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_PARSE_ERROR = 2


def build_parser(config: TimeTxtConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timetxt",
        description="Parse a time.txt file and print its entries grouped by date.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=config.file,
        help="Path to the time.txt file (default: TIMETXT_FILE).",
    )
    parser.add_argument(
        "--sort",
        action=argparse.BooleanOptionalAction,
        default=config.sort_dates,
        help="Print dates in chronological order (--no-sort keeps file order).",
    )
    parser.add_argument(
        "--elapsed",
        action=argparse.BooleanOptionalAction,
        default=config.show_elapsed,
        help="Prefix each entry with its elapsed HH:MM and add per-date totals.",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Print entries as CSV instead of time.txt text.",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging verbosity (default: TIMETXT_LOG_LEVEL or WARNING).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # .env values never override variables already set in the environment.
    load_dotenv(os.path.join(os.getcwd(), ".env"))
    config = load_from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file:
        parser.error("Must provide a filename (argument or TIMETXT_FILE)")

    try:
        contents = read_source(args.file)
    except SourceError as exc:
        print(f"timetxt: {exc}", file=sys.stderr)
        return EXIT_SOURCE_ERROR

    try:
        log = parse_time(contents)
    except TimeError as exc:
        print(f"timetxt: {args.file}: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    logger.info("parsed %d entries over %d dates from %s", len(log), len(log.dates()), args.file)
    for entry in log:
        for issue in validate(entry):
            logger.warning("%s %s: %s", entry.date.isoformat(), entry, issue)

    if args.csv:
        output = render_log_csv(log, sort_dates=args.sort, with_elapsed=args.elapsed)
    else:
        output = format_log(log, show_elapsed=args.elapsed, sort_dates=args.sort)
    sys.stdout.write(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
