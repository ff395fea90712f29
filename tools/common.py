from __future__ import annotations

import argparse
import json
import sys
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

from moonphase.core.dates import DateParseError, parse_date_param


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="YYYY-MM-DD")
    parser.add_argument("--start", help="YYYY-MM-DD")
    parser.add_argument("--end", help="YYYY-MM-DD")
    parser.add_argument("--plan", default="", help="plan metadata to echo as planHint")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def parse_date(s: str) -> date:
    """Strict YYYY-MM-DD (same rules as the HTTP API)."""
    return parse_date_param(s).date()


def iter_dates(start: date, end: date) -> Iterable[date]:
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def resolve_date_range(args: argparse.Namespace) -> Tuple[Optional[date], Optional[date]]:
    if args.start and args.end:
        return parse_date(args.start), parse_date(args.end)
    if args.date:
        d = parse_date(args.date)
        return d, d
    return None, None


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def fail(err: DateParseError) -> None:
    print(f"ERROR: {err.message} ({err.kind.value})", file=sys.stderr)
    sys.exit(2)
