from __future__ import annotations

import argparse
from datetime import date

import pytest

from moonphase.core.dates import DateParseError
from tools.common import add_common_args, iter_dates, parse_date, resolve_date_range


def _args(*argv: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    add_common_args(parser)
    return parser.parse_args(list(argv))


def test_resolve_single_date():
    assert resolve_date_range(_args("--date", "2024-02-29")) == (date(2024, 2, 29), date(2024, 2, 29))


def test_resolve_range_and_iterate():
    start, end = resolve_date_range(_args("--start", "2024-02-27", "--end", "2024-03-01"))
    assert [d.isoformat() for d in iter_dates(start, end)] == [
        "2024-02-27",
        "2024-02-28",
        "2024-02-29",
        "2024-03-01",
    ]


def test_resolve_nothing():
    assert resolve_date_range(_args()) == (None, None)


def test_parse_date_uses_api_rules():
    with pytest.raises(DateParseError):
        parse_date("2023-02-30")
    with pytest.raises(DateParseError):
        parse_date("2023-2-3")
