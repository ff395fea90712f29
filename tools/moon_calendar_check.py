from __future__ import annotations

"""
Moon calendar check script: one line per day of a YYYY-MM month.
"""

import argparse

from moonphase.core.dates import DateParseError, parse_month_param
from moonphase.features.calendar import build_month
from moonphase.features.result import CallerContext

from tools.common import dump_json, fail


def main() -> None:
    parser = argparse.ArgumentParser(description="Moon calendar (approximate) check")
    parser.add_argument("--month", help="YYYY-MM (default: current UTC month)")
    parser.add_argument("--plan", default="")
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args()

    try:
        ym = parse_month_param(args.month)
    except DateParseError as e:
        fail(e)
        return

    cal = build_month(ym, CallerContext(plan=args.plan.strip() or None))

    if args.json:
        dump_json(cal.to_dict())
        return

    print(f"{cal.month}  days={cal.days_in_month}")
    for r in cal.days:
        mark = "*" if r.source == "dummy" else " "
        print(f"{r.date} {mark} {r.emoji} {r.phase:<16} {r.illumination:.3f}")


if __name__ == "__main__":
    main()
