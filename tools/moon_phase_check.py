from __future__ import annotations

"""
Moon phase check script.

Uses:
- moonphase.features.result.build_result
- moonphase.features.config.KNOWN_DATES (via build_result)
"""

import argparse

from moonphase.core.dates import DateParseError
from moonphase.core.timeutil import format_ymd
from moonphase.features.result import CallerContext, build_result

from tools.common import add_common_args, resolve_date_range, iter_dates, dump_json, fail


def main() -> None:
    parser = argparse.ArgumentParser(description="Moon phase (approximate) check")
    add_common_args(parser)
    args = parser.parse_args()

    try:
        start, end = resolve_date_range(args)
    except DateParseError as e:
        fail(e)
        return
    if start is None or end is None:
        parser.error("--date or --start/--end required")
    if end < start:
        parser.error("--end must be >= --start")

    ctx = CallerContext(plan=args.plan.strip() or None)

    rows = []
    for cur in iter_dates(start, end):
        r = build_result(format_ymd(cur), ctx)

        if args.json:
            rows.append(r.to_dict())
        elif args.verbose:
            print(
                f"{r.date}  {r.emoji} {r.phase:<16} idx={r.phase_index} "
                f"illum={r.illumination:.3f} source={r.source}"
            )
        else:
            print(f"{r.date}  {r.emoji} {r.phase}")

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
