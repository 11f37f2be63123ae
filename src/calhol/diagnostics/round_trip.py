from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List, Optional

from calhol.calendars import chinese
from calhol.core.time import from_jdn, to_jdn
from calhol.engines.lunar import CONVERTERS


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(rng: random.Random, start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=rng.randint(0, span))


def parse_calendars(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]


def _back(calendar: str, d0: date) -> date:
    jdn = to_jdn(d0)
    if calendar == "chinese":
        y, m, d, leap = chinese.from_jdn_full(jdn)
        return from_jdn(chinese.to_jdn(y, m, d, leap))
    conv = CONVERTERS[calendar]
    y, m, d = conv.from_jdn(jdn)
    return from_jdn(conv.to_jdn(y, m, d))


def roundtrip_test(
    calendar: str,
    N: int,
    start: date,
    end: date,
    seed: int,
    *,
    max_failures: int,
) -> int:
    rng = random.Random(seed)
    failures = 0

    for _ in range(N):
        d0 = random_date(rng, start, end)
        back = _back(calendar, d0)
        if back != d0:
            failures += 1
            print("\nFAIL")
            print("calendar:", calendar)
            print("d0:", d0)
            print("native:", CONVERTERS[calendar].from_jdn(to_jdn(d0)))
            print("back:", back)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian -> calendar -> gregorian.")
    p.add_argument("--calendars", type=str, default="islamic,chinese,hebrew,persian",
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--start", type=str, default="1901-01-01", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2100-12-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    start = parse_date(args.start)
    end = parse_date(args.end)
    if end < start:
        raise SystemExit("--end must be >= --start")

    total = 0
    for cal in parse_calendars(args.calendars):
        if cal not in CONVERTERS:
            raise SystemExit(f"Unknown calendar '{cal}'. Available: {sorted(CONVERTERS)}")
        f = roundtrip_test(cal, args.N, start, end, args.seed, max_failures=args.max_failures)
        print(f"{cal}: {args.N - f if f < args.max_failures else '?'} ok, {f} failures")
        total += f

    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
