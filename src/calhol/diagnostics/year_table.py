from __future__ import annotations

import argparse
from datetime import date
from typing import Dict, List, Optional

import calhol


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def build_table(ruleset: str, from_year: int, to_year: int) -> Dict[str, Dict[int, List[date]]]:
    """rule id -> year -> effective dates (observed dates included)."""
    rs = calhol.get_ruleset(ruleset)
    table: Dict[str, Dict[int, List[date]]] = {rid: {} for rid in rs.ids() if rs.get(rid).active}
    for Y in range(from_year, to_year + 1):
        for occ in calhol.occurrences_for_year(Y, ruleset=rs):
            table[occ.rule_id].setdefault(Y, []).append(occ.date)
    return table


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print the dates of every rule of a rule set across a span of years.")
    p.add_argument("--ruleset", default="us")
    p.add_argument("--from-year", type=int, default=2020)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table cells (default: mmdd).",
    )
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    table = build_table(args.ruleset, Y0, Y1)
    idw = max([len(rid) for rid in table] + [4])
    years = list(range(Y0, Y1 + 1))
    cellw = 5 if args.dates == "mmdd" else 10

    header = "Rule".ljust(idw) + "  " + "  ".join(str(Y).ljust(cellw) for Y in years)
    print(header)
    print("-" * len(header))
    for rid, per_year in table.items():
        cells = []
        for Y in years:
            ds = per_year.get(Y, [])
            # a second date in the same year (Hijri drift, bridge days) is marked with '+'
            cell = fmt(ds[0]) + ("+" if len(ds) > 1 else "") if ds else "-"
            cells.append(cell.ljust(cellw))
        print(rid.ljust(idw) + "  " + "  ".join(cells))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
