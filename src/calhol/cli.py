from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import sys
from datetime import date
from typing import List, Optional

from .core.errors import CalholError


def _parse_ymd(s: str) -> date:
    try:
        y, m, d = map(int, s.split("-"))
        return date(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}") from e


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _load_rules(path: str):
    from .core.ruleset import RuleSet
    from .core.types import rules_from_dicts

    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    # either a bare list of rules or {"name": ..., "rules": [...]}
    if isinstance(data, dict):
        return RuleSet(rules_from_dicts(data.get("rules", [])), name=data.get("name", path))
    return RuleSet(rules_from_dicts(data), name=path)


def _rules(args):
    import calhol

    rs = _load_rules(args.rules) if args.rules else calhol.get_ruleset(args.ruleset)
    if args.region:
        rs = rs.for_region(args.region)
    return rs


def _fmt_occ(occ) -> str:
    line = f"{occ.date.isoformat()}  {occ.rule_id:<28} {occ.name}"
    if occ.duration > 1:
        line += f"  (through {occ.end.isoformat()})"
    if occ.is_observed:
        line += f"  [observed; nominal {occ.calendar_date.isoformat()}]"
    return line


def _print_occ(occ, *, none_msg: str) -> int:
    if occ is None:
        print(none_msg)
        return 1
    print(_fmt_occ(occ))
    return 0


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--ruleset", default="us", help="Named rule set (see `calhol rulesets`).")
    common.add_argument("--rules", default=None, metavar="FILE.json", help="Load rules from a JSON file instead.")
    common.add_argument("--region", default=None, help="Keep only rules applying to this region code.")
    common.add_argument("--cutover", type=int, default=1583, help="First year of the Gregorian computus.")
    common.add_argument("--search-years", type=int, default=50, help="Bound for next/prev searches.")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    return common


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    common = _common_parser()
    p = argparse.ArgumentParser(prog="calhol", description="Holiday calendar resolution CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_year = sub.add_parser("year", parents=[common], help="All holidays of a Gregorian year")
    p_year.add_argument("year", type=int)

    p_check = sub.add_parser("check", parents=[common], help="Is DATE a holiday?")
    p_check.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")

    p_next = sub.add_parser("next", parents=[common], help="First holiday after DATE")
    p_next.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")

    p_prev = sub.add_parser("prev", parents=[common], help="Last holiday before DATE")
    p_prev.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")

    p_range = sub.add_parser("range", parents=[common], help="Holidays between START and END (inclusive)")
    p_range.add_argument("start", type=_parse_ymd)
    p_range.add_argument("end", type=_parse_ymd)

    p_easter = sub.add_parser("easter", parents=[common], help="Easter Sunday of a year")
    p_easter.add_argument("year", type=int)
    p_easter.add_argument("--orthodox", action="store_true")

    p_conv = sub.add_parser("convert", parents=[common], help="Lunar calendar date -> Gregorian")
    p_conv.add_argument("calendar", choices=["islamic", "chinese", "hebrew", "persian"])
    p_conv.add_argument("year", type=int)
    p_conv.add_argument("month", type=int)
    p_conv.add_argument("day", type=int)
    p_conv.add_argument("--leap-month", action="store_true", help="Chinese intercalary month.")

    sub.add_parser("rulesets", parents=[common], help="List named rule sets")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["year-table", "round-trip", "lunar-scatter"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "diag":
        tool_map = {
            "year-table": "calhol.diagnostics.year_table",
            "round-trip": "calhol.diagnostics.round_trip",
            "lunar-scatter": "calhol.diagnostics.lunar_scatter",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if rest:
        p.error(f"unrecognized arguments: {' '.join(rest)}")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    import calhol

    try:
        calhol.configure(gregorian_cutover=args.cutover, search_years=args.search_years)
    except ValueError as e:
        p.error(str(e))

    try:
        return _dispatch(args)
    except (CalholError, KeyError, ValueError, OSError) as e:
        msg = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"calhol: error: {msg}", file=sys.stderr)
        return 2


def _dispatch(args) -> int:
    import calhol

    if args.cmd == "rulesets":
        for name in calhol.list_rulesets():
            rs = calhol.get_ruleset(name)
            print(f"{name:<6} {len(rs.active_rules()):>3} active / {len(rs):>3} rules")
        return 0

    if args.cmd == "easter":
        d = calhol.easter(args.year, method="orthodox" if args.orthodox else "western")
        print(d.isoformat())
        return 0

    if args.cmd == "convert":
        d = calhol.to_gregorian(args.calendar, args.year, args.month, args.day, leap_month=args.leap_month)
        print(d.isoformat())
        return 0

    rules = _rules(args)

    if args.cmd == "year":
        for occ in calhol.occurrences_for_year(args.year, ruleset=rules):
            print(_fmt_occ(occ))
        return 0

    if args.cmd == "range":
        if args.end < args.start:
            raise SystemExit("END must be >= START")
        for occ in calhol.occurrences_in_range(args.start, args.end, ruleset=rules):
            print(_fmt_occ(occ))
        return 0

    if args.cmd == "check":
        return _print_occ(calhol.is_holiday(args.date, ruleset=rules), none_msg=f"{args.date.isoformat()}: not a holiday")

    if args.cmd == "next":
        return _print_occ(
            calhol.next_holiday(args.date, ruleset=rules),
            none_msg=f"No holiday within {args.search_years} years after {args.date.isoformat()}",
        )

    if args.cmd == "prev":
        return _print_occ(
            calhol.previous_holiday(args.date, ruleset=rules),
            none_msg=f"No holiday within {args.search_years} years before {args.date.isoformat()}",
        )

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
