#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

import calhol
from calhol.core.types import HolidayRule, LunarRule


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calhol[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calhol[diagnostics]"') from e


def day_of_year(d: date) -> int:
    return (d - date(d.year, 1, 1)).days + 1


@dataclass(frozen=True)
class Style:
    label: str
    ruleset: str
    rule_id: str
    color: str
    marker: str
    size: float = 14.0


DEFAULT_STYLES: Tuple[Style, ...] = (
    Style("Spring Festival", "cn", "spring-festival", "tab:red", "o"),
    Style("Passover", "il", "pesach", "tab:blue", "s"),
    Style("Nowruz", "ir", "nowruz", "tab:green", "^"),
    Style("Ramadan Feast", "tr", "ramazan-bayrami", "0.35", "x"),
)


def build_series(np, ruleset: str, rule_id: str, start_year: int, end_year: int):
    """Years and day-of-year of every date the rule yields; a year may contribute 0, 1 or 2 points."""
    rs = calhol.get_ruleset(ruleset)
    rule: HolidayRule = rs.get(rule_id)
    if not isinstance(rule.payload, LunarRule):
        raise ValueError(f"Rule '{rule_id}' is not a lunar rule")

    engine = calhol.get_engine()
    xs: List[int] = []
    ys: List[int] = []
    for Y in range(start_year, end_year + 1):
        for d in engine.raw_dates(rs, rule_id, Y):
            xs.append(Y)
            ys.append(day_of_year(d))
    return np.asarray(xs, dtype=int), np.asarray(ys, dtype=float)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of the day-of-year lunar holidays land on.")
    p.add_argument("--start-year", type=int, default=1950)
    p.add_argument("--end-year", type=int, default=2050)
    p.add_argument("--outbase", default="lunar_scatter", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    np = _need_numpy()
    plt = _need_matplotlib()

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.set_xlabel("Gregorian year")
    ax.set_ylabel("Day-of-year (Jan 1 = 1)")
    ax.set_title("Lunar holidays in the Gregorian year")

    counts: Dict[str, int] = {}
    for st in DEFAULT_STYLES:
        x, y = build_series(np, st.ruleset, st.rule_id, args.start_year, args.end_year)
        counts[st.label] = len(x)
        ax.scatter(x, y, s=st.size, marker=st.marker, c=st.color, alpha=0.5, label=st.label)

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    fig.savefig(args.outbase + ".png", dpi=200)
    plt.close(fig)
    for label, n in counts.items():
        print(f"{label}: {n} points")
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
