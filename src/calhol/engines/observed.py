"""
calhol.engines.observed
-----------------------
Turns a nominal holiday date into the date(s) it is observed on.

substitute / nearest-weekday
    A date on a weekend day moves to a non-weekend day in the configured
    direction; the nominal date is then no longer the observed one.
bridge
    The nominal date stays and one extra non-weekend day is added:
      weekend mode: the holiday is on a weekend day, add the neighbouring
                    non-weekend day in `direction`;
      gap mode:     the holiday is on a non-weekend day and exactly one
                    non-weekend day separates it from the weekend, add
                    that day (`direction` limits which side is checked).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, List, Optional, Tuple

from ..core.time import shift, weekday
from ..core.types import ObservedRule


@dataclass(frozen=True)
class Observance:
    date: date
    is_observed: bool
    bridge_dates: Tuple[date, ...] = ()


def _is_weekend(d: date, weekend: FrozenSet[int]) -> bool:
    return weekday(d) in weekend


def _walk(d: Optional[date], weekend: FrozenSet[int], step: int) -> Optional[date]:
    while d is not None and _is_weekend(d, weekend):
        d = shift(d, step)
    return d


def move_off_weekend(d: date, weekend: FrozenSet[int], direction: str) -> Optional[date]:
    """
    First non-weekend day from `d` in `direction`; `d` itself if it is not a weekend day.

    None when the walk runs past date.min or date.max. In nearest mode a
    side that runs out loses to the other one.
    """
    if direction == "forward":
        return _walk(d, weekend, 1)
    if direction == "backward":
        return _walk(d, weekend, -1)
    fwd = _walk(d, weekend, 1)
    back = _walk(d, weekend, -1)
    if fwd is None or back is None:
        return back if fwd is None else fwd
    # ties go backward
    return fwd if (fwd - d) < (d - back) else back


def _gap_neighbour(raw: date, weekend: FrozenSet[int], step: int) -> Optional[date]:
    near = shift(raw, step)
    far = shift(raw, 2 * step)
    if near is None or far is None:
        return None
    if not _is_weekend(near, weekend) and _is_weekend(far, weekend):
        return near
    return None


def _gap_day(raw: date, weekend: FrozenSet[int], direction: str) -> Optional[date]:
    steps: List[int] = []
    if direction in ("backward", "nearest"):
        steps.append(-1)
    if direction in ("forward", "nearest"):
        steps.append(1)
    # a one-workday week would qualify on both sides; backward wins like every other tie
    for step in steps:
        gap = _gap_neighbour(raw, weekend, step)
        if gap is not None:
            return gap
    return None


def adjust(raw: date, rule: ObservedRule) -> Observance:
    weekend = rule.weekend_days
    direction = rule.effective_direction

    if rule.policy in ("substitute", "nearest-weekday"):
        if not _is_weekend(raw, weekend):
            return Observance(raw, False)
        moved = move_off_weekend(raw, weekend, direction)
        if moved is None:
            return Observance(raw, False)
        return Observance(moved, True)

    if rule.bridge == "weekend":
        if not _is_weekend(raw, weekend):
            return Observance(raw, False)
        extra = move_off_weekend(raw, weekend, direction)
        return Observance(raw, False, () if extra is None else (extra,))

    if _is_weekend(raw, weekend):
        return Observance(raw, False)
    gap = _gap_day(raw, weekend, direction)
    return Observance(raw, False, () if gap is None else (gap,))
