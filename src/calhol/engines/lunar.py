"""
calhol.engines.lunar
--------------------
Lunar/lunisolar/solar-hijri rules: a (month, day) in a source calendar is
mapped to every Gregorian date in the requested year that carries it.

A source-calendar year never lines up with a Gregorian one, so a date can
fall zero, one or (for the 354-day Hijri year) two times in a Gregorian year.
Everything goes through integer JDNs.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Tuple

from ..calendars import chinese, hebrew, islamic, persian
from ..core.errors import OutOfRangeError
from ..core.time import from_jdn, gregorian_to_jdn, to_jdn
from ..core.types import LunarRule
from .interfaces import CalcContext, LunarConverterProtocol

CONVERTERS: Dict[str, LunarConverterProtocol] = {
    "islamic": islamic,
    "chinese": chinese,
    "hebrew": hebrew,
    "persian": persian,
}


def _converter(calendar: str) -> LunarConverterProtocol:
    if calendar not in CONVERTERS:
        raise KeyError(f"Unknown lunar calendar '{calendar}'. Available: {sorted(CONVERTERS)}")
    return CONVERTERS[calendar]


def to_gregorian(calendar: str, year: int, month: int, day: int, *, leap_month: bool = False) -> date:
    """
    Gregorian date of a source-calendar date.

    Raises ValueError for a date the source year does not have (day 30 of a
    29-day month, Adar II in a common year, a leap month that is not doubled)
    and OutOfRangeError for a year the converter cannot represent.
    """
    conv = _converter(calendar)
    if leap_month and calendar != "chinese":
        raise ValueError("leap_month is only meaningful for the chinese calendar")
    if not _valid(calendar, year, month, day, leap_month):
        kind = "leap month" if leap_month else "month"
        raise ValueError(f"{calendar} year {year} has no day {day} in {kind} {month}")
    if calendar == "chinese":
        return from_jdn(conv.to_jdn(year, month, day, leap_month))
    return from_jdn(conv.to_jdn(year, month, day))


def from_gregorian(calendar: str, d: date) -> Tuple[int, int, int]:
    """(year, month, day) in `calendar` for a Gregorian date."""
    return _converter(calendar).from_jdn(to_jdn(d))


def _valid(calendar: str, year: int, month: int, day: int, leap: bool = False) -> bool:
    conv = CONVERTERS[calendar]
    if calendar in ("islamic", "hebrew") and year < 1:
        return False
    if month < 1 or day < 1 or month > conv.months_in_year(year):
        return False
    if calendar == "chinese":
        # month numbers run 1..12; the leap month repeats one of them
        if month > 12 or (leap and chinese.leap_month(year) != month):
            return False
        return day <= chinese.month_length(year, month, leap=leap)
    return day <= conv.month_length(year, month)


def _bounds(calendar: str, year: int) -> Tuple[int, int]:
    """JDNs of Gregorian `year` the converter can represent."""
    first, last = _converter(calendar).jdn_range()
    lo = max(gregorian_to_jdn(year, 1, 1), first)
    hi = min(gregorian_to_jdn(year, 12, 31), last)
    if lo > hi:
        raise OutOfRangeError(f"The {calendar} calendar cannot represent Gregorian year {year}")
    return lo, hi


def source_years(calendar: str, year: int) -> range:
    """Source-calendar years overlapping the representable part of Gregorian `year`."""
    conv = _converter(calendar)
    lo, hi = _bounds(calendar, year)
    return range(conv.from_jdn(lo)[0], conv.from_jdn(hi)[0] + 1)


def calculate(payload: LunarRule, year: int, ctx: CalcContext) -> List[date]:
    conv = _converter(payload.calendar)
    lo, hi = _bounds(payload.calendar, year)

    out: List[date] = []
    for sy in source_years(payload.calendar, year):
        if not _valid(payload.calendar, sy, payload.month, payload.day, payload.leap_month):
            continue
        if payload.calendar == "chinese":
            jdn = conv.to_jdn(sy, payload.month, payload.day, payload.leap_month)
        else:
            jdn = conv.to_jdn(sy, payload.month, payload.day)
        if lo <= jdn <= hi:
            out.append(from_jdn(jdn))
    return sorted(out)
