"""
calhol.calendars.chinese
------------------------
Chinese lunisolar calendar for lunar years 1900-2100 from the standard
Hong Kong Observatory derived table.

Per-year encoding:
  bits 0-3   leap month number (0 = none)
  bit 16     leap month length (1 -> 30 days, 0 -> 29 days)
  bits 15-4  lengths of months 1..12 (1 -> 30 days, 0 -> 29 days)

Pure table lookup: the same inputs always give the same JDN.
"""

from __future__ import annotations

from bisect import bisect_right
from itertools import accumulate
from typing import List, Tuple

from ..core.errors import OutOfRangeError
from ..core.time import ensure_int, gregorian_to_jdn

FIRST_YEAR = 1900
LAST_YEAR = 2100

# Lunar New Year 1900 fell on 31 January 1900.
_FIRST_NEW_YEAR_JDN = gregorian_to_jdn(1900, 1, 31)

_YEAR_DATA = (
    0x04BD8, 0x04AE0, 0x0A570, 0x054D5, 0x0D260, 0x0D950, 0x16554, 0x056A0, 0x09AD0, 0x055D2,
    0x04AE0, 0x0A5B6, 0x0A4D0, 0x0D250, 0x1D255, 0x0B540, 0x0D6A0, 0x0ADA2, 0x095B0, 0x14977,
    0x04970, 0x0A4B0, 0x0B4B5, 0x06A50, 0x06D40, 0x1AB54, 0x02B60, 0x09570, 0x052F2, 0x04970,
    0x06566, 0x0D4A0, 0x0EA50, 0x06E95, 0x05AD0, 0x02B60, 0x186E3, 0x092E0, 0x1C8D7, 0x0C950,
    0x0D4A0, 0x1D8A6, 0x0B550, 0x056A0, 0x1A5B4, 0x025D0, 0x092D0, 0x0D2B2, 0x0A950, 0x0B557,
    0x06CA0, 0x0B550, 0x15355, 0x04DA0, 0x0A5D0, 0x14573, 0x052D0, 0x0A9A8, 0x0E950, 0x06AA0,
    0x0AEA6, 0x0AB50, 0x04B60, 0x0AAE4, 0x0A570, 0x05260, 0x0F263, 0x0D950, 0x05B57, 0x056A0,
    0x096D0, 0x04DD5, 0x04AD0, 0x0A4D0, 0x0D4D4, 0x0D250, 0x0D558, 0x0B540, 0x0B6A0, 0x195A6,
    0x095B0, 0x049B0, 0x0A974, 0x0A4B0, 0x0B27A, 0x06A50, 0x06D40, 0x0AF46, 0x0AB60, 0x09570,
    0x04AF5, 0x04970, 0x064B0, 0x074A3, 0x0EA50, 0x06B58, 0x055C0, 0x0AB60, 0x096D5, 0x092E0,
    0x0C960, 0x0D954, 0x0D4A0, 0x0DA50, 0x07552, 0x056A0, 0x0ABB7, 0x025D0, 0x092D0, 0x0CAB5,
    0x0A950, 0x0B4A0, 0x0BAA4, 0x0AD50, 0x055D9, 0x04BA0, 0x0A5B0, 0x15176, 0x052B0, 0x0A930,
    0x07954, 0x06AA0, 0x0AD50, 0x05B52, 0x04B60, 0x0A6E6, 0x0A4E0, 0x0D260, 0x0EA65, 0x0D530,
    0x05AA0, 0x076A3, 0x096D0, 0x04BD7, 0x04AD0, 0x0A4D0, 0x1D0B6, 0x0D250, 0x0D520, 0x0DD45,
    0x0B5A0, 0x056D0, 0x055B2, 0x049B0, 0x0A577, 0x0A4B0, 0x0AA50, 0x1B255, 0x06D20, 0x0ADA0,
    0x14B63, 0x09370, 0x049F8, 0x04970, 0x064B0, 0x168A6, 0x0EA50, 0x06B20, 0x1A6C4, 0x0AAE0,
    0x0A2E0, 0x0D2E3, 0x0C960, 0x0D557, 0x0D4A0, 0x0DA50, 0x05D55, 0x056A0, 0x0A6D0, 0x055D4,
    0x052D0, 0x0A9B8, 0x0A950, 0x0B4A0, 0x0B6A6, 0x0AD50, 0x055A0, 0x0ABA4, 0x0A5B0, 0x052B0,
    0x0B273, 0x06930, 0x07337, 0x06AA0, 0x0AD50, 0x14B55, 0x04B60, 0x0A570, 0x054E4, 0x0D160,
    0x0E968, 0x0D520, 0x0DAA0, 0x16AA6, 0x056D0, 0x04AE0, 0x0A9D4, 0x0A2D0, 0x0D150, 0x0F252,
    0x0D520,
)


def _data(year: int) -> int:
    if not FIRST_YEAR <= year <= LAST_YEAR:
        raise OutOfRangeError(f"Chinese calendar table covers lunar years {FIRST_YEAR}-{LAST_YEAR}, got {year}")
    return _YEAR_DATA[year - FIRST_YEAR]


def leap_month(year: int) -> int:
    """The month number that is doubled this year, or 0."""
    return _data(year) & 0xF


def month_length(year: int, month: int, leap: bool = False) -> int:
    data = _data(year)
    if leap:
        if leap_month(year) != month:
            raise ValueError(f"Year {year} has no leap month {month}")
        return 30 if data & 0x10000 else 29
    return 30 if data & (0x10000 >> month) else 29


def months_in_year(year: int) -> int:
    return 13 if leap_month(year) else 12


def _months(year: int) -> List[Tuple[int, bool, int]]:
    """(month, is_leap, length) in chronological order."""
    out = []
    lm = leap_month(year)
    for m in range(1, 13):
        out.append((m, False, month_length(year, m)))
        if m == lm:
            out.append((m, True, month_length(year, m, leap=True)))
    return out


def year_length(year: int) -> int:
    return sum(length for _, _, length in _months(year))


# JDN of the first day of every lunar year in the table, plus the day after the last
_NEW_YEAR_JDN: Tuple[int, ...] = tuple(
    accumulate(
        (year_length(y) for y in range(FIRST_YEAR, LAST_YEAR + 1)),
        initial=_FIRST_NEW_YEAR_JDN,
    )
)


def new_year_jdn(year: int) -> int:
    _data(year)
    return _NEW_YEAR_JDN[year - FIRST_YEAR]


def jdn_range() -> Tuple[int, int]:
    return _NEW_YEAR_JDN[0], _NEW_YEAR_JDN[-1] - 1


def to_jdn(year: int, month: int, day: int, leap: bool = False) -> int:
    jdn = new_year_jdn(year)
    for m, is_leap, length in _months(year):
        if m == month and is_leap == leap:
            return jdn + day - 1
        jdn += length
    raise ValueError(f"Year {year} has no {'leap ' if leap else ''}month {month}")


def from_jdn_full(jdn: int) -> Tuple[int, int, int, bool]:
    """(year, month, day, is_leap_month) for a JDN inside the table range."""
    jdn = ensure_int("jdn", jdn)
    if not _NEW_YEAR_JDN[0] <= jdn < _NEW_YEAR_JDN[-1]:
        raise OutOfRangeError(f"JDN {jdn} is outside the Chinese calendar table")
    idx = bisect_right(_NEW_YEAR_JDN, jdn) - 1
    year = FIRST_YEAR + idx
    offset = jdn - _NEW_YEAR_JDN[idx]
    for m, is_leap, length in _months(year):
        if offset < length:
            return (
                ensure_int("year", year),
                ensure_int("month", m),
                ensure_int("day", offset + 1),
                is_leap,
            )
        offset -= length
    raise AssertionError("unreachable: offset exceeds year length")


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    y, m, d, _ = from_jdn_full(jdn)
    return y, m, d
