"""
calhol.calendars.persian
------------------------
Persian (Solar Hijri) calendar with the 33-year cycle leap rule between
break years (Borkowski). This agrees with the official, equinox-based
calendar for 1178-1633 AP and stays integer-only.

Months 1-6 have 31 days, 7-11 have 30, month 12 has 29 (30 in leap years).
Supported years are -61 .. 3177 AP.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

from ..core.errors import OutOfRangeError
from ..core.time import ensure_int, gregorian_to_jdn, jdn_to_gregorian

# Years in which the 33-year cycle restarts
_BREAKS = (-61, 9, 38, 199, 426, 686, 756, 818, 1111, 1181, 1210,
           1635, 2060, 2097, 2192, 2262, 2324, 2394, 2456, 3178)

FIRST_YEAR = _BREAKS[0]
LAST_YEAR = _BREAKS[-1] - 1


def _div(a: int, b: int) -> int:
    # truncating division; the cycle arithmetic is defined with it
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _mod(a: int, b: int) -> int:
    return a - _div(a, b) * b


class _YearInfo(NamedTuple):
    leap: int       # 0 for a leap year, 1..4 otherwise
    gy: int         # Gregorian year holding 1 Farvardin
    march: int      # March day of 1 Farvardin


def _year_info(jy: int) -> _YearInfo:
    if not FIRST_YEAR <= jy <= LAST_YEAR:
        raise OutOfRangeError(f"Persian calendar covers years {FIRST_YEAR}-{LAST_YEAR}, got {jy}")
    gy = jy + 621
    leap_j = -14
    jp = _BREAKS[0]
    jump = 0
    for jm in _BREAKS[1:]:
        jump = jm - jp
        if jy < jm:
            break
        leap_j += _div(jump, 33) * 8 + _div(_mod(jump, 33), 4)
        jp = jm
    n = jy - jp
    leap_j += _div(n, 33) * 8 + _div(_mod(n, 33) + 3, 4)
    if _mod(jump, 33) == 4 and jump - n == 4:
        leap_j += 1

    leap_g = _div(gy, 4) - _div((_div(gy, 100) + 1) * 3, 4) - 150
    march = 20 + leap_j - leap_g

    if jump - n < 6:
        n = n - jump + _div(jump + 4, 33) * 33
    leap = _mod(_mod(n + 1, 33) - 1, 4)
    if leap == -1:
        leap = 4
    return _YearInfo(leap, gy, march)


def is_leap_year(year: int) -> bool:
    return _year_info(year).leap == 0


def months_in_year(year: int) -> int:
    return 12


def month_length(year: int, month: int) -> int:
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_leap_year(year) else 29


def new_year_jdn(year: int) -> int:
    """JDN of 1 Farvardin."""
    info = _year_info(year)
    return gregorian_to_jdn(info.gy, 3, info.march)


def to_jdn(year: int, month: int, day: int) -> int:
    month_offset = 31 * (month - 1) if month <= 7 else 30 * (month - 1) + 6
    return new_year_jdn(year) + month_offset + day - 1


def jdn_range() -> Tuple[int, int]:
    return new_year_jdn(FIRST_YEAR), to_jdn(LAST_YEAR, 12, month_length(LAST_YEAR, 12))


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    jdn = ensure_int("jdn", jdn)
    lo, hi = jdn_range()
    if not lo <= jdn <= hi:
        raise OutOfRangeError(f"JDN {jdn} is outside the supported Persian calendar years")
    year = jdn_to_gregorian(jdn)[0] - 621
    if year > LAST_YEAR or new_year_jdn(year) > jdn:
        year -= 1
    k = jdn - new_year_jdn(year)
    if k <= 185:
        month, day = 1 + k // 31, k % 31 + 1
    else:
        k -= 186
        month, day = 7 + k // 30, k % 30 + 1
    return ensure_int("year", year), ensure_int("month", month), ensure_int("day", day)
