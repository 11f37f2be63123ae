"""
calhol.core.time
----------------
Integer calendar primitives shared by every calculator.

All day counts are Julian Day Numbers (JDN). Every division below is floor
division on integers, so no fractional day, month or year can leak into a
date field.
"""

from __future__ import annotations

from datetime import date
from numbers import Integral
from typing import Optional, Tuple

# 0=Sunday .. 6=Saturday throughout the package.
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# JDNs of date.min (0001-01-01) and date.max (9999-12-31)
MIN_JDN = 1721426
MAX_JDN = 5373484


def ensure_int(name: str, value) -> int:
    """Return `value` as an int, refusing anything with a fractional part."""
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got bool")
    if isinstance(value, Integral):
        return int(value)
    try:
        as_int = int(value)
    except (TypeError, ValueError) as e:
        raise TypeError(f"{name} must be an integer, got {value!r}") from e
    if as_int != value:
        raise ValueError(f"{name} must be an integer, got non-integral {value!r}")
    return as_int


# ============================================================
# Proleptic Gregorian <-> JDN  (Fliegel-Van Flandern)
# ============================================================

def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_gregorian(jdn: int) -> Tuple[int, int, int]:
    jdn = ensure_int("jdn", jdn)
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    return gregorian_to_jdn(d.year, d.month, d.day)


def from_jdn(jdn: int) -> date:
    """Inverse of to_jdn (Gregorian)."""
    return make_date(*jdn_to_gregorian(jdn))


def make_date(year, month, day) -> date:
    """Assemble a date after checking that every field is an integer."""
    return date(ensure_int("year", year), ensure_int("month", month), ensure_int("day", day))


# ============================================================
# Proleptic Julian <-> JDN
# ============================================================

def julian_to_jdn(year: int, month: int, day: int) -> int:
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - 32083


def jdn_to_julian(jdn: int) -> Tuple[int, int, int]:
    jdn = ensure_int("jdn", jdn)
    c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = d - 4800 + (m // 10)
    return year, month, day


# ============================================================
# Month arithmetic
# ============================================================

def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def weekday_of_jdn(jdn: int) -> int:
    return (jdn + 1) % 7


def weekday(d: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday."""
    return weekday_of_jdn(to_jdn(d))


def add_days(d: date, n: int) -> date:
    return from_jdn(to_jdn(d) + ensure_int("n", n))


def shift(d: date, n: int) -> Optional[date]:
    """`d` moved by `n` days, or None when that leaves the datetime.date range."""
    jdn = to_jdn(d) + ensure_int("n", n)
    if not MIN_JDN <= jdn <= MAX_JDN:
        return None
    return from_jdn(jdn)


def nth_weekday_of_month(year: int, month: int, wd: int, nth: int) -> Optional[date]:
    """
    The nth `wd` (0=Sunday) of the month, or the last one when nth == -1.

    Returns None when the nth occurrence does not exist in that month
    (e.g. a fifth Monday); the search never wraps into the next month.
    """
    if nth == -1:
        last = days_in_month(year, month)
        last_wd = weekday_of_jdn(gregorian_to_jdn(year, month, last))
        return date(year, month, last - (last_wd - wd) % 7)
    if not 1 <= nth <= 5:
        raise ValueError(f"nth must be in 1..5 or -1, got {nth}")

    first_wd = weekday_of_jdn(gregorian_to_jdn(year, month, 1))
    day = 1 + (wd - first_wd) % 7 + (nth - 1) * 7
    if day > days_in_month(year, month):
        return None
    return date(year, month, day)
