"""
calhol.calendars.islamic
------------------------
Arithmetic (tabular, civil epoch) Hijri calendar.

Leap years are those with (14 + 11*year) mod 30 < 11; odd months have 30
days, even months 29, and month 12 gains a day in leap years.
"""

from __future__ import annotations

from typing import Tuple

from ..core.time import MAX_JDN, MIN_JDN, ensure_int

# 1 Muharram 1 AH = 16 July 622 (Julian)
EPOCH_JDN = 1948440

MONTHS_IN_YEAR = 12


def is_leap_year(year: int) -> bool:
    return (14 + 11 * year) % 30 < 11


def months_in_year(year: int) -> int:
    return MONTHS_IN_YEAR


def month_length(year: int, month: int) -> int:
    if month % 2 == 1 or (month == 12 and is_leap_year(year)):
        return 30
    return 29


def to_jdn(year: int, month: int, day: int) -> int:
    # ceil(29.5 * (month - 1)) in integers
    return (
        EPOCH_JDN - 1
        + day
        + (59 * (month - 1) + 1) // 2
        + 354 * (year - 1)
        + (3 + 11 * year) // 30
    )


def jdn_range() -> Tuple[int, int]:
    return MIN_JDN, MAX_JDN


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    jdn = ensure_int("jdn", jdn)
    year = (30 * (jdn - EPOCH_JDN) + 10646) // 10631
    since_year_start = jdn - (29 + to_jdn(year, 1, 1))
    # ceil(since / 29.5) + 1, capped at 12
    month = min(12, -((-2 * since_year_start) // 59) + 1)
    day = jdn - to_jdn(year, month, 1) + 1
    return ensure_int("year", year), ensure_int("month", month), ensure_int("day", day)
