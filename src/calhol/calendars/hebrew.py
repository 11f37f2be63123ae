"""
calhol.calendars.hebrew
-----------------------
Arithmetic Hebrew calendar (molad of Tishri with the four postponement rules).

Months are numbered from Nisan: Nisan=1 .. Elul=6, Tishri=7 .. Adar=12,
Adar II=13 (leap years only). The civil year begins on 1 Tishri.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from ..core.time import MAX_JDN, MIN_JDN, ensure_int

NISAN, IYYAR, SIVAN, TAMMUZ, AV, ELUL = 1, 2, 3, 4, 5, 6
TISHRI, MARHESHVAN, KISLEV, TEVET, SHEVAT, ADAR, ADAR_II = 7, 8, 9, 10, 11, 12, 13

# JDN of 1 Tishri AM 1 before postponements (7 October 3761 BCE, Julian)
EPOCH_JDN = 347998

# 765433/25920 days: mean synodic month in parts
_MONTH_PARTS = 13753
_DAY_PARTS = 25920


def is_leap_year(year: int) -> bool:
    return (7 * year + 1) % 19 < 7


def months_in_year(year: int) -> int:
    return 13 if is_leap_year(year) else 12


@lru_cache(maxsize=4096)
def _elapsed_days(year: int) -> int:
    months_elapsed = (235 * year - 234) // 19
    parts_elapsed = 12084 + _MONTH_PARTS * months_elapsed
    days = 29 * months_elapsed + parts_elapsed // _DAY_PARTS
    if (3 * (days + 1)) % 7 < 3:
        return days + 1
    return days


def _year_length_correction(year: int) -> int:
    ny0 = _elapsed_days(year - 1)
    ny1 = _elapsed_days(year)
    ny2 = _elapsed_days(year + 1)
    if ny2 - ny1 == 356:
        return 2
    if ny1 - ny0 == 382:
        return 1
    return 0


def new_year_jdn(year: int) -> int:
    """JDN of 1 Tishri of `year`."""
    return EPOCH_JDN + _elapsed_days(year) + _year_length_correction(year)


def days_in_year(year: int) -> int:
    return new_year_jdn(year + 1) - new_year_jdn(year)


def _long_marheshvan(year: int) -> bool:
    return days_in_year(year) in (355, 385)


def _short_kislev(year: int) -> bool:
    return days_in_year(year) in (353, 383)


def month_length(year: int, month: int) -> int:
    if month in (IYYAR, TAMMUZ, ELUL, TEVET, ADAR_II):
        return 29
    if month == ADAR and not is_leap_year(year):
        return 29
    if month == MARHESHVAN and not _long_marheshvan(year):
        return 29
    if month == KISLEV and _short_kislev(year):
        return 29
    return 30


def to_jdn(year: int, month: int, day: int) -> int:
    jdn = new_year_jdn(year) + day - 1
    if month < TISHRI:
        for m in range(TISHRI, months_in_year(year) + 1):
            jdn += month_length(year, m)
        for m in range(NISAN, month):
            jdn += month_length(year, m)
    else:
        for m in range(TISHRI, month):
            jdn += month_length(year, m)
    return jdn


def jdn_range() -> Tuple[int, int]:
    return MIN_JDN, MAX_JDN


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    jdn = ensure_int("jdn", jdn)
    # 35975351/98496 is the mean year length in days
    approx = ((jdn - EPOCH_JDN) * 98496) // 35975351 + 1
    year = approx - 1 if new_year_jdn(approx) > jdn else approx
    month = TISHRI if jdn < to_jdn(year, NISAN, 1) else NISAN
    while jdn > to_jdn(year, month, month_length(year, month)):
        month += 1
    day = jdn - to_jdn(year, month, 1) + 1
    return ensure_int("year", year), ensure_int("month", month), ensure_int("day", day)
