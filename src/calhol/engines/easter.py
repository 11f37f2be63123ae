"""
calhol.engines.easter
---------------------
Computus. Gregorian Easter by the Meeus/Jones/Butcher algorithm, Julian
Easter by Meeus' Julian algorithm; the Julian result is carried through its
JDN into the proleptic Gregorian calendar used everywhere else.

Derived feasts (Good Friday -2, Ash Wednesday -46, Pentecost +49, ...) are
plain offsets on EasterRule.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from typing import List, Tuple

from ..core.time import from_jdn, julian_to_jdn, make_date, shift
from ..core.types import EasterRule
from .interfaces import CalcContext

_LOGGER = logging.getLogger(__name__)

DEFAULT_CUTOVER = 1583


def gregorian_easter(year: int) -> Tuple[int, int]:
    """(month, day) of Easter Sunday in the Gregorian calendar."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    n = h + l - 7 * m + 114
    return n // 31, n % 31 + 1


def julian_easter(year: int) -> Tuple[int, int]:
    """(month, day) of Easter Sunday in the Julian calendar."""
    a = year % 4
    b = year % 7
    c = year % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    n = d + e + 114
    return n // 31, n % 31 + 1


@lru_cache(maxsize=1024)
def easter_sunday(year: int, method: str = "western", cutover: int = DEFAULT_CUTOVER) -> date:
    """
    Easter Sunday as a proleptic Gregorian date.

    western: Gregorian computus from `cutover` on, Julian computus before it.
    orthodox: always the Julian computus.
    """
    if method not in ("western", "orthodox"):
        raise ValueError(f"method must be 'western' or 'orthodox', got {method!r}")
    if method == "western" and year >= cutover:
        month, day = gregorian_easter(year)
        return make_date(year, month, day)
    month, day = julian_easter(year)
    return from_jdn(julian_to_jdn(year, month, day))


def calculate(payload: EasterRule, year: int, ctx: CalcContext) -> List[date]:
    base = easter_sunday(year, payload.method, ctx.config.gregorian_cutover)
    d = shift(base, payload.offset_days)
    if d is None:
        _LOGGER.debug("Easter %s%+d days is out of range, dropped", base, payload.offset_days)
        return []
    return [d]
