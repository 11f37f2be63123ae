# tests/test_time.py

import random
from datetime import date

import pytest

from calhol.core import time as t


def test_jdn_date_roundtrip():
    random.seed(42)
    # year 1 - 9999, the datetime.date range
    for _ in range(5000):
        jdn_in = random.randint(1721426, 5373484)
        assert t.to_jdn(t.from_jdn(jdn_in)) == jdn_in


def test_known_epochs():
    assert t.to_jdn(date(2000, 1, 1)) == 2451545
    assert t.to_jdn(date(1970, 1, 1)) == 2440588
    # Julian calendar: 1582-10-04 (Julian) is followed by 1582-10-15 (Gregorian)
    assert t.julian_to_jdn(1582, 10, 4) + 1 == t.gregorian_to_jdn(1582, 10, 15)


def test_julian_roundtrip():
    random.seed(7)
    for _ in range(2000):
        jdn = random.randint(1721426, 5373484)
        assert t.julian_to_jdn(*t.jdn_to_julian(jdn)) == jdn


def test_weekday_sunday_is_zero():
    assert t.weekday(date(2024, 3, 31)) == t.SUNDAY
    assert t.weekday(date(2024, 1, 1)) == t.MONDAY
    assert t.weekday(date(2026, 7, 4)) == t.SATURDAY
    # agrees with the standard library on a sweep
    d = date(1999, 12, 20)
    for i in range(30):
        cur = t.add_days(d, i)
        assert t.weekday(cur) == (cur.weekday() + 1) % 7


def test_leap_years_and_month_lengths():
    assert t.is_leap_year(2000)
    assert not t.is_leap_year(1900)
    assert t.is_leap_year(2024)
    assert t.days_in_month(2024, 2) == 29
    assert t.days_in_month(2023, 2) == 28
    assert t.days_in_month(2023, 4) == 30
    with pytest.raises(ValueError):
        t.days_in_month(2023, 13)


@pytest.mark.parametrize(
    "year, month, wd, nth, expected",
    [
        (2024, 1, t.MONDAY, 3, date(2024, 1, 15)),
        (2024, 5, t.MONDAY, -1, date(2024, 5, 27)),
        (2024, 11, t.THURSDAY, 4, date(2024, 11, 28)),
        (2024, 9, t.MONDAY, 1, date(2024, 9, 2)),
        (2024, 2, t.THURSDAY, 5, date(2024, 2, 29)),
        (2024, 2, t.MONDAY, 5, None),
        (2023, 12, t.SUNDAY, -1, date(2023, 12, 31)),
    ],
)
def test_nth_weekday_of_month(year, month, wd, nth, expected):
    assert t.nth_weekday_of_month(year, month, wd, nth) == expected


def test_nth_weekday_rejects_bad_nth():
    with pytest.raises(ValueError):
        t.nth_weekday_of_month(2024, 1, t.MONDAY, 0)


def test_ensure_int_refuses_fractions():
    assert t.ensure_int("x", 3.0) == 3
    with pytest.raises(ValueError):
        t.ensure_int("x", 2.5)
    with pytest.raises(TypeError):
        t.ensure_int("x", True)
    with pytest.raises(TypeError):
        t.ensure_int("x", "abc")


def test_shift_stays_inside_the_date_range():
    assert t.shift(date(2024, 2, 28), 2) == date(2024, 3, 1)
    assert t.shift(date.max, 0) == date.max
    assert t.shift(date.max, 1) is None
    assert t.shift(date.min, -1) is None
    assert t.from_jdn(t.MIN_JDN) == date.min
    assert t.from_jdn(t.MAX_JDN) == date.max
