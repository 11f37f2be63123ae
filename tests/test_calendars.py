# tests/test_calendars.py

import random
from datetime import date, timedelta

import pytest

from calhol.calendars import chinese, hebrew, islamic, persian
from calhol.core.errors import OutOfRangeError
from calhol.core.time import from_jdn, to_jdn
from calhol.engines import lunar


@pytest.mark.parametrize(
    "calendar, ymd, expected",
    [
        ("islamic", (1445, 9, 1), date(2024, 3, 11)),
        ("islamic", (1445, 10, 1), date(2024, 4, 10)),
        ("hebrew", (5785, hebrew.TISHRI, 1), date(2024, 10, 3)),
        ("hebrew", (5784, hebrew.TISHRI, 1), date(2023, 9, 16)),
        ("hebrew", (5784, hebrew.NISAN, 15), date(2024, 4, 23)),
        ("hebrew", (5785, hebrew.TISHRI, 10), date(2024, 10, 12)),
        ("persian", (1403, 1, 1), date(2024, 3, 20)),
        ("persian", (1403, 12, 30), date(2025, 3, 20)),
        ("persian", (1404, 1, 1), date(2025, 3, 21)),
        ("persian", (1400, 1, 1), date(2021, 3, 21)),
        ("hebrew", (5784, hebrew.ADAR_II, 14), date(2024, 3, 24)),
        ("chinese", (2023, 2, 1), date(2023, 2, 20)),
        ("chinese", (2024, 1, 1), date(2024, 2, 10)),
        ("chinese", (2023, 1, 1), date(2023, 1, 22)),
        ("chinese", (2024, 8, 15), date(2024, 9, 17)),
        ("chinese", (1900, 1, 1), date(1900, 1, 31)),
    ],
)
def test_known_dates(calendar, ymd, expected):
    assert lunar.to_gregorian(calendar, *ymd) == expected
    assert lunar.from_gregorian(calendar, expected) == ymd


@pytest.mark.parametrize("calendar", ["islamic", "hebrew", "persian", "chinese"])
def test_random_roundtrip(calendar):
    rng = random.Random(123)
    lo = to_jdn(date(1901, 1, 1))
    hi = to_jdn(date(2100, 12, 31))
    conv = lunar.CONVERTERS[calendar]
    for _ in range(1500):
        jdn = rng.randint(lo, hi)
        if calendar == "chinese":
            y, m, d, leap = chinese.from_jdn_full(jdn)
            assert chinese.to_jdn(y, m, d, leap) == jdn
        else:
            y, m, d = conv.from_jdn(jdn)
            assert 1 <= d <= conv.month_length(y, m)
            assert conv.to_jdn(y, m, d) == jdn


def test_month_lengths_sum_to_year():
    for y in range(1440, 1450):
        total = sum(islamic.month_length(y, m) for m in range(1, 13))
        assert total == (355 if islamic.is_leap_year(y) else 354)
    for y in range(5780, 5790):
        total = sum(hebrew.month_length(y, m) for m in range(1, hebrew.months_in_year(y) + 1))
        assert total == hebrew.days_in_year(y)
        assert hebrew.new_year_jdn(y) + total == hebrew.new_year_jdn(y + 1)
    for y in range(1400, 1410):
        total = sum(persian.month_length(y, m) for m in range(1, 13))
        assert total == (366 if persian.is_leap_year(y) else 365)
        assert persian.new_year_jdn(y) + total == persian.new_year_jdn(y + 1)


def test_hebrew_leap_years():
    # 3, 6, 8, 11, 14, 17, 19 of the Metonic cycle
    assert hebrew.is_leap_year(5784)
    assert not hebrew.is_leap_year(5785)
    assert hebrew.months_in_year(5784) == 13
    assert hebrew.months_in_year(5785) == 12
    assert hebrew.days_in_year(5785) in (353, 354, 355)


def test_chinese_leap_months():
    assert chinese.leap_month(2023) == 2
    assert chinese.leap_month(2020) == 4
    assert chinese.leap_month(2024) == 0
    assert chinese.months_in_year(2023) == 13
    # the leap second month of 2023 starts 2023-03-22
    assert from_jdn(chinese.to_jdn(2023, 2, 1, leap=True)) == date(2023, 3, 22)
    assert chinese.from_jdn_full(to_jdn(date(2023, 3, 22))) == (2023, 2, 1, True)
    with pytest.raises(ValueError):
        chinese.to_jdn(2024, 2, 1, leap=True)


def test_chinese_table_range():
    with pytest.raises(OutOfRangeError):
        chinese.to_jdn(1899, 1, 1)
    with pytest.raises(OutOfRangeError):
        chinese.from_jdn(to_jdn(date(1900, 1, 30)))
    with pytest.raises(OutOfRangeError):
        chinese.leap_month(2101)


def test_unknown_calendar():
    with pytest.raises(KeyError):
        lunar.to_gregorian("mayan", 1, 1, 1)


def test_persian_leap_years_follow_the_official_calendar():
    assert persian.is_leap_year(1399)
    assert persian.is_leap_year(1403)
    assert not persian.is_leap_year(1404)
    assert persian.month_length(1403, 12) == 30
    assert persian.month_length(1404, 12) == 29
    with pytest.raises(OutOfRangeError):
        persian.new_year_jdn(persian.LAST_YEAR + 1)


@pytest.mark.parametrize(
    "calendar, ymd, leap",
    [
        ("chinese", (2024, 1, 30), False),   # first month of 2024 has 29 days
        ("chinese", (2024, 13, 1), False),
        ("chinese", (2024, 0, 1), False),
        ("chinese", (2024, 2, 1), True),     # 2024 has no leap month
        ("chinese", (2023, 3, 1), True),     # 2023 doubles the second month, not the third
        ("hebrew", (5785, hebrew.ADAR_II, 1), False),
        ("hebrew", (5785, hebrew.TISHRI, 31), False),
        ("islamic", (1445, 2, 30), False),
        ("islamic", (1445, 1, 0), False),
        ("islamic", (0, 1, 1), False),
        ("islamic", (1445, 1, 1), True),
        ("persian", (1404, 12, 30), False),
        ("persian", (1404, 7, 31), False),
    ],
)
def test_nonexistent_dates_are_rejected(calendar, ymd, leap):
    with pytest.raises(ValueError):
        lunar.to_gregorian(calendar, *ymd, leap_month=leap)


def test_out_of_table_years_raise_out_of_range():
    with pytest.raises(OutOfRangeError):
        lunar.to_gregorian("chinese", 2101, 1, 1)
    with pytest.raises(OutOfRangeError):
        lunar.to_gregorian("persian", 3200, 1, 1)


@pytest.mark.parametrize(
    "calendar, years",
    [
        ("islamic", (1320, 1520)),
        ("hebrew", (5661, 5860)),
        ("persian", (1280, 1479)),
        ("chinese", (1900, 2100)),
    ],
)
def test_source_date_roundtrip(calendar, years):
    rng = random.Random(2024)
    conv = lunar.CONVERTERS[calendar]
    for _ in range(1500):
        y = rng.randint(*years)
        if calendar == "chinese":
            m = rng.randint(1, 12)
            leap = chinese.leap_month(y) == m and rng.random() < 0.5
            d = rng.randint(1, chinese.month_length(y, m, leap=leap))
        else:
            m = rng.randint(1, conv.months_in_year(y))
            leap = False
            d = rng.randint(1, conv.month_length(y, m))
        g = lunar.to_gregorian(calendar, y, m, d, leap_month=leap)
        if calendar == "chinese":
            assert chinese.from_jdn_full(to_jdn(g)) == (y, m, d, leap)
        else:
            assert lunar.from_gregorian(calendar, g) == (y, m, d)


def test_leap_months_roundtrip():
    for y in range(1900, 2101):
        lm = chinese.leap_month(y)
        if not lm:
            continue
        for d in (1, chinese.month_length(y, lm, leap=True)):
            g = lunar.to_gregorian("chinese", y, lm, d, leap_month=True)
            assert chinese.from_jdn_full(to_jdn(g)) == (y, lm, d, True)
            # the regular month of the same number comes first
            assert lunar.to_gregorian("chinese", y, lm, d) < g
    for y in range(5660, 5861):
        if not hebrew.is_leap_year(y):
            continue
        g = lunar.to_gregorian("hebrew", y, hebrew.ADAR_II, 14)
        assert lunar.from_gregorian("hebrew", g) == (y, hebrew.ADAR_II, 14)
        assert g - lunar.to_gregorian("hebrew", y, hebrew.ADAR, 14) == timedelta(days=30)


def test_chinese_lookup_at_new_year_boundaries():
    first, last = chinese.jdn_range()
    assert chinese.from_jdn_full(first) == (1900, 1, 1, False)
    y, m, d, leap = chinese.from_jdn_full(last)
    assert y == 2100
    assert chinese.to_jdn(y, m, d, leap) == last
    assert chinese.from_jdn_full(last - d + 1) == (y, m, 1, leap)
    for year in (1901, 1950, 2024, 2100):
        ny = chinese.new_year_jdn(year)
        assert chinese.from_jdn_full(ny) == (year, 1, 1, False)
        assert chinese.from_jdn_full(ny - 1)[0] == year - 1
    with pytest.raises(OutOfRangeError):
        chinese.from_jdn_full(last + 1)


def test_source_years_at_table_edges():
    assert list(lunar.source_years("chinese", 1900)) == [1900]
    assert list(lunar.source_years("chinese", 2100)) == [2099, 2100]
    assert list(lunar.source_years("chinese", 2101)) == [2100]
    with pytest.raises(OutOfRangeError):
        lunar.source_years("chinese", 1899)
    with pytest.raises(OutOfRangeError):
        lunar.source_years("chinese", 2102)
