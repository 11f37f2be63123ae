# tests/test_easter.py

from datetime import date

import pytest

from calhol.core.time import weekday, SUNDAY
from calhol.engines.easter import easter_sunday, gregorian_easter, julian_easter


@pytest.mark.parametrize(
    "year, expected",
    [
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2019, date(2019, 4, 21)),
        (2000, date(2000, 4, 23)),
        (1961, date(1961, 4, 2)),
        (2038, date(2038, 4, 25)),
        (2285, date(2285, 3, 22)),
    ],
)
def test_western_easter(year, expected):
    assert easter_sunday(year) == expected


@pytest.mark.parametrize(
    "year, expected",
    [
        (2024, date(2024, 5, 5)),
        (2025, date(2025, 4, 20)),
        (2023, date(2023, 4, 16)),
        (2021, date(2021, 5, 2)),
    ],
)
def test_orthodox_easter(year, expected):
    assert easter_sunday(year, "orthodox") == expected


def test_before_cutover_uses_julian_computus():
    assert julian_easter(1500) == (4, 19)
    # Julian 1500-04-19 is proleptic Gregorian 1500-04-29
    assert easter_sunday(1500) == date(1500, 4, 29)
    # moving the cutover back switches the method
    assert gregorian_easter(1500) == (4, 1)
    assert easter_sunday(1500, cutover=1400) == date(1500, 4, 1)


def test_always_a_sunday_in_march_or_april():
    for y in range(1583, 2400):
        d = easter_sunday(y)
        assert weekday(d) == SUNDAY
        assert (3, 22) <= (d.month, d.day) <= (4, 25)
        assert gregorian_easter(y) == (d.month, d.day)


def test_unknown_method():
    with pytest.raises(ValueError):
        easter_sunday(2024, "lunar")
