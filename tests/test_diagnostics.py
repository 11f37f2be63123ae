# tests/test_diagnostics.py

from datetime import date

import pytest

from calhol.diagnostics import lunar_scatter, round_trip, year_table


def test_year_table_collects_multiple_dates():
    table = year_table.build_table("tr", 2033, 2033)
    # the Hijri year is short enough for Ramadan Feast to fall twice in 2033 (Jan 3 and Dec 23)
    assert len(table["ramazan-bayrami"][2033]) == 2


def test_round_trip_counts_failures():
    assert round_trip.roundtrip_test("persian", 300, date(1950, 1, 1), date(2050, 12, 31), 1, max_failures=3) == 0


def test_day_of_year():
    assert lunar_scatter.day_of_year(date(2024, 1, 1)) == 1
    assert lunar_scatter.day_of_year(date(2024, 12, 31)) == 366


def test_build_series():
    np = pytest.importorskip("numpy")
    x, y = lunar_scatter.build_series(np, "cn", "spring-festival", 2020, 2029)
    assert list(x) == list(range(2020, 2030))
    assert y.min() >= 21 and y.max() <= 51
    with pytest.raises(ValueError):
        lunar_scatter.build_series(np, "us", "thanksgiving", 2020, 2021)


def test_scatter_writes_png(tmp_path, capsys):
    pytest.importorskip("numpy")
    pytest.importorskip("matplotlib")
    outbase = tmp_path / "scatter"
    assert lunar_scatter.main(["--start-year", "2020", "--end-year", "2024", "--outbase", str(outbase)]) == 0
    assert (tmp_path / "scatter.png").exists()
    assert "Saved" in capsys.readouterr().out
