# tests/test_cache.py

import threading
from datetime import date

import pytest

from calhol.core.cache import MISSING, ResolutionCache
from calhol.core.ruleset import RuleSet
from calhol.core.types import EngineConfig, FixedRule, HolidayOccurrence, HolidayRule
from calhol.engines.resolver import HolidayEngine


def _occ(rule_id="x", d=date(2024, 1, 1)):
    return HolidayOccurrence(rule_id=rule_id, name=rule_id, kind="fixed", calendar_date=d)


def _rule(id, month, day, **kw):
    return HolidayRule(id=id, name=id, payload=FixedRule(month, day), **kw)


def test_year_entries_roundtrip():
    c = ResolutionCache()
    assert c.get_year("fp", 2024) is None
    c.put_year("fp", 2024, (_occ(),))
    assert c.get_year("fp", 2024) == (_occ(),)
    assert c.get_year("other", 2024) is None


def test_point_entries_distinguish_none_from_missing():
    c = ResolutionCache()
    d = date(2024, 1, 2)
    assert c.get_point("fp", d) is MISSING
    c.put_point("fp", d, None)
    assert c.get_point("fp", d) is None


def test_lru_eviction():
    c = ResolutionCache(max_years=2, max_points=2)
    c.put_year("fp", 2020, ())
    c.put_year("fp", 2021, ())
    # touching 2020 makes 2021 the least recently used
    assert c.get_year("fp", 2020) == ()
    c.put_year("fp", 2022, ())
    assert c.get_year("fp", 2021) is None
    assert c.get_year("fp", 2020) == ()
    assert c.get_year("fp", 2022) == ()
    assert c.stats()["years"]["size"] == 2


def test_stats_and_clear():
    c = ResolutionCache()
    c.get_year("fp", 2024)
    c.put_year("fp", 2024, ())
    c.get_year("fp", 2024)
    s = c.stats()["years"]
    assert (s["hits"], s["misses"]) == (1, 1)
    assert s["hit_rate"] == pytest.approx(0.5)
    assert len(c) == 1
    c.clear()
    assert len(c) == 0
    assert c.stats()["years"]["hits"] == 0


def test_invalid_sizes():
    with pytest.raises(ValueError):
        ResolutionCache(max_years=0)


def test_mutation_invalidates_results(engine):
    rs = RuleSet([_rule("a", 1, 1)], name="t")
    assert [o.rule_id for o in engine.occurrences_for_year(rs, 2024)] == ["a"]

    rs.add(_rule("b", 2, 2))
    assert [o.rule_id for o in engine.occurrences_for_year(rs, 2024)] == ["a", "b"]

    rs.set_active("a", False)
    assert [o.rule_id for o in engine.occurrences_for_year(rs, 2024)] == ["b"]
    assert engine.is_holiday(rs, date(2024, 1, 1)) is None

    rs.set_active("a", True)
    assert engine.is_holiday(rs, date(2024, 1, 1)).rule_id == "a"

    rs.remove("b")
    assert engine.is_holiday(rs, date(2024, 2, 2)) is None


def test_shared_cache_keeps_rule_sets_apart(cache):
    eng = HolidayEngine(cache=cache)
    one = RuleSet([_rule("same-id", 1, 1)])
    two = RuleSet([_rule("same-id", 6, 1)])
    assert eng.occurrences_for_year(one, 2024)[0].date == date(2024, 1, 1)
    assert eng.occurrences_for_year(two, 2024)[0].date == date(2024, 6, 1)


def test_shared_cache_keeps_configs_apart(cache):
    from calhol.core.types import EasterRule

    rules = [HolidayRule(id="easter", name="Easter", payload=EasterRule())]
    old = HolidayEngine(cache=cache).occurrences_for_year(rules, 1500)
    new = HolidayEngine(cache=cache, config=EngineConfig(gregorian_cutover=1400)).occurrences_for_year(rules, 1500)
    assert old[0].date == date(1500, 4, 29)
    assert new[0].date == date(1500, 4, 1)


def test_concurrent_readers_agree(cache):
    eng = HolidayEngine(cache=cache)
    rs = RuleSet([_rule("a", 1, 1), _rule("b", 7, 4)])
    results = []

    def work():
        for y in range(2000, 2030):
            results.append((y, tuple(eng.occurrences_for_year(rs, y))))

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    expected = {y: tuple(HolidayEngine().occurrences_for_year(rs, y)) for y in range(2000, 2030)}
    assert len(results) == 8 * 30
    assert all(occs == expected[y] for y, occs in results)
