# tests/test_ruleset.py

import pytest

from calhol.core.errors import InvalidRuleError
from calhol.core.ruleset import RuleSet
from calhol.core.types import FixedRule, HolidayRule, rules_from_dicts


def _rule(id, **kw):
    return HolidayRule(id=id, name=id, payload=FixedRule(1, 1), **kw)


def test_ids_are_unique():
    rs = RuleSet([_rule("a")])
    with pytest.raises(InvalidRuleError) as ei:
        rs.add(_rule("a"))
    assert ei.value.rule_id == "a"
    with pytest.raises(InvalidRuleError):
        RuleSet([_rule("x"), _rule("x")])


def test_version_and_fingerprint_track_mutation():
    rs = RuleSet([_rule("a"), _rule("b")])
    v0, f0 = rs.version, rs.fingerprint
    rs.set_active("a", False)
    assert rs.version == v0 + 1
    assert rs.fingerprint != f0
    # a no-op toggle changes nothing
    f1 = rs.fingerprint
    rs.set_active("a", False)
    assert rs.fingerprint == f1


def test_set_active_keeps_position():
    rs = RuleSet([_rule("a"), _rule("b"), _rule("c")])
    rs.set_active("b", False)
    assert rs.ids() == ["a", "b", "c"]
    assert [r.id for r in rs.active_rules()] == ["a", "c"]
    assert rs.get("b").active is False


def test_lookup_and_removal():
    rs = RuleSet([_rule("a")])
    assert "a" in rs
    assert rs.find("zz") is None
    with pytest.raises(KeyError):
        rs.get("zz")
    with pytest.raises(KeyError):
        rs.remove("zz")
    assert rs.remove("a").id == "a"
    assert len(rs) == 0


def test_distinct_sets_have_distinct_fingerprints():
    assert RuleSet([_rule("a")]).fingerprint != RuleSet([_rule("a")]).fingerprint


def test_for_region():
    rs = RuleSet(
        [_rule("all"), _rule("by", regions=("BY",)), _rule("he", regions=("HE", "BW"))],
        name="de",
    )
    by = rs.for_region("BY")
    assert by.ids() == ["all", "by"]
    assert by.name == "de:BY"
    assert rs.for_region("BW").ids() == ["all", "he"]


def test_rejects_non_rules():
    with pytest.raises(InvalidRuleError):
        RuleSet().add("not a rule")


def test_from_dicts():
    rules = rules_from_dicts([
        {"id": "ny", "name": "New Year", "type": "fixed", "rule": {"month": 1, "day": 1},
         "observedRule": {"type": "nearest-weekday", "weekends": [0, 6]}},
        {"id": "tg", "name": "Thanksgiving", "type": "nth-weekday", "rule": {"month": 11, "weekday": 4, "nth": 4}},
        {"id": "bf", "name": "Black Friday", "type": "relative", "rule": {"relativeTo": "tg", "offset": 1},
         "active": False},
        {"id": "gf", "name": "Good Friday", "type": "easter-based", "rule": {"offset": -2}},
        {"id": "cny", "name": "Spring Festival", "type": "lunar",
         "rule": {"calendar": "chinese", "month": 1, "day": 1}, "duration": 3, "regions": ["CN"]},
    ])
    assert [r.kind for r in rules] == ["fixed", "nth-weekday", "relative", "easter-based", "lunar"]
    assert rules[0].observed_rule.policy == "nearest-weekday"
    assert rules[2].active is False
    assert rules[2].payload.relative_to_id == "tg"
    assert rules[3].payload.offset_days == -2
    assert rules[4].duration == 3
    assert rules[4].regions == ("CN",)


@pytest.mark.parametrize(
    "data",
    [
        {"id": "x", "type": "fixed", "rule": {"month": 1}},
        {"id": "x", "type": "fixed", "rule": {"month": 2, "day": 30}},
        {"id": "x", "type": "mystery", "rule": {}},
        {"id": "x", "type": "custom", "rule": {}},
        {"id": "x"},
    ],
)
def test_from_dict_rejects_malformed(data):
    with pytest.raises(InvalidRuleError) as ei:
        HolidayRule.from_dict(data)
    assert ei.value.rule_id == "x"
