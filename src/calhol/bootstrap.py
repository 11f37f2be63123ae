from __future__ import annotations
from calhol.core.engine import RuleSetRegistry
from calhol.core.ruleset import RuleSet
from calhol.engines.specs import ALL_RULESETS


def build_registry() -> RuleSetRegistry:
    rulesets = {}
    for name, rules in ALL_RULESETS.items():
        rulesets[name] = RuleSet(rules, name=name)
    return RuleSetRegistry(rulesets)
