"""
calhol.core.ruleset
-------------------
An ordered, id-unique collection of HolidayRule values.

Every mutation bumps `version`, which feeds the fingerprint the resolution
cache keys on, so cached results never outlive the rules they came from.
"""

from __future__ import annotations

import hashlib
import uuid
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import InvalidRuleError
from .types import HolidayRule


class RuleSet:
    def __init__(self, rules: Iterable[HolidayRule] = (), *, name: Optional[str] = None):
        self.name = name
        self._token = uuid.uuid4().hex
        self._rules: Dict[str, HolidayRule] = {}
        self._version = 0
        for rule in rules:
            self.add(rule)

    # ---------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------

    def add(self, rule: HolidayRule) -> None:
        if not isinstance(rule, HolidayRule):
            raise InvalidRuleError(f"expected HolidayRule, got {type(rule).__name__}")
        if rule.id in self._rules:
            raise InvalidRuleError("duplicate id in rule set", rule_id=rule.id)
        self._rules[rule.id] = rule
        self._version += 1

    def remove(self, rule_id: str) -> HolidayRule:
        if rule_id not in self._rules:
            raise KeyError(f"Unknown rule '{rule_id}'")
        rule = self._rules.pop(rule_id)
        self._version += 1
        return rule

    def set_active(self, rule_id: str, active: bool) -> None:
        rule = self.get(rule_id)
        if rule.active == active:
            return
        # dict assignment keeps the registration position
        self._rules[rule_id] = replace(rule, active=active)
        self._version += 1

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def get(self, rule_id: str) -> HolidayRule:
        if rule_id not in self._rules:
            raise KeyError(f"Unknown rule '{rule_id}'. Available: {sorted(self._rules)}")
        return self._rules[rule_id]

    def find(self, rule_id: str) -> Optional[HolidayRule]:
        return self._rules.get(rule_id)

    def active_rules(self) -> List[HolidayRule]:
        return [r for r in self._rules.values() if r.active]

    def ids(self) -> List[str]:
        return list(self._rules)

    def for_region(self, region: str) -> "RuleSet":
        """Rules with no region restriction plus those listing `region`."""
        keep = [r for r in self._rules.values() if not r.regions or region in r.regions]
        name = f"{self.name}:{region}" if self.name else region
        return RuleSet(keep, name=name)

    @property
    def version(self) -> int:
        return self._version

    @property
    def fingerprint(self) -> str:
        active = ",".join(r.id for r in self._rules.values() if r.active)
        raw = f"{self._token}:{self._version}:{active}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:16]

    def __iter__(self) -> Iterator[HolidayRule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __repr__(self) -> str:
        return f"RuleSet(name={self.name!r}, rules={len(self._rules)}, version={self._version})"
