from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Union

from .ruleset import RuleSet
from .types import HolidayRule


@dataclass
class RuleSetRegistry:
    _rulesets: Dict[str, RuleSet]

    def get(self, name: str) -> RuleSet:
        if name not in self._rulesets:
            raise KeyError(f"Unknown rule set '{name}'. Available: {sorted(self._rulesets)}")
        return self._rulesets[name]

    def list(self) -> List[str]:
        return sorted(self._rulesets.keys())

    def register(self, name: str, rules: Union[RuleSet, Iterable[HolidayRule]], *, overwrite: bool = False) -> RuleSet:
        if (not overwrite) and (name in self._rulesets):
            raise KeyError(f"Rule set '{name}' already exists. Use overwrite=True to replace.")
        rs = rules if isinstance(rules, RuleSet) else RuleSet(rules, name=name)
        self._rulesets[name] = rs
        return rs
