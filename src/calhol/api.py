from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .core.engine import RuleSetRegistry
from .core.ruleset import RuleSet
from .core.types import EngineConfig, HolidayOccurrence, HolidayRule
from .engines import lunar as _lunar
from .engines.easter import easter_sunday
from .engines.resolver import HolidayEngine

RuleSource = Union[str, RuleSet, Sequence[HolidayRule]]

_registry: Optional[RuleSetRegistry] = None
_engine: Optional[HolidayEngine] = None


def set_registry(reg: RuleSetRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> RuleSetRegistry:
    if _registry is None:
        raise RuntimeError("Rule set registry not initialized")
    return _registry


def set_engine(engine: HolidayEngine) -> None:
    global _engine
    _engine = engine


def get_engine() -> HolidayEngine:
    global _engine
    if _engine is None:
        _engine = HolidayEngine()
    return _engine


def configure(*, gregorian_cutover: int = 1583, search_years: int = 50) -> HolidayEngine:
    """Replace the default engine; its cache starts empty."""
    eng = HolidayEngine(config=EngineConfig(gregorian_cutover=gregorian_cutover, search_years=search_years))
    set_engine(eng)
    return eng


def _rules(ruleset: RuleSource) -> Union[RuleSet, Sequence[HolidayRule]]:
    if isinstance(ruleset, str):
        return _reg().get(ruleset)
    return ruleset


# ============================================================
# Named rule sets
# ============================================================

def list_rulesets() -> List[str]:
    return _reg().list()


def get_ruleset(name: str) -> RuleSet:
    return _reg().get(name)


def register_ruleset(name: str, rules: Union[RuleSet, Sequence[HolidayRule]], *, overwrite: bool = False) -> RuleSet:
    return _reg().register(name, rules, overwrite=overwrite)


# ============================================================
# Queries
# ============================================================

def occurrences_for_year(year: int, *, ruleset: RuleSource = "us") -> List[HolidayOccurrence]:
    return get_engine().occurrences_for_year(_rules(ruleset), year)


def occurrences_in_range(start: date, end: date, *, ruleset: RuleSource = "us") -> List[HolidayOccurrence]:
    return get_engine().occurrences_in_range(_rules(ruleset), start, end)


def is_holiday(d: date, *, ruleset: RuleSource = "us") -> Optional[HolidayOccurrence]:
    return get_engine().is_holiday(_rules(ruleset), d)


def next_holiday(after: date, *, ruleset: RuleSource = "us", strict: bool = False) -> Optional[HolidayOccurrence]:
    return get_engine().next_holiday(_rules(ruleset), after, strict=strict)


def previous_holiday(before: date, *, ruleset: RuleSource = "us", strict: bool = False) -> Optional[HolidayOccurrence]:
    return get_engine().previous_holiday(_rules(ruleset), before, strict=strict)


def easter(year: int, *, method: str = "western") -> date:
    return easter_sunday(year, method, get_engine().config.gregorian_cutover)


# ============================================================
# Calendar conversion
# ============================================================

def to_gregorian(calendar: str, year: int, month: int, day: int, *, leap_month: bool = False) -> date:
    return _lunar.to_gregorian(calendar, year, month, day, leap_month=leap_month)


def from_gregorian(calendar: str, d: date) -> Tuple[int, int, int]:
    return _lunar.from_gregorian(calendar, d)


def cache_stats() -> Dict[str, Dict[str, Any]]:
    return get_engine().cache.stats()
