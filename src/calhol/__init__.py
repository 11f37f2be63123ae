"""calhol public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    occurrences_for_year,
    occurrences_in_range,
    is_holiday,
    next_holiday,
    previous_holiday,
    easter,
    to_gregorian,
    from_gregorian,
    list_rulesets,
    get_ruleset,
    register_ruleset,
    configure,
    get_engine,
    cache_stats,
)
from .core.errors import (
    CalholError,
    InvalidRuleError,
    UnresolvableReferenceError,
    CircularDependencyError,
    CalculationOverflowError,
    OutOfRangeError,
)
from .core.ruleset import RuleSet
from .core.cache import ResolutionCache
from .core.types import (
    FixedRule,
    NthWeekdayRule,
    EasterRule,
    LunarRule,
    RelativeRule,
    CustomRule,
    ObservedRule,
    HolidayRule,
    HolidayOccurrence,
    EngineConfig,
    rules_from_dicts,
)
from .engines.resolver import HolidayEngine

__all__ = [
    "occurrences_for_year",
    "occurrences_in_range",
    "is_holiday",
    "next_holiday",
    "previous_holiday",
    "easter",
    "to_gregorian",
    "from_gregorian",
    "list_rulesets",
    "get_ruleset",
    "register_ruleset",
    "configure",
    "get_engine",
    "cache_stats",
    "CalholError",
    "InvalidRuleError",
    "UnresolvableReferenceError",
    "CircularDependencyError",
    "CalculationOverflowError",
    "OutOfRangeError",
    "RuleSet",
    "ResolutionCache",
    "FixedRule",
    "NthWeekdayRule",
    "EasterRule",
    "LunarRule",
    "RelativeRule",
    "CustomRule",
    "ObservedRule",
    "HolidayRule",
    "HolidayOccurrence",
    "EngineConfig",
    "rules_from_dicts",
    "HolidayEngine",
]
