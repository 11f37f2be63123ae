from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Iterable, List, Literal, Optional, Tuple, Union

from .errors import InvalidRuleError

ObservancePolicy = Literal["substitute", "bridge", "nearest-weekday"]
Direction = Literal["forward", "backward", "nearest"]
BridgeMode = Literal["weekend", "gap"]
LunarCalendarName = Literal["islamic", "chinese", "hebrew", "persian"]
EasterMethod = Literal["western", "orthodox"]

LUNAR_CALENDARS: Tuple[str, ...] = ("islamic", "chinese", "hebrew", "persian")

# Longest each Gregorian month can be, in any year
_MAX_MONTH_DAYS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _check_int(name: str, value: Any, lo: Optional[int] = None, hi: Optional[int] = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRuleError(f"{name} must be an integer, got {value!r}")
    if lo is not None and value < lo:
        raise InvalidRuleError(f"{name} must be >= {lo}, got {value}")
    if hi is not None and value > hi:
        raise InvalidRuleError(f"{name} must be <= {hi}, got {value}")


# ============================================================
# Rule payloads (closed variant set)
# ============================================================

@dataclass(frozen=True)
class FixedRule:
    month: int
    day: int

    kind: ClassVar[str] = "fixed"

    def __post_init__(self) -> None:
        _check_int("month", self.month, 1, 12)
        _check_int("day", self.day, 1, 31)
        if self.day > _MAX_MONTH_DAYS[self.month - 1]:
            raise InvalidRuleError(f"day {self.day} never occurs in month {self.month}")


@dataclass(frozen=True)
class NthWeekdayRule:
    """nth in 1..5 counts from the start of the month; -1 is the last occurrence."""
    month: int
    weekday: int  # 0=Sunday
    nth: int

    kind: ClassVar[str] = "nth-weekday"

    def __post_init__(self) -> None:
        _check_int("month", self.month, 1, 12)
        _check_int("weekday", self.weekday, 0, 6)
        _check_int("nth", self.nth)
        if not (1 <= self.nth <= 5 or self.nth == -1):
            raise InvalidRuleError(f"nth must be 1..5 or -1, got {self.nth}")


@dataclass(frozen=True)
class EasterRule:
    offset_days: int = 0
    method: EasterMethod = "western"

    kind: ClassVar[str] = "easter-based"

    def __post_init__(self) -> None:
        _check_int("offset_days", self.offset_days)
        if self.method not in ("western", "orthodox"):
            raise InvalidRuleError(f"method must be 'western' or 'orthodox', got {self.method!r}")


@dataclass(frozen=True)
class LunarRule:
    """
    month/day in the source calendar's own numbering.

    Hebrew months follow Nisan=1 .. Adar=12, Adar II=13. `leap_month` selects
    the intercalary instance of a Chinese month.
    """
    calendar: LunarCalendarName
    month: int
    day: int
    leap_month: bool = False

    kind: ClassVar[str] = "lunar"

    def __post_init__(self) -> None:
        if self.calendar not in LUNAR_CALENDARS:
            raise InvalidRuleError(f"calendar must be one of {LUNAR_CALENDARS}, got {self.calendar!r}")
        _check_int("month", self.month, 1, 13 if self.calendar == "hebrew" else 12)
        _check_int("day", self.day, 1, 31 if self.calendar == "persian" else 30)
        if self.leap_month and self.calendar != "chinese":
            raise InvalidRuleError("leap_month is only meaningful for the chinese calendar")


@dataclass(frozen=True)
class RelativeRule:
    relative_to_id: str
    offset_days: int = 0

    kind: ClassVar[str] = "relative"

    def __post_init__(self) -> None:
        if not isinstance(self.relative_to_id, str) or not self.relative_to_id:
            raise InvalidRuleError("relative_to_id must be a non-empty string")
        _check_int("offset_days", self.offset_days)


@dataclass(frozen=True)
class CustomRule:
    """compute(year) returns a date or an iterable of dates."""
    compute: Callable[[int], Union[date, Iterable[date]]]

    kind: ClassVar[str] = "custom"

    def __post_init__(self) -> None:
        if not callable(self.compute):
            raise InvalidRuleError("compute must be callable")


RulePayload = Union[FixedRule, NthWeekdayRule, EasterRule, LunarRule, RelativeRule, CustomRule]
PAYLOAD_TYPES: Tuple[type, ...] = (FixedRule, NthWeekdayRule, EasterRule, LunarRule, RelativeRule, CustomRule)


# ============================================================
# Observance
# ============================================================

_DEFAULT_DIRECTION: Dict[str, str] = {
    "substitute": "forward",
    "nearest-weekday": "nearest",
    "bridge": "forward",
}


@dataclass(frozen=True)
class ObservedRule:
    """
    How a holiday landing on a weekend day is observed.

    `direction` defaults per policy (substitute: forward, nearest-weekday:
    nearest, bridge: forward, or nearest for gap bridging). Nearest ties go
    backward. `bridge` picks the bridge day selection:
      weekend -> a weekend holiday adds the adjacent non-weekend day;
      gap     -> a weekday holiday one day off the weekend adds the day between.
    """
    policy: ObservancePolicy
    weekend_days: FrozenSet[int] = frozenset({0, 6})
    direction: Optional[Direction] = None
    bridge: BridgeMode = "weekend"

    def __post_init__(self) -> None:
        if self.policy not in _DEFAULT_DIRECTION:
            raise InvalidRuleError(f"policy must be one of {sorted(_DEFAULT_DIRECTION)}, got {self.policy!r}")
        days = frozenset(self.weekend_days)
        for wd in days:
            _check_int("weekend day", wd, 0, 6)
        if len(days) == 7:
            raise InvalidRuleError("weekend_days cannot cover the whole week")
        object.__setattr__(self, "weekend_days", days)
        if self.direction is not None and self.direction not in ("forward", "backward", "nearest"):
            raise InvalidRuleError(f"direction must be forward, backward or nearest, got {self.direction!r}")
        if self.bridge not in ("weekend", "gap"):
            raise InvalidRuleError(f"bridge must be 'weekend' or 'gap', got {self.bridge!r}")

    @property
    def effective_direction(self) -> str:
        if self.direction is not None:
            return self.direction
        if self.policy == "bridge" and self.bridge == "gap":
            return "nearest"
        return _DEFAULT_DIRECTION[self.policy]


# ============================================================
# Rules and occurrences
# ============================================================

@dataclass(frozen=True)
class HolidayRule:
    id: str
    name: str
    payload: RulePayload
    observed_rule: Optional[ObservedRule] = None
    duration: int = 1
    active: bool = True
    regions: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidRuleError("id must be a non-empty string")
        if not isinstance(self.payload, PAYLOAD_TYPES):
            raise InvalidRuleError(f"unknown payload type {type(self.payload).__name__}", rule_id=self.id)
        if self.observed_rule is not None and not isinstance(self.observed_rule, ObservedRule):
            raise InvalidRuleError("observed_rule must be an ObservedRule", rule_id=self.id)
        try:
            _check_int("duration", self.duration, 1)
        except InvalidRuleError as e:
            raise InvalidRuleError(str(e), rule_id=self.id) from None
        object.__setattr__(self, "regions", tuple(self.regions))

    @property
    def kind(self) -> str:
        return self.payload.kind

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HolidayRule":
        """
        Build a rule from the declarative shape used by holiday data files:

            {"id": "black-friday", "name": "Black Friday", "type": "relative",
             "rule": {"relativeTo": "thanksgiving", "offset": 1}}
        """
        rule_id = data.get("id") or data.get("name")
        try:
            kind = data["type"]
            body = data.get("rule") or {}
            if kind == "fixed":
                payload: RulePayload = FixedRule(month=body["month"], day=body["day"])
            elif kind == "nth-weekday":
                payload = NthWeekdayRule(month=body["month"], weekday=body["weekday"], nth=body["nth"])
            elif kind == "easter-based":
                payload = EasterRule(offset_days=body.get("offset", 0), method=body.get("method", "western"))
            elif kind == "lunar":
                payload = LunarRule(
                    calendar=body["calendar"],
                    month=body["month"],
                    day=body["day"],
                    leap_month=bool(body.get("leapMonth", False)),
                )
            elif kind == "relative":
                payload = RelativeRule(relative_to_id=body["relativeTo"], offset_days=body.get("offset", 0))
            elif kind == "custom":
                raise InvalidRuleError("custom rules cannot be loaded from data")
            else:
                raise InvalidRuleError(f"unknown rule type {kind!r}")

            observed = None
            obs = data.get("observedRule")
            if obs:
                observed = ObservedRule(
                    policy=obs["type"],
                    weekend_days=frozenset(obs.get("weekends", (0, 6))),
                    direction=obs.get("direction"),
                    bridge=obs.get("bridge", "weekend"),
                )
            return cls(
                id=rule_id,
                name=data.get("name", rule_id),
                payload=payload,
                observed_rule=observed,
                duration=data.get("duration", 1),
                active=data.get("active", True),
                regions=tuple(data.get("regions", ())),
            )
        except KeyError as e:
            raise InvalidRuleError(f"missing field {e.args[0]!r}", rule_id=rule_id) from None
        except InvalidRuleError as e:
            if e.rule_id is None and rule_id is not None:
                raise InvalidRuleError(str(e), rule_id=rule_id) from None
            raise


def rules_from_dicts(items: Iterable[Dict[str, Any]]) -> List[HolidayRule]:
    return [HolidayRule.from_dict(item) for item in items]


@dataclass(frozen=True)
class HolidayOccurrence:
    rule_id: str
    name: str
    kind: str
    calendar_date: date
    observed_date: Optional[date] = None
    is_observed: bool = False
    duration: int = 1
    regions: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def date(self) -> date:
        """The date the holiday is actually recognized on."""
        return self.observed_date if self.observed_date is not None else self.calendar_date

    @property
    def span(self) -> Tuple[date, ...]:
        """Every day the holiday covers; truncated at date.max."""
        return tuple(self.date + timedelta(days=i) for i in range((self.end - self.date).days + 1))

    @property
    def end(self) -> date:
        """Last covered day, clamped to date.max."""
        left = (date.max - self.date).days
        return self.date + timedelta(days=min(self.duration - 1, left))

    def covers(self, d: date) -> bool:
        return self.date <= d <= self.end


@dataclass(frozen=True)
class EngineConfig:
    gregorian_cutover: int = 1583
    search_years: int = 50

    def __post_init__(self) -> None:
        if self.gregorian_cutover < 1:
            raise ValueError("gregorian_cutover must be a positive year")
        if self.search_years < 1:
            raise ValueError("search_years must be >= 1")
