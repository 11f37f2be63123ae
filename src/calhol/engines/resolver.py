"""
calhol.engines.resolver
-----------------------
The orchestrator. Owns the dispatch table and the injected cache, evaluates
every active rule of a rule set for a year, applies observance, and answers
point / range / next / previous queries.

Relative rules re-enter the resolver through CalcContext.resolve with an
explicit stack of rule ids in progress; a repeat on that stack is a cycle.
"""

from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR, date
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, Union

from ..core.cache import MISSING, ResolutionCache
from ..core.errors import (
    CalculationOverflowError,
    CircularDependencyError,
    OutOfRangeError,
    UnresolvableReferenceError,
)
from ..core.ruleset import RuleSet
from ..core.types import EngineConfig, HolidayOccurrence, HolidayRule
from .factory import build_dispatch_table
from .interfaces import CalcContext
from .observed import adjust

_LOGGER = logging.getLogger(__name__)

Rules = Union[RuleSet, Sequence[HolidayRule]]
_Memo = Dict[Tuple[str, int], List[date]]


def _valid_years(years: Iterable[int]) -> List[int]:
    return [y for y in years if MINYEAR <= y <= MAXYEAR]


class HolidayEngine:
    def __init__(self, cache: Optional[ResolutionCache] = None, config: Optional[EngineConfig] = None):
        self.cache = cache if cache is not None else ResolutionCache()
        self.config = config if config is not None else EngineConfig()
        self._dispatch = build_dispatch_table()

    # ---------------------------------------------------------
    # Rule evaluation
    # ---------------------------------------------------------

    def _prepare(self, rules: Rules) -> Tuple[RuleSet, Hashable]:
        if isinstance(rules, RuleSet):
            return rules, (rules.fingerprint, self.config)
        snapshot = tuple(rules)
        return RuleSet(snapshot), (("rules", snapshot), self.config)

    def _resolve(self, rules: RuleSet, memo: _Memo, rule_id: str, year: int, stack: Tuple[str, ...]) -> List[date]:
        if rule_id in stack:
            raise CircularDependencyError(stack[stack.index(rule_id):] + (rule_id,))

        key = (rule_id, year)
        if key in memo:
            return list(memo[key])

        rule = rules.find(rule_id)
        if rule is None:
            raise UnresolvableReferenceError(stack[-1] if stack else rule_id, rule_id)

        ctx = CalcContext(
            rule_id=rule_id,
            config=self.config,
            stack=stack,
            resolve=lambda rid, y, st: self._resolve(rules, memo, rid, y, st),
        )
        calc = self._dispatch[type(rule.payload)]
        dates = sorted(set(calc(rule.payload, year, ctx)))
        memo[key] = dates
        return list(dates)

    def raw_dates(self, rules: Rules, rule_id: str, year: int) -> List[date]:
        """Nominal dates of one rule for `year`, before observance."""
        rs, _ = self._prepare(rules)
        return self._resolve(rs, {}, rule_id, year, ())

    @staticmethod
    def _observe(rule: HolidayRule, raw: date) -> List[HolidayOccurrence]:
        common = dict(
            rule_id=rule.id,
            name=rule.name,
            kind=rule.kind,
            calendar_date=raw,
            regions=rule.regions,
        )
        if rule.observed_rule is None:
            return [HolidayOccurrence(duration=rule.duration, **common)]

        obs = adjust(raw, rule.observed_rule)
        out = [
            HolidayOccurrence(
                observed_date=obs.date if obs.is_observed else None,
                is_observed=obs.is_observed,
                duration=rule.duration,
                **common,
            )
        ]
        for bridge in obs.bridge_dates:
            out.append(HolidayOccurrence(observed_date=bridge, is_observed=True, **common))
        return out

    def _year(self, rs: RuleSet, key: Hashable, year: int) -> Tuple[HolidayOccurrence, ...]:
        cached = self.cache.get_year(key, year)
        if cached is not None:
            _LOGGER.debug("Year cache hit for %s/%d", rs.name or "rules", year)
            return cached

        memo: _Memo = {}
        tagged: List[Tuple[int, HolidayOccurrence]] = []
        for order, rule in enumerate(rs):
            if not rule.active:
                continue
            for raw in self._resolve(rs, memo, rule.id, year, ()):
                tagged.extend((order, occ) for occ in self._observe(rule, raw))

        tagged.sort(key=lambda t: (t[1].date, t[0]))
        result = tuple(occ for _, occ in tagged)
        self.cache.put_year(key, year, result)
        _LOGGER.debug("Resolved %d occurrences for %s/%d", len(result), rs.name or "rules", year)
        return result

    def _span(self, rs: RuleSet, key: Hashable, first: int, last: int) -> List[HolidayOccurrence]:
        """
        Occurrences of years `first`..`last` plus one neighbouring year on each side.

        A neighbour that a rule's calendar cannot represent is skipped; the
        years asked for still raise OutOfRangeError.
        """
        out: List[HolidayOccurrence] = []
        for y in _valid_years(range(first - 1, last + 2)):
            try:
                out.extend(self._year(rs, key, y))
            except OutOfRangeError:
                if first <= y <= last:
                    raise
                _LOGGER.debug("Skipping neighbour year %d of %s: out of calendar range", y, rs.name or "rules")
        return out

    # ---------------------------------------------------------
    # Public queries
    # ---------------------------------------------------------

    def occurrences_for_year(self, rules: Rules, year: int) -> List[HolidayOccurrence]:
        rs, key = self._prepare(rules)
        return list(self._year(rs, key, year))

    def occurrences_in_range(self, rules: Rules, start: date, end: date) -> List[HolidayOccurrence]:
        if end < start:
            raise ValueError("end must be >= start")
        rs, key = self._prepare(rules)
        out = [o for o in self._span(rs, key, start.year, end.year) if start <= o.date <= end]
        out.sort(key=lambda o: o.date)
        return out

    def is_holiday(self, rules: Rules, d: date) -> Optional[HolidayOccurrence]:
        """
        The occurrence covering `d`, or None.

        Occurrences of the neighbouring years are searched too, since a
        multi-day or shifted holiday can spill across a year boundary.
        """
        rs, key = self._prepare(rules)
        cached = self.cache.get_point(key, d)
        if cached is not MISSING:
            return cached

        hits = [o for o in self._span(rs, key, d.year, d.year) if o.covers(d)]
        result = min(hits, key=lambda o: o.date) if hits else None
        self.cache.put_point(key, d, result)
        return result

    def next_holiday(self, rules: Rules, after: date, *, strict: bool = False) -> Optional[HolidayOccurrence]:
        """First occurrence strictly after `after`, searching at most search_years years."""
        rs, key = self._prepare(rules)
        bound = self.config.search_years
        for y in _valid_years(range(after.year, after.year + bound)):
            found = [
                o
                for o in self._span(rs, key, y, y)
                if o.date > after and o.date.year <= y
            ]
            if found:
                return min(found, key=lambda o: o.date)
        return self._exhausted("next", after, bound, strict)

    def previous_holiday(self, rules: Rules, before: date, *, strict: bool = False) -> Optional[HolidayOccurrence]:
        """Last occurrence strictly before `before`, searching at most search_years years."""
        rs, key = self._prepare(rules)
        bound = self.config.search_years
        for y in _valid_years(range(before.year, before.year - bound, -1)):
            found = [
                o
                for o in self._span(rs, key, y, y)
                if o.date < before and o.date.year >= y
            ]
            if found:
                return max(found, key=lambda o: o.date)
        return self._exhausted("previous", before, bound, strict)

    @staticmethod
    def _exhausted(which: str, origin: date, bound: int, strict: bool) -> None:
        _LOGGER.debug("No %s holiday within %d years of %s", which, bound, origin)
        if strict:
            raise CalculationOverflowError(
                f"No {which} holiday within {bound} years of {origin.isoformat()}", bound=bound
            )
        return None
