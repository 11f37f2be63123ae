"""
calhol.engines.interfaces
-------------------------
Boundaries between the resolver and the per-variant calculators.

A calculator maps (payload, Gregorian year, context) to the raw dates the
rule denotes that year. It never applies observance; that is the resolver's
job. Relative calculators reach other rules only through the context.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Protocol, Tuple

from ..core.types import EngineConfig, RulePayload


@dataclass(frozen=True)
class CalcContext:
    """
    Per-call state handed to calculators.

    `stack` is the chain of rule ids currently being resolved, outermost
    first; `resolve(rule_id, year, stack)` returns the nominal dates of
    another rule in the same rule set.
    """
    rule_id: str
    config: EngineConfig
    stack: Tuple[str, ...]
    resolve: Callable[[str, int, Tuple[str, ...]], List[date]]


class CalculatorProtocol(Protocol):
    def __call__(self, payload: RulePayload, year: int, ctx: CalcContext) -> List[date]:
        """Raw (nominal) dates for `year`; an empty list means no occurrence."""
        ...


class LunarConverterProtocol(Protocol):
    """Module-level API shared by calhol.calendars.*"""

    def to_jdn(self, year: int, month: int, day: int) -> int:
        ...

    def from_jdn(self, jdn: int) -> Tuple[int, int, int]:
        ...

    def month_length(self, year: int, month: int) -> int:
        ...

    def months_in_year(self, year: int) -> int:
        ...

    def jdn_range(self) -> Tuple[int, int]:
        """First and last JDN the converter can represent."""
        ...
