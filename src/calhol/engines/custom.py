from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List

from ..core.errors import InvalidRuleError
from ..core.types import CustomRule
from .interfaces import CalcContext

_LOGGER = logging.getLogger(__name__)


def _as_date(value, rule_id: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidRuleError(f"compute() returned {type(value).__name__}, expected date", rule_id=rule_id)


def calculate(payload: CustomRule, year: int, ctx: CalcContext) -> List[date]:
    # user code: exceptions propagate untouched
    result = payload.compute(year)
    if result is None:
        return []
    if isinstance(result, date):
        dates = [_as_date(result, ctx.rule_id)]
    else:
        try:
            items = list(result)
        except TypeError:
            raise InvalidRuleError(
                f"compute() returned {type(result).__name__}, expected date or iterable of dates",
                rule_id=ctx.rule_id,
            ) from None
        dates = [_as_date(v, ctx.rule_id) for v in items]

    kept = sorted({d for d in dates if d.year == year})
    if len(kept) != len(set(dates)):
        _LOGGER.debug("Custom rule %s: dropped dates outside %d", ctx.rule_id, year)
    return kept
