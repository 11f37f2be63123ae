from __future__ import annotations

import logging
from datetime import date
from typing import List

from ..core.time import shift
from ..core.types import RelativeRule
from .interfaces import CalcContext

_LOGGER = logging.getLogger(__name__)


def calculate(payload: RelativeRule, year: int, ctx: CalcContext) -> List[date]:
    """Shift every nominal date of the target rule by offset_days.

    The target is resolved through the engine with this rule pushed on the
    resolution stack, which is where cycles are caught. A shifted date that
    leaves year 1..9999 is dropped.
    """
    base = ctx.resolve(payload.relative_to_id, year, ctx.stack + (ctx.rule_id,))
    out: List[date] = []
    for d in base:
        moved = shift(d, payload.offset_days)
        if moved is None:
            _LOGGER.debug("Relative rule %s: %s%+d days is out of range, dropped", ctx.rule_id, d, payload.offset_days)
            continue
        out.append(moved)
    return out
