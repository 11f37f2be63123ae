from __future__ import annotations

from datetime import date
from typing import List

from ..core.time import nth_weekday_of_month
from ..core.types import NthWeekdayRule
from .interfaces import CalcContext


def calculate(payload: NthWeekdayRule, year: int, ctx: CalcContext) -> List[date]:
    d = nth_weekday_of_month(year, payload.month, payload.weekday, payload.nth)
    return [] if d is None else [d]
