from __future__ import annotations

from datetime import date
from typing import List

from ..core.time import days_in_month
from ..core.types import FixedRule
from .interfaces import CalcContext


def calculate(payload: FixedRule, year: int, ctx: CalcContext) -> List[date]:
    # Feb 29 simply has no occurrence outside leap years
    if payload.day > days_in_month(year, payload.month):
        return []
    return [date(year, payload.month, payload.day)]
