"""
calhol.engines.factory
----------------------
Builds the fixed payload-type -> calculator table the resolver dispatches on.
"""

from __future__ import annotations

from typing import Dict

from ..core.types import (
    PAYLOAD_TYPES,
    CustomRule,
    EasterRule,
    FixedRule,
    LunarRule,
    NthWeekdayRule,
    RelativeRule,
)
from . import custom, easter, fixed, lunar, nth_weekday, relative
from .interfaces import CalculatorProtocol


def build_dispatch_table() -> Dict[type, CalculatorProtocol]:
    table: Dict[type, CalculatorProtocol] = {
        FixedRule: fixed.calculate,
        NthWeekdayRule: nth_weekday.calculate,
        EasterRule: easter.calculate,
        LunarRule: lunar.calculate,
        RelativeRule: relative.calculate,
        CustomRule: custom.calculate,
    }
    missing = set(PAYLOAD_TYPES) - set(table)
    if missing:
        raise TypeError(f"No calculator for payload types: {sorted(t.__name__ for t in missing)}")
    return table
