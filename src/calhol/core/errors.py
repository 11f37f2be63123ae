from __future__ import annotations

from typing import Optional, Sequence, Tuple


class CalholError(Exception):
    """Base error."""


class InvalidRuleError(CalholError, ValueError):
    """Raised when a rule payload is malformed (month out of range, bad nth, ...)."""

    def __init__(self, message: str, *, rule_id: Optional[str] = None):
        self.rule_id = rule_id
        if rule_id is not None:
            message = f"Invalid rule '{rule_id}': {message}"
        super().__init__(message)


class UnresolvableReferenceError(CalholError, LookupError):
    """Raised when a relative rule points at an id that is not in the rule set."""

    def __init__(self, rule_id: str, target_id: str):
        self.rule_id = rule_id
        self.target_id = target_id
        super().__init__(f"Rule '{rule_id}' is relative to unknown rule '{target_id}'")


class CircularDependencyError(CalholError):
    """Raised when relative rules form a cycle. `cycle` repeats the first id at the end."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle: Tuple[str, ...] = tuple(cycle)
        super().__init__("Circular dependency between holiday rules: " + " -> ".join(self.cycle))


class CalculationOverflowError(CalholError):
    """Raised by a strict next/previous search that exhausted its year bound."""

    def __init__(self, message: str, *, bound: int):
        self.bound = bound
        super().__init__(message)


class OutOfRangeError(CalholError, ValueError):
    """Raised when a calendar converter is asked for a year it cannot represent."""
