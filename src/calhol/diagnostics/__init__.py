"""Diagnostics package.

- year_table, round_trip: always available, stdlib only
- lunar_scatter: optional (requires the diagnostics extra: numpy, matplotlib)
"""

__all__ = ["year_table", "round_trip", "lunar_scatter"]
