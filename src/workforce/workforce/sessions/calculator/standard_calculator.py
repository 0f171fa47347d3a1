from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from ...core.constants import DEFAULT_STANDARD_SHIFT_HOURS
from .base import WorkingHoursCalculator


class StandardHoursCalculator(WorkingHoursCalculator):
    """Standard rule: (end - start) - breaks, not below 0; overtime past the shift."""

    def __init__(self, standard_shift_hours: float = DEFAULT_STANDARD_SHIFT_HOURS):
        self._shift_minutes = int(round(float(standard_shift_hours) * 60))

    @property
    def shift_minutes(self) -> int:
        return self._shift_minutes

    def working_minutes(self, *, start: datetime, end: datetime, break_minutes: int) -> int:
        minutes = minutes_between(start, end) - int(break_minutes or 0)
        return max(minutes, 0)

    def overtime_minutes(self, working_minutes: int) -> int:
        return max(int(working_minutes) - self._shift_minutes, 0)
