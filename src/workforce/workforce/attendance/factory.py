from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import HALF_DAY_THRESHOLD_HOURS, LATE_AFTER_HOUR
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    half_day_threshold_hours: float = HALF_DAY_THRESHOLD_HOURS
    late_after_hour: int = LATE_AFTER_HOUR

    def for_session(self, *, working_minutes: int, local_check_in: datetime) -> AttendanceStrategy:
        if working_minutes < self.half_day_threshold_hours * 60:
            return HalfDayStrategy()
        if local_check_in.hour > self.late_after_hour:
            return LateStrategy()
        return PresentStrategy()
