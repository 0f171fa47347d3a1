from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Worked less than the half-day threshold, regardless of arrival time."""

    def decide(self, *, working_minutes: int, local_check_in: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
