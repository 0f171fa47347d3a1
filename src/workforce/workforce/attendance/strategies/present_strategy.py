from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time check-in with at least a half day worked."""

    def decide(self, *, working_minutes: int, local_check_in: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
