from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide(self, *, working_minutes: int, local_check_in: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Checked in at {local_check_in:%H:%M}")
