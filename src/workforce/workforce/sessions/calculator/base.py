from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HoursBreakdown:
    working_minutes: int
    overtime_minutes: int


class WorkingHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def working_minutes(self, *, start: datetime, end: datetime, break_minutes: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def overtime_minutes(self, working_minutes: int) -> int:
        raise NotImplementedError

    def breakdown(self, *, start: datetime, end: datetime, break_minutes: int) -> HoursBreakdown:
        worked = self.working_minutes(start=start, end=end, break_minutes=break_minutes)
        return HoursBreakdown(working_minutes=worked, overtime_minutes=self.overtime_minutes(worked))
