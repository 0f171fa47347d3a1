from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmploymentStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee linked to an identity-provider user.

    Plain data object, no DB access.
    """

    employee_id: int
    user_id: str
    employee_code: str
    first_name: str
    last_name: str
    role: Role
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    department: Optional[str] = None
    designation: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE
