from __future__ import annotations

from typing import Optional

from ..core.enums import EmploymentStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, user_id, employee_code, first_name, last_name,
    role, employment_status, department, designation
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        user_id=str(row["user_id"]),
        employee_code=row["employee_code"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
        employment_status=EmploymentStatus(row["employment_status"]),
        department=row.get("department"),
        designation=row.get("designation"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None
