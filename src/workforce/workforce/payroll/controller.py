from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import Flask, jsonify, request

from ..common.web import current_employee, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..permissions.guards import require_permission
from ..permissions.model import PermissionAction, PermissionModule


def register(app: Flask, container: Container) -> None:
    calc = container.attendance_calculation_service

    @app.route("/api/payroll/attendance/<int:month>/<int:year>", methods=["GET"], endpoint="payroll_attendance")
    @login_required
    @require_permission(PermissionModule.PAYROLL, PermissionAction.VIEW)
    def payroll_attendance(month: int, year: int):
        days = calc.absent_days(current_employee().employee_id, month, year)
        payload = {
            "month": month,
            "year": year,
            "totalWorkingDays": days.total_working_days,
            "presentDays": float(days.present_days),
            "paidLeaveDays": float(days.paid_leave_days),
            "unpaidLeaveDays": float(days.unpaid_leave_days),
            "absentDays": float(days.absent_days),
        }

        gross = request.args.get("gross")
        if gross is not None:
            try:
                gross_salary = Decimal(gross)
            except InvalidOperation:
                raise ValidationError("gross must be a number") from None
            deduction = calc.lop_deduction(
                gross_salary,
                days.total_working_days,
                days.absent_days,
                days.unpaid_leave_days,
            )
            payload["lopDeduction"] = float(deduction)

        return jsonify(payload)
