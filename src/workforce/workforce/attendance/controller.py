from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import current_employee, iso, login_required
from ..container import Container
from ..core.enums import ADMIN_ROLES
from ..permissions.guards import require_permission, require_roles
from ..permissions.model import PermissionAction, PermissionModule
from .model import AttendanceRecord


def record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "employeeId": r.employee_id,
        "date": iso(r.work_date),
        "checkIn": iso(r.check_in),
        "checkOut": iso(r.check_out),
        "status": r.status.value,
        "workingHours": r.working_hours,
        "overtimeHours": r.overtime_hours,
        "notes": r.notes,
    }


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _month_year() -> tuple[int, int]:
        today = container.session_service.today()
        return (
            request.args.get("month", today.month),
            request.args.get("year", today.year),
        )

    @app.route("/api/attendance/my-attendance", methods=["GET"], endpoint="attendance_mine")
    @login_required
    @require_permission(PermissionModule.ATTENDANCE, PermissionAction.VIEW)
    def attendance_mine():
        month, year = _month_year()
        rows = attendance.my_attendance(current_employee().employee_id, month, year)
        return jsonify([record_to_json(r) for r in rows])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    @require_permission(PermissionModule.ATTENDANCE, PermissionAction.VIEW)
    def attendance_summary():
        month, year = _month_year()
        summary = attendance.monthly_summary(current_employee().employee_id, month, year)
        return jsonify(asdict(summary))

    @app.route("/api/attendance/organization-summary", methods=["GET"], endpoint="attendance_org_summary")
    @login_required
    @require_permission(PermissionModule.ATTENDANCE, PermissionAction.EXPORT)
    def attendance_org_summary():
        month, year = _month_year()
        return jsonify([asdict(s) for s in attendance.organization_summary(month, year)])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @require_roles(*ADMIN_ROLES)
    def attendance_today():
        rows = attendance.today_overview()
        return jsonify(
            [
                {
                    "employeeId": r.employee_id,
                    "employeeName": r.full_name,
                    "employeeCode": r.employee_code,
                    "department": r.department or "N/A",
                    "checkIn": iso(r.check_in),
                    "checkOut": iso(r.check_out),
                    "workingHours": round(r.working_minutes / 60, 2),
                    "status": r.status.value,
                }
                for r in rows
            ]
        )
