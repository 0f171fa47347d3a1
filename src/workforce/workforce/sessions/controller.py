from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_employee, iso, login_required
from ..container import Container
from .model import ActiveSessionSnapshot, WorkSession


def session_to_json(s: WorkSession) -> dict:
    return {
        "id": s.session_id,
        "date": iso(s.work_date),
        "startTime": iso(s.start_time),
        "endTime": iso(s.end_time),
        "isActive": s.is_open,
        "state": s.state.value,
        "breakStartTime": iso(s.break_start_time),
        "breakEndTime": iso(s.break_end_time),
        "totalBreakTime": s.total_break_minutes,
        "workingHours": s.working_hours,
        "overtimeHours": s.overtime_hours or 0,
    }


def snapshot_to_json(snapshot: ActiveSessionSnapshot) -> dict:
    return {
        "hasActiveSession": snapshot.has_active_session,
        "state": snapshot.state.value,
        "session": session_to_json(snapshot.session) if snapshot.session else None,
        "elapsedWorkMinutes": snapshot.elapsed_work_minutes,
        "currentBreakMinutes": snapshot.current_break_minutes,
    }


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service

    @app.route("/api/sessions/active", methods=["GET"], endpoint="session_active")
    @login_required
    def session_active():
        snapshot = sessions.get_active(current_employee().employee_id)
        return jsonify(snapshot_to_json(snapshot))

    @app.route("/api/sessions/start", methods=["POST"], endpoint="session_start")
    @login_required
    def session_start():
        result = sessions.start_session(current_employee().employee_id)
        return jsonify(
            {
                "success": True,
                "message": "Work session started successfully",
                "session": {
                    "id": result.session_id,
                    "startTime": iso(result.start_time),
                    "date": iso(result.work_date),
                },
            }
        ), 201

    @app.route("/api/sessions/stop", methods=["POST"], endpoint="session_stop")
    @login_required
    def session_stop():
        result = sessions.stop_session(current_employee().employee_id)
        return jsonify(
            {
                "success": True,
                "message": "Work session stopped successfully",
                "session": {
                    "id": result.session_id,
                    "date": iso(result.work_date),
                    "startTime": iso(result.start_time),
                    "endTime": iso(result.end_time),
                    "totalBreakTime": result.total_break_minutes,
                    "workingHours": result.working_hours,
                    "overtimeHours": result.overtime_hours,
                    "attendanceStatus": result.attendance_status.value if result.attendance_status else None,
                },
            }
        )

    @app.route("/api/sessions/break/start", methods=["POST"], endpoint="session_break_start")
    @login_required
    def session_break_start():
        result = sessions.start_break(current_employee().employee_id)
        return jsonify(
            {
                "success": True,
                "message": "Break started",
                "breakStartTime": iso(result.break_start_time),
                "totalBreakTime": result.total_break_minutes,
            }
        )

    @app.route("/api/sessions/break/end", methods=["POST"], endpoint="session_break_end")
    @login_required
    def session_break_end():
        result = sessions.end_break(current_employee().employee_id)
        return jsonify(
            {
                "success": True,
                "message": "Break ended",
                "breakEndTime": iso(result.break_end_time),
                "breakDuration": result.break_minutes,
                "totalBreakTime": result.total_break_minutes,
            }
        )

    @app.route("/api/sessions/today", methods=["GET"], endpoint="session_today")
    @login_required
    def session_today():
        rows = sessions.today_sessions(current_employee().employee_id)
        return jsonify([session_to_json(s) for s in rows])

    @app.route("/api/sessions/today-hours", methods=["GET"], endpoint="session_today_hours")
    @login_required
    def session_today_hours():
        hours = sessions.today_hours(current_employee().employee_id)
        return jsonify(
            {
                "totalMinutes": hours.total_minutes,
                "hours": hours.hours,
                "minutes": hours.minutes,
                "formattedTime": hours.formatted,
                "hasActiveSession": hours.has_active_session,
                "sessionCount": hours.session_count,
            }
        )
