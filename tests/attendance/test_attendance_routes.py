def _work_a_day(client, clock, hours: int):
    client.post("/api/sessions/start")
    clock.advance(hours=hours)
    client.post("/api/sessions/stop")


def test_my_attendance_and_summary(login, clock):
    client = login()
    _work_a_day(client, clock, 9)

    rows = client.get("/api/attendance/my-attendance").get_json()
    assert len(rows) == 1
    assert rows[0]["status"] == "PRESENT"
    assert rows[0]["workingHours"] == 9

    summary = client.get("/api/attendance/summary?month=1&year=2025").get_json()
    assert summary["total_present_days"] == 1
    assert summary["total_overtime_hours"] == 1


def test_bad_month_is_validation_error(login):
    resp = login().get("/api/attendance/my-attendance?month=13&year=2025")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["kind"] == "validation_error"


def test_organization_summary_needs_export_permission(login, clock):
    _work_a_day(login("user-1"), clock, 3)

    assert login("user-1").get("/api/attendance/organization-summary").status_code == 403

    rows = login("user-2").get("/api/attendance/organization-summary").get_json()
    assert [(r["employee_code"], r["half_days"]) for r in rows] == [("EMP001", 1)]


def test_today_overview_is_for_admin_roles(login, clock):
    _work_a_day(login("user-1"), clock, 9)

    assert login("user-1").get("/api/attendance/today").status_code == 403

    rows = login("user-3").get("/api/attendance/today").get_json()
    assert rows[0]["employeeCode"] == "EMP001"
    assert rows[0]["department"] == "Engineering"
    assert rows[0]["workingHours"] == 9
