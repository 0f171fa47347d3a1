def test_attendance_days_for_current_employee(login):
    body = login().get("/api/payroll/attendance/1/2025").get_json()

    # Jan 1-3 and Jan 6 are the weekdays so far; nothing worked yet.
    assert body["totalWorkingDays"] == 4
    assert body["presentDays"] == 0
    assert body["absentDays"] == 4
    assert "lopDeduction" not in body


def test_gross_adds_loss_of_pay(login):
    body = login().get("/api/payroll/attendance/1/2025?gross=4000").get_json()
    assert body["lopDeduction"] == 4000.0


def test_gross_must_be_numeric(login):
    resp = login().get("/api/payroll/attendance/1/2025?gross=lots")
    assert resp.status_code == 400


def test_invalid_month(login):
    assert login().get("/api/payroll/attendance/13/2025").status_code == 400
