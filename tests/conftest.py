from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.workforce.workforce.core.enums import EmploymentStatus, Role
from src.workforce.workforce.main import create_app

from tests.fakes import FakeClock, build_test_container, make_employee


@pytest.fixture
def fixed_now() -> datetime:
    # Monday, 09:00 UTC.
    return datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def container(clock):
    return build_test_container(
        clock,
        employees=[
            make_employee(1),
            make_employee(2, role=Role.HR_OFFICER, code="HR001", department="People"),
            make_employee(3, role=Role.ADMIN, code="ADM001", department=None),
            make_employee(4, role=Role.PAYROLL_OFFICER, code="PAY001", department="Finance"),
            make_employee(5, status=EmploymentStatus.INACTIVE, code="OLD001"),
        ],
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str = "user-1"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
        return client

    return _login
