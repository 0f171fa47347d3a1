"""Request-scoped helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import date, datetime
from functools import wraps
from typing import Optional, Union

from flask import Flask, current_app, g, jsonify, request, session

from ..core.exceptions import AuthenticationError, DomainError, NotFoundError, PersistenceError
from ..employees.model import Employee

logger = logging.getLogger(__name__)

CONTAINER_KEY = "workforce.container"


def get_container():
    return current_app.extensions[CONTAINER_KEY]


def current_employee() -> Employee:
    """Employee behind the identity in the signed session cookie, once per request."""

    if "employee" in g:
        return g.employee

    user_id = session.get("user_id")
    if not user_id:
        raise AuthenticationError("Please sign in to continue")

    employee = get_container().employees_repo.get_by_user_id(str(user_id))
    if not employee:
        raise NotFoundError("Employee not found")

    g.employee = employee
    return employee


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_employee()
        return view(*args, **kwargs)

    return wrapper


def iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        level = logging.ERROR if isinstance(exc, PersistenceError) else logging.INFO
        logger.log(
            level,
            str(exc),
            extra={
                "kind": exc.kind,
                "path": request.path,
                "method": request.method,
                "status_code": exc.status_code,
                "employee_id": getattr(g.get("employee"), "employee_id", None),
                "request_id": g.get("request_id"),
            },
        )
        return jsonify({"error": {"message": str(exc), "kind": exc.kind}}), exc.status_code


def register_request_logging(app: Flask) -> None:
    request_logger = logging.getLogger("request")

    @app.before_request
    def _start_timer():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        latency_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        request_logger.info(
            "request",
            extra={
                "request_id": g.get("request_id"),
                "path": request.path,
                "method": request.method,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
                "employee_id": getattr(g.get("employee"), "employee_id", None),
            },
        )
        response.headers["X-Request-ID"] = g.get("request_id", "")
        return response
