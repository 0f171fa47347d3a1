from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import CONTAINER_KEY, register_error_handlers, register_request_logging
from .container import Container, build_container
from .core.constants import DEFAULT_ORG_UTC_OFFSET_MINUTES, DEFAULT_STANDARD_SHIFT_HOURS
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, ensure_default_permissions, list_tables
from .payroll.controller import register as register_payroll
from .permissions.controller import register as register_permissions
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_default_permissions(db_config)
            logger.info("default permissions seeded")

        container = build_container(
            db_config=db_config,
            standard_shift_hours=float(getattr(settings, "STANDARD_SHIFT_HOURS", DEFAULT_STANDARD_SHIFT_HOURS)),
            utc_offset_minutes=int(getattr(settings, "ORG_UTC_OFFSET_MINUTES", DEFAULT_ORG_UTC_OFFSET_MINUTES)),
        )

    app.extensions[CONTAINER_KEY] = container
    register_error_handlers(app)
    register_request_logging(app)

    register_sessions(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_permissions(app, container)

    return app
