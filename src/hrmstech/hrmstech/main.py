from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, MAX_UPLOAD_BYTES
from .database.bootstrap import apply_schema, ensure_demo_organization, list_tables
from .departments.controller import register as register_departments
from .employee_ids.controller import register as register_employee_ids
from .employees.controller import register as register_employees
from .invites.controller import register as register_invites
from .leave.controller import register as register_leave
from .letters.controller import register as register_letters
from .notifications.controller import register as register_notifications
from .organizations.controller import register as register_organizations
from .payroll.controller import register as register_payroll
from .roles.controller import register as register_roles
from .uploads.controller import register as register_uploads
from .users.controller import register as register_users
from .web.errors import register_error_handlers
from .web.guards import CONTAINER_KEY

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["APP_BASE_URL"] = getattr(settings, "APP_BASE_URL", "http://localhost:5000")
    app.config["PASSWORD_RESET_TTL_MINUTES"] = int(getattr(settings, "PASSWORD_RESET_TTL_MINUTES", 60))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES)) + 1024 * 1024
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_organization(db_config)
            logger.info("demo organization ready")
        container = build_container(db_config=db_config, settings=settings)

    app.extensions[CONTAINER_KEY] = container
    register_error_handlers(app)

    register_users(app, container)
    register_organizations(app, container)
    register_employees(app, container)
    register_employee_ids(app, container)
    register_departments(app, container)
    register_roles(app, container)
    register_invites(app, container)
    register_leave(app, container)
    register_payroll(app, container)
    register_notifications(app, container)
    register_uploads(app, container)
    register_letters(app, container)

    return app
