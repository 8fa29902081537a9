from __future__ import annotations

import importlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from types import ModuleType

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.model import AttendancePolicy
from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .evaluations.controller import register as register_evaluations
from .locations.controller import register as register_locations
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: ModuleType) -> None:
    level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)

    log_file = getattr(settings, "LOG_FILE", "")
    if not log_file:
        return

    path = Path(log_file)
    if not path.is_absolute():
        path = REPO_ROOT / path
    path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    if any(isinstance(h, RotatingFileHandler) and h.baseFilename == str(path) for h in root.handlers):
        return
    handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    root.addHandler(handler)


def policy_from(settings: ModuleType) -> AttendancePolicy:
    return AttendancePolicy(
        grace_period_minutes=int(getattr(settings, "GRACE_PERIOD_MINUTES", 30)),
        early_clock_in_minutes=int(getattr(settings, "EARLY_CLOCK_IN_MINUTES", 10)),
    )


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask app.

    A prepared container (e.g. over in-memory repositories) skips the database setup.
    """

    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, policy=policy_from(settings))

    register_users(app, container)
    register_locations(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_evaluations(app, container)

    return app
