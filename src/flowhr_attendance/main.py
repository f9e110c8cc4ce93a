from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .schedules.controller import register as register_schedules
from .early_checkout.controller import register as register_early_checkout

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
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
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["flowhr_container"] = container

    register_attendance(app, container)
    register_schedules(app, container)
    register_early_checkout(app, container)

    return app
