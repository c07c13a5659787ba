from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import DEFAULT_SCHEMA_PATH, apply_schema, list_tables


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = load_settings(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if app.config["DEBUG"]:
        print(
            "[attendance-engine] settings=", settings_module,
            " db=", f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
        )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DEFAULT_SCHEMA_PATH)
        if app.config["DEBUG"]:
            print(f"[attendance-engine] schema ready (tables={len(list_tables(db_config))})")

    container = build_container(
        db_config=db_config,
        required_regular_hours=float(getattr(settings, "REQUIRED_REGULAR_HOURS", 8)),
    )
    register_attendance(app, container)

    return app
