from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_engine.attendance_engine.database.bootstrap import DEFAULT_SCHEMA_PATH, apply_schema, list_tables
from src.attendance_engine.attendance_engine.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    statements = apply_schema(db_config, schema_path=DEFAULT_SCHEMA_PATH)
    tables = list_tables(db_config)
    print(
        f"OK: Applied schema.sql ({statements} statements) -> "
        f"{DBConfig.from_dict(db_config).describe()} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
