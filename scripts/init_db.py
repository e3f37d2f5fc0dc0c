from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.intern_attendance.intern_attendance.database.bootstrap import apply_schema, list_tables
from src.intern_attendance.intern_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection(db)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    applied = apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    print(
        f"OK: Applied {applied} statements from schema.sql -> "
        f"{db.user}@{db.host}:{db.port}/{db.database} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
