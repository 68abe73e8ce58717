from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.ops_tracker.ops_tracker.container import build_container
from src.ops_tracker.ops_tracker.database.bootstrap import apply_schema, list_tables
from src.ops_tracker.ops_tracker.main import SCHEMA_PATH


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    container = build_container(db_config=dict(settings.DB_CONFIG))

    apply_schema(container.conn, schema_path=SCHEMA_PATH)
    created = container.user_service.ensure_default_admin()
    tables = list_tables(container.conn)
    print(
        f"OK: Applied schema.sql -> {container.conn.config.describe()} "
        f"(tables={len(tables)}, default admin {'created' if created else 'present'})"
    )


if __name__ == "__main__":
    main()
