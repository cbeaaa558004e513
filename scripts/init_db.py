from __future__ import annotations

import importlib
import logging
import logging.config
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module, logging_dict_config

from src.timeclock.timeclock.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.config.dictConfig(logging_dict_config(getattr(settings, "LOG_LEVEL", "INFO")))

    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    tables = list_tables(db_config)
    logger.info("tables in %s: %s", db_config.get("database"), ", ".join(sorted(tables)))


if __name__ == "__main__":
    main()
