from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.guard_scheduling.guard_scheduling.common.logging_config import configure_logging
from src.guard_scheduling.guard_scheduling.database.bootstrap import apply_seed_sql

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    logger.info("OK: seeded demo companies, sites, shifts and employees into %s", db_config.get("database"))


if __name__ == "__main__":
    main()
