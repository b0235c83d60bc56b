"""
Application settings for Team Tasks.

All values come from environment variables so the same build runs locally
(SQLite) and against a pooled server database.
"""

import os
import logging


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./team_tasks.db")
DB_ECHO = _env_bool("DB_ECHO")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "1800"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "2"))

# Same-column reorder policy: "swap" or "shift"
REORDER_POLICY = os.getenv("REORDER_POLICY", "swap").strip().lower()


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

logger = logging.getLogger("team_tasks")
