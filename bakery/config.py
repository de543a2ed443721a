# bakery/config.py
"""
Application configuration loaded from environment variables

A local .env file is read first (python-dotenv), so the same variables can be
set there during development and in the host environment in production.

Exposes three dictionaries:
- DB_CONFIG: database connection settings
- APP_CONFIG: pool, session, locale and display settings
- AUTH_CONFIG: login credentials
"""

import os
import logging
from typing import List

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _get_int(name: str, default: int) -> int:
    """Read an integer setting, falling back to default on bad values"""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


def _get_list(name: str, default: str) -> List[str]:
    """Read a comma separated setting"""
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


# ==================== Database ====================

DB_CONFIG = {
    # Full SQLAlchemy URL wins over the individual parts when set
    "url": os.getenv("DATABASE_URL", ""),
    "driver": os.getenv("DB_DRIVER", "postgresql+psycopg2"),
    "host": os.getenv("DB_HOST", "localhost"),
    "port": _get_int("DB_PORT", 5432),
    "user": os.getenv("DB_USER", "postgres"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "postgres"),
}


# ==================== Application ====================

APP_CONFIG = {
    "DB_POOL_SIZE": _get_int("DB_POOL_SIZE", 5),
    "DB_POOL_RECYCLE": _get_int("DB_POOL_RECYCLE", 3600),
    "SESSION_TIMEOUT_HOURS": _get_int("SESSION_TIMEOUT_HOURS", 8),
    "TIMEZONE": os.getenv("APP_TIMEZONE", "Asia/Manila"),
    "CURRENCY_SYMBOL": os.getenv("CURRENCY_SYMBOL", "₱"),
    "BAKER_ORDER": _get_list("BAKER_ORDER", "Anna,Nicole,Mommy"),
}


# ==================== Authentication ====================

AUTH_CONFIG = {
    "username": os.getenv("APP_USERNAME", "admin"),
    # hex PBKDF2-HMAC-SHA256 of the password; login is refused while hash or salt is empty
    "password_hash": os.getenv("APP_PASSWORD_HASH", "").strip().lower(),
    "password_salt": os.getenv("APP_PASSWORD_SALT", ""),
    "hash_iterations": _get_int("APP_PASSWORD_ITERATIONS", 600000),
    "display_name": os.getenv("APP_DISPLAY_NAME", ""),
}
