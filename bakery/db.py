# bakery/db.py
"""
Database connection management with singleton pattern

Version: 1.2.0
Changes:
- v1.2.0: Connection URL built from DB_CONFIG (DATABASE_URL or driver parts),
          pool settings only applied to server databases
- v1.1.0: Singleton engine, pool configuration from APP_CONFIG,
          connection health check, pool_pre_ping auto-reconnect
"""

import logging
import threading
from typing import Tuple, Optional
from urllib.parse import quote_plus

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import QueuePool

from .config import DB_CONFIG, APP_CONFIG

logger = logging.getLogger(__name__)

# Singleton engine instance
_engine = None
_engine_lock = threading.Lock()


def build_db_url() -> str:
    """Build the SQLAlchemy URL from DB_CONFIG"""
    if DB_CONFIG.get("url"):
        return DB_CONFIG["url"]

    driver = DB_CONFIG["driver"]
    user = DB_CONFIG["user"]
    password = quote_plus(str(DB_CONFIG["password"]))
    host = DB_CONFIG["host"]
    port = DB_CONFIG["port"]
    database = DB_CONFIG["database"]
    return f"{driver}://{user}:{password}@{host}:{port}/{database}"


def get_db_engine() -> Engine:
    """
    Create and return SQLAlchemy database engine (singleton pattern)

    Returns the same engine instance across all calls and sessions so the
    connection pool is shared.
    """
    global _engine

    # Double-checked locking
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                logger.info("🔌 Creating database engine (singleton)...")

                url = build_db_url()
                logger.info(f"🔐 SQLAlchemy URL: {make_url(url).render_as_string(hide_password=True)}")

                if url.startswith("sqlite"):
                    _engine = create_engine(url, echo=False)
                    logger.info("✅ Database engine created (sqlite)")
                else:
                    pool_size = APP_CONFIG.get("DB_POOL_SIZE", 5)
                    pool_recycle = APP_CONFIG.get("DB_POOL_RECYCLE", 3600)

                    _engine = create_engine(
                        url,
                        poolclass=QueuePool,
                        pool_size=pool_size,
                        max_overflow=10,
                        pool_timeout=30,
                        pool_recycle=pool_recycle,
                        pool_pre_ping=True,
                        echo=False
                    )
                    logger.info(f"✅ Database engine created (pool_size={pool_size}, recycle={pool_recycle}s)")

    return _engine


def check_db_connection(engine: Optional[Engine] = None) -> Tuple[bool, Optional[str]]:
    """
    Check if database connection is healthy

    Returns:
        Tuple of (is_connected: bool, error_message: str or None)
    """
    try:
        engine = engine or get_db_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, None
    except OperationalError as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False, "Cannot connect to database. Please check your network connection."
    except Exception as e:
        logger.error(f"❌ Database error: {e}")
        return False, f"Database error: {str(e)}"



def reset_db_engine():
    """
    Dispose the engine so the next get_db_engine() call reconnects

    Used by the page Reload button after a failed read.
    """
    global _engine

    with _engine_lock:
        if _engine is not None:
            try:
                _engine.dispose()
                logger.info("🔄 Database engine disposed")
            except Exception as e:
                logger.error(f"Error disposing engine: {e}")
            _engine = None

    logger.info("🔄 Database engine reset - will reconnect on next query")


def get_connection_pool_status() -> dict:
    """Pool statistics for logging; sqlite engines report only the pool class"""
    if _engine is None:
        return {"status": "not_initialized"}

    pool = _engine.pool
    if not isinstance(pool, QueuePool):
        return {"status": "active", "pool": type(pool).__name__}

    return {
        "status": "active",
        "pool_size": pool.size(),
        "checked_in": pool.checkedin(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
    }
