# bakery/catalog/queries.py
"""
Database queries for the product catalog

Version: 1.0.0
"""

import logging
from typing import Optional

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, DatabaseError

from ..db import get_db_engine

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = [
    'id', 'name', 'category', 'price', 'unit_type', 'pieces_per_pack',
    'is_active', 'baker'
]


def normalize_products(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce driver-specific column types (Decimal prices, 0/1 flags)"""
    if df.empty:
        return pd.DataFrame(columns=PRODUCT_COLUMNS)

    df = df.copy()
    df['price'] = df['price'].fillna(0).astype(float)
    df['is_active'] = df['is_active'].fillna(False).astype(bool)
    df['baker'] = df['baker'].fillna('')
    df['pieces_per_pack'] = pd.to_numeric(df['pieces_per_pack'], errors='coerce').astype('Int64')
    return df


class ProductQueries:
    """Read access to the Products table"""

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or get_db_engine()
        self._connection_error = None

    def get_last_error(self) -> Optional[str]:
        """Get last connection error message"""
        return self._connection_error

    def get_active_products(self) -> Optional[pd.DataFrame]:
        """
        Get active products ordered by category then name

        Returns:
            DataFrame of products, None on database error
        """
        query = text("""
            SELECT id, name, category, price, unit_type, pieces_per_pack,
                   is_active, baker
            FROM "Products"
            WHERE is_active = :is_active
            ORDER BY category ASC, name ASC
        """)

        try:
            with self.engine.connect() as conn:
                result = pd.read_sql(query, conn, params={'is_active': True})
            self._connection_error = None
            return normalize_products(result)
        except (OperationalError, DatabaseError) as e:
            self._connection_error = "Cannot connect to database. Please check your network connection."
            logger.error(f"Database error getting products: {e}")
            return None
