# bakery/orders/queries.py
"""
Database queries for Orders domain
All read queries for orders and order items are centralized here

Reads never raise: on a database error they return None and keep the message
for get_last_error(), so pages can fall back to an empty state.

Version: 1.1.0
Changes:
- v1.1.0: get_items_for_orders() joins product columns for production and
          sales aggregation
"""

import logging
from typing import Dict, List, Optional, Any

import pandas as pd
from sqlalchemy import text, bindparam
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, DatabaseError

from ..db import get_db_engine
from .common import OrderConstants

logger = logging.getLogger(__name__)

ORDER_COLUMNS = [
    'id', 'customer_name', 'order_date', 'total_amount', 'is_paid',
    'is_completed', 'is_production_complete', 'created_at', 'updated_at'
]

ITEM_COLUMNS = [
    'id', 'order_id', 'product_id', 'quantity', 'unit_price', 'subtotal',
    'created_at', 'product_name', 'category', 'unit_type', 'pieces_per_pack',
    'baker'
]

CONNECTION_ERROR = "Cannot connect to database. Please check your network connection."


def normalize_orders(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce driver-specific column types (Decimal amounts, 0/1 flags)"""
    if df.empty:
        return pd.DataFrame(columns=ORDER_COLUMNS)

    df = df.copy()
    df['total_amount'] = df['total_amount'].fillna(0).astype(float)
    for flag in OrderConstants.FLAGS:
        df[flag] = df[flag].fillna(False).astype(bool)
    return df


def normalize_items(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce item columns; product columns stay null for missing products"""
    if df.empty:
        return pd.DataFrame(columns=ITEM_COLUMNS)

    df = df.copy()
    df['quantity'] = df['quantity'].astype(int)
    df['unit_price'] = df['unit_price'].fillna(0).astype(float)
    df['subtotal'] = df['subtotal'].fillna(0).astype(float)
    df['pieces_per_pack'] = pd.to_numeric(df['pieces_per_pack'], errors='coerce').astype('Int64')
    return df


class OrderQueries:
    """Database queries for Order management"""

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or get_db_engine()
        self._connection_error = None

    def get_last_error(self) -> Optional[str]:
        """Get last connection error message"""
        return self._connection_error

    def _read(self, query, params: Optional[Dict[str, Any]] = None,
              context: str = "query") -> Optional[pd.DataFrame]:
        """Run a read query, recording the error instead of raising"""
        try:
            with self.engine.connect() as conn:
                result = pd.read_sql(query, conn, params=params)
            self._connection_error = None
            return result
        except OperationalError as e:
            self._connection_error = CONNECTION_ERROR
            logger.error(f"Database connection error ({context}): {e}")
            return None
        except DatabaseError as e:
            self._connection_error = f"Database error: {str(e)}"
            logger.error(f"Database error ({context}): {e}")
            return None

    # ==================== Order Queries ====================

    def get_orders(self) -> Optional[pd.DataFrame]:
        """
        Get all orders

        Date and customer filtering happen in memory (see filters.py);
        the table holds at most a few hundred rows.

        Returns:
            DataFrame with order list, None on database error
        """
        query = text("""
            SELECT id, customer_name, order_date, total_amount, is_paid,
                   is_completed, is_production_complete, created_at, updated_at
            FROM "Orders"
            ORDER BY order_date ASC, created_at ASC
        """)

        result = self._read(query, context="get_orders")
        return normalize_orders(result) if result is not None else None

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Get a single order header, None if missing or on error"""
        query = text("""
            SELECT id, customer_name, order_date, total_amount, is_paid,
                   is_completed, is_production_complete, created_at, updated_at
            FROM "Orders"
            WHERE id = :order_id
        """)

        result = self._read(query, {'order_id': order_id}, context=f"get_order {order_id}")
        if result is None or result.empty:
            return None
        return normalize_orders(result).iloc[0].to_dict()

    def get_overall_revenue(self) -> Optional[float]:
        """Sum of total_amount across every order"""
        query = text('SELECT COALESCE(SUM(total_amount), 0) AS total FROM "Orders"')

        result = self._read(query, context="get_overall_revenue")
        if result is None:
            return None
        return float(result['total'].iloc[0] or 0)

    # ==================== Order Item Queries ====================

    def get_order_items(self, order_id: str) -> Optional[pd.DataFrame]:
        """Items of one order with product details"""
        return self.get_items_for_orders([order_id])

    def get_items_for_orders(self, order_ids: List[str]) -> Optional[pd.DataFrame]:
        """
        Items of several orders with product columns inlined

        Products are LEFT JOINed so items whose product is gone still show up,
        with null product columns.

        Returns:
            DataFrame with ITEM_COLUMNS, None on database error
        """
        if not order_ids:
            return pd.DataFrame(columns=ITEM_COLUMNS)

        query = text("""
            SELECT
                i.id,
                i.order_id,
                i.product_id,
                i.quantity,
                i.unit_price,
                i.subtotal,
                i.created_at,
                p.name AS product_name,
                p.category,
                p.unit_type,
                p.pieces_per_pack,
                p.baker
            FROM "OrderItems" i
            LEFT JOIN "Products" p ON i.product_id = p.id
            WHERE i.order_id IN :order_ids
            ORDER BY i.created_at ASC, i.id ASC
        """).bindparams(bindparam('order_ids', expanding=True))

        result = self._read(query, {'order_ids': list(order_ids)}, context="get_items_for_orders")
        return normalize_items(result) if result is not None else None
