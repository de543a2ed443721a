# bakery/schema.py
"""
Table definitions for the bakery database

The hosted database already has these tables; the definitions here are used
to create them on a fresh local database and in tests.
"""

import logging
from typing import Optional

from sqlalchemy import (
    MetaData, Table, Column, String, Integer, Numeric, Boolean, Date,
    DateTime, ForeignKey, CheckConstraint, func
)
from sqlalchemy.engine import Engine

from .db import get_db_engine

logger = logging.getLogger(__name__)

metadata = MetaData()

products = Table(
    "Products", metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(200), nullable=False),
    Column("category", String(100), nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("unit_type", String(10), nullable=False, server_default="piece"),
    Column("pieces_per_pack", Integer),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("baker", String(100), nullable=False, server_default=""),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    CheckConstraint("price >= 0", name="ck_products_price"),
    CheckConstraint("unit_type IN ('piece', 'pack')", name="ck_products_unit_type"),
)

orders = Table(
    "Orders", metadata,
    Column("id", String(36), primary_key=True),
    Column("customer_name", String(200), nullable=False),
    Column("order_date", Date, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False, server_default="0"),
    Column("is_paid", Boolean, nullable=False, server_default="0"),
    Column("is_completed", Boolean, nullable=False, server_default="0"),
    Column("is_production_complete", Boolean, nullable=False, server_default="0"),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
)

order_items = Table(
    "OrderItems", metadata,
    Column("id", String(36), primary_key=True),
    Column("order_id", String(36), ForeignKey("Orders.id", ondelete="CASCADE"),
           nullable=False, index=True),
    Column("product_id", String(36), ForeignKey("Products.id"), nullable=True),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Numeric(10, 2), nullable=False),
    Column("subtotal", Numeric(12, 2), nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
)


def init_schema(engine: Optional[Engine] = None):
    """Create any missing tables"""
    engine = engine or get_db_engine()
    metadata.create_all(engine)
    logger.info("✅ Schema ready: Products, Orders, OrderItems")
