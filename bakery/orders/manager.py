# bakery/orders/manager.py
"""
Order Manager - Business logic for customer orders
Create, Update, Delete and status flag operations

Every write runs in one transaction. Updating an order rewrites the header
total and replaces the whole item set together, so a failure part way leaves
the previous order untouched.

Version: 1.1.0
Changes:
- v1.1.0: Header update and item replacement share one transaction
"""

import logging
import uuid
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine, Connection

from ..db import get_db_engine
from ..common import get_local_now
from .common import OrderConstants, OrderDraft, OrderValidator

logger = logging.getLogger(__name__)


class OrderManager:
    """Business logic for order management"""

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or get_db_engine()

    # ==================== Create Order ====================

    def create_order(self, customer_name: str, order_date: date,
                     draft: OrderDraft) -> str:
        """
        Create a new order with its items

        Args:
            customer_name: Customer name (required)
            order_date: Date the order is for
            draft: Line items; total_amount is computed from them

        Returns:
            New order id

        Raises:
            ValueError: If validation fails
        """
        is_valid, error = OrderValidator.validate_order(customer_name, order_date, draft)
        if not is_valid:
            raise ValueError(error)

        order_id = str(uuid.uuid4())
        now = get_local_now()

        with self.engine.begin() as conn:
            try:
                conn.execute(text("""
                    INSERT INTO "Orders" (
                        id, customer_name, order_date, total_amount, is_paid,
                        is_completed, is_production_complete, created_at, updated_at
                    ) VALUES (
                        :id, :customer_name, :order_date, :total_amount, :is_paid,
                        :is_completed, :is_production_complete, :created_at, :updated_at
                    )
                """), {
                    'id': order_id,
                    'customer_name': customer_name.strip(),
                    'order_date': order_date.isoformat(),
                    'total_amount': float(draft.total),
                    'is_paid': False,
                    'is_completed': False,
                    'is_production_complete': False,
                    'created_at': now.isoformat(),
                    'updated_at': now.isoformat(),
                })

                self._insert_items(conn, order_id, draft)

                logger.info(f"✅ Created order {order_id} for {customer_name.strip()} "
                            f"({len(draft.items)} items, total {draft.total})")
                return order_id

            except Exception as e:
                logger.error(f"❌ Error creating order: {e}")
                raise

    # ==================== Update Order ====================

    def update_order(self, order_id: str, customer_name: str, order_date: date,
                     draft: OrderDraft) -> bool:
        """
        Update an order header and replace all of its items

        Returns:
            True if successful

        Raises:
            ValueError: If validation fails or the order does not exist
        """
        is_valid, error = OrderValidator.validate_order(customer_name, order_date, draft)
        if not is_valid:
            raise ValueError(error)

        with self.engine.begin() as conn:
            try:
                result = conn.execute(text("""
                    UPDATE "Orders"
                    SET customer_name = :customer_name,
                        order_date = :order_date,
                        total_amount = :total_amount,
                        updated_at = :updated_at
                    WHERE id = :order_id
                """), {
                    'order_id': order_id,
                    'customer_name': customer_name.strip(),
                    'order_date': order_date.isoformat(),
                    'total_amount': float(draft.total),
                    'updated_at': get_local_now().isoformat(),
                })

                if result.rowcount == 0:
                    raise ValueError(f"Order {order_id} not found")

                conn.execute(
                    text('DELETE FROM "OrderItems" WHERE order_id = :order_id'),
                    {'order_id': order_id}
                )
                self._insert_items(conn, order_id, draft)

                logger.info(f"✅ Updated order {order_id} ({len(draft.items)} items, total {draft.total})")
                return True

            except Exception as e:
                logger.error(f"❌ Error updating order {order_id}: {e}")
                raise

    # ==================== Delete Order ====================

    def delete_order(self, order_id: str) -> bool:
        """
        Delete an order and its items

        Items are removed explicitly as well, for databases where the
        foreign key cascade is not enforced.
        """
        with self.engine.begin() as conn:
            try:
                conn.execute(
                    text('DELETE FROM "OrderItems" WHERE order_id = :order_id'),
                    {'order_id': order_id}
                )
                result = conn.execute(
                    text('DELETE FROM "Orders" WHERE id = :order_id'),
                    {'order_id': order_id}
                )

                if result.rowcount == 0:
                    raise ValueError(f"Order {order_id} not found")

                logger.info(f"✅ Deleted order {order_id}")
                return True

            except Exception as e:
                logger.error(f"❌ Error deleting order {order_id}: {e}")
                raise

    # ==================== Status Flags ====================

    def set_flag(self, order_id: str, flag: str, value: bool) -> bool:
        """
        Set one of is_paid / is_completed / is_production_complete

        The three flags are independent; setting one never touches the others.
        """
        if flag not in OrderConstants.FLAGS:
            raise ValueError(f"Unknown order flag: {flag}")

        with self.engine.begin() as conn:
            try:
                # flag is whitelisted above
                result = conn.execute(text(f"""
                    UPDATE "Orders"
                    SET {flag} = :value,
                        updated_at = :updated_at
                    WHERE id = :order_id
                """), {
                    'order_id': order_id,
                    'value': bool(value),
                    'updated_at': get_local_now().isoformat(),
                })

                if result.rowcount == 0:
                    raise ValueError(f"Order {order_id} not found")

                logger.info(f"✅ Order {order_id}: {flag} = {bool(value)}")
                return True

            except Exception as e:
                logger.error(f"❌ Error updating {flag} on order {order_id}: {e}")
                raise

    def toggle_paid(self, order_id: str, current: bool) -> bool:
        return self.set_flag(order_id, OrderConstants.FLAG_PAID, not current)

    def mark_paid(self, order_id: str) -> bool:
        return self.set_flag(order_id, OrderConstants.FLAG_PAID, True)

    def toggle_completed(self, order_id: str, current: bool) -> bool:
        return self.set_flag(order_id, OrderConstants.FLAG_COMPLETED, not current)

    def toggle_production_complete(self, order_id: str, current: bool) -> bool:
        return self.set_flag(order_id, OrderConstants.FLAG_PRODUCTION_COMPLETE, not current)

    # ==================== Private Helper Methods ====================

    def _insert_items(self, conn: Connection, order_id: str, draft: OrderDraft):
        """Insert the draft's items, created_at staggered to keep entry order"""
        base = get_local_now()

        insert_query = text("""
            INSERT INTO "OrderItems" (
                id, order_id, product_id, quantity, unit_price, subtotal, created_at
            ) VALUES (
                :id, :order_id, :product_id, :quantity, :unit_price, :subtotal, :created_at
            )
        """)

        for position, item in enumerate(draft.items):
            conn.execute(insert_query, {
                'id': str(uuid.uuid4()),
                'order_id': order_id,
                'product_id': item.product_id,
                'quantity': int(item.quantity),
                'unit_price': float(item.unit_price),
                'subtotal': float(item.subtotal),
                'created_at': (base + timedelta(microseconds=position)).isoformat(timespec='microseconds'),
            })
