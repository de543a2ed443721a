# bakery/orders/common.py
"""
Common utilities for Orders domain
Constants, the in-memory order draft used by the create/edit forms,
and order validation

Version: 1.1.0
Changes:
- v1.1.0: OrderDraft keeps a unit price snapshot per line so edits of the
          catalog price never change an existing order
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from ..common import to_money

logger = logging.getLogger(__name__)


# ==================== Constants ====================

class OrderConstants:
    """Order-specific constants"""
    DEFAULT_QUANTITY = 1
    MIN_QUANTITY = 1

    UNKNOWN_ITEM_PRODUCT = 'Unknown Product'

    # Flags on the Orders table
    FLAG_PAID = 'is_paid'
    FLAG_COMPLETED = 'is_completed'
    FLAG_PRODUCTION_COMPLETE = 'is_production_complete'
    FLAGS = [FLAG_PAID, FLAG_COMPLETED, FLAG_PRODUCTION_COMPLETE]


# ==================== Quantity Parsing ====================

def parse_quantity(raw: Union[str, int, float, None]) -> int:
    """
    Coerce a typed quantity to an integer

    Empty or non-numeric input falls back to 1. Numbers are truncated, so the
    result may still be below 1; callers refuse those.
    """
    if raw is None:
        return OrderConstants.DEFAULT_QUANTITY

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else OrderConstants.DEFAULT_QUANTITY

    text = str(raw).strip()
    if not text:
        return OrderConstants.DEFAULT_QUANTITY

    try:
        return int(text)
    except ValueError:
        pass

    try:
        value = float(text)
    except ValueError:
        return OrderConstants.DEFAULT_QUANTITY

    # "inf", "nan" and "1e999" parse as floats but have no integer value
    if not math.isfinite(value):
        return OrderConstants.DEFAULT_QUANTITY
    return int(value)


# ==================== Order Draft ====================

@dataclass
class OrderItemDraft:
    """One candidate line item, priced at the moment it was added"""
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    id: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass
class OrderDraft:
    """
    Line items being edited before an order is saved

    Kept in session state between reruns; nothing is written to the database
    until the form is submitted.
    """
    items: List[OrderItemDraft] = field(default_factory=list)

    def add_item(self, product: Optional[Dict[str, Any]],
                 quantity: Union[str, int, None]) -> bool:
        """
        Add a product at its current price

        Args:
            product: Product row (id, name, price) or None if nothing selected
            quantity: Quantity as typed by the user

        Returns:
            True if the item was added, False if refused
        """
        if not product:
            return False

        qty = parse_quantity(quantity)
        if qty < OrderConstants.MIN_QUANTITY:
            return False

        self.items.append(OrderItemDraft(
            product_id=product['id'],
            product_name=product.get('name') or OrderConstants.UNKNOWN_ITEM_PRODUCT,
            quantity=qty,
            unit_price=to_money(product['price']),
        ))
        return True

    def remove_item(self, index: int) -> bool:
        """Remove the item at a list position; out-of-range is a no-op"""
        if 0 <= index < len(self.items):
            del self.items[index]
            return True
        return False

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal('0.00'))

    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def from_items(cls, items) -> 'OrderDraft':
        """
        Build a draft from stored order items

        Args:
            items: DataFrame or list of dicts with product_id, product_name,
                   quantity, unit_price (and optionally id)
        """
        records = items.to_dict('records') if hasattr(items, 'to_dict') else list(items)
        return cls(items=[
            OrderItemDraft(
                product_id=row['product_id'],
                product_name=row.get('product_name') or OrderConstants.UNKNOWN_ITEM_PRODUCT,
                quantity=int(row['quantity']),
                unit_price=to_money(row['unit_price']),
                id=row.get('id'),
            )
            for row in records
        ])


# ==================== Validation ====================

class OrderValidator:
    """Order form validation helpers"""

    @staticmethod
    def validate_order(customer_name: Optional[str], order_date: Optional[date],
                       draft: OrderDraft) -> Tuple[bool, Optional[str]]:
        """
        Validate an order before saving

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not customer_name or not customer_name.strip():
            return False, "Please enter customer name"

        if order_date is None:
            return False, "Please select an order date"

        if draft.is_empty():
            return False, "Please add at least one item to the order"

        return True, None

    @staticmethod
    def can_edit(order: Dict[str, Any]) -> bool:
        """Delivered orders are locked"""
        return not bool(order.get(OrderConstants.FLAG_COMPLETED))
