# bakery/production/aggregator.py
"""
Production aggregation for one order date

Builds the two production views from the orders of a date and their items
(joined with product columns, see OrderQueries.get_items_for_orders):

- Product view: pieces to bake per category and product, counting only
  orders whose production is not complete yet
- Customer view: every order of the date split into production-incomplete
  and production-complete groups, each with readable item quantities
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from ..common import BakeryConstants, calculate_pieces, format_piece_quantity

logger = logging.getLogger(__name__)


@dataclass
class ProductSummary:
    """Pieces to bake for one product"""
    product_name: str
    total_pieces: int


@dataclass
class CustomerItem:
    product_id: Optional[str]
    product_name: str
    category: str
    quantity: int
    unit_type: Optional[str] = None
    pieces_per_pack: Optional[int] = None

    @property
    def total_pieces(self) -> int:
        return calculate_pieces(self.quantity, self.unit_type, self.pieces_per_pack)

    @property
    def quantity_display(self) -> str:
        return format_piece_quantity(self.quantity, self.unit_type, self.pieces_per_pack)


@dataclass
class CustomerOrder:
    order_id: str
    customer_name: str
    is_production_complete: bool
    is_completed: bool
    is_paid: bool
    items: List[CustomerItem] = field(default_factory=list)


@dataclass
class ProductionViews:
    """Everything the Production page shows for one date"""
    product_view: Dict[str, List[ProductSummary]]
    incomplete: List[CustomerOrder]
    completed: List[CustomerOrder]

    @property
    def incomplete_count(self) -> int:
        return len(self.incomplete)

    @property
    def completed_count(self) -> int:
        return len(self.completed)

    @property
    def categories(self) -> List[str]:
        return list(self.product_view.keys())


def _optional(value):
    """None for pandas missing values"""
    if value is None or value is pd.NA:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _to_customer_item(row) -> CustomerItem:
    pieces_per_pack = _optional(row.get('pieces_per_pack'))
    return CustomerItem(
        product_id=_optional(row.get('product_id')),
        product_name=_optional(row.get('product_name')) or BakeryConstants.UNKNOWN_PRODUCT,
        category=_optional(row.get('category')) or BakeryConstants.UNKNOWN_CATEGORY,
        quantity=int(row['quantity']),
        unit_type=_optional(row.get('unit_type')),
        pieces_per_pack=int(pieces_per_pack) if pieces_per_pack is not None else None,
    )


def build_customer_orders(orders: pd.DataFrame, items: pd.DataFrame) -> List[CustomerOrder]:
    """One CustomerOrder per order, in the given order, with its items"""
    customers = []
    if orders is None or orders.empty:
        return customers

    grouped = {}
    if items is not None and not items.empty:
        grouped = {order_id: group for order_id, group in items.groupby('order_id', sort=False)}

    for _, order in orders.iterrows():
        order_items = grouped.get(order['id'])
        customers.append(CustomerOrder(
            order_id=order['id'],
            customer_name=order['customer_name'],
            is_production_complete=bool(order['is_production_complete']),
            is_completed=bool(order['is_completed']),
            is_paid=bool(order['is_paid']),
            items=[] if order_items is None else [
                _to_customer_item(row) for _, row in order_items.iterrows()
            ],
        ))
    return customers


def summarize_pieces_by_category(customers: List[CustomerOrder]) -> Dict[str, List[ProductSummary]]:
    """
    Pieces per category and product for production-incomplete orders

    Categories are alphabetical; products keep first-seen order.
    """
    rows = [
        {
            'category': item.category,
            'product_name': item.product_name,
            'pieces': item.total_pieces,
        }
        for customer in customers
        if not customer.is_production_complete
        for item in customer.items
    ]
    if not rows:
        return {}

    df = pd.DataFrame(rows)
    grouped = df.groupby(['category', 'product_name'], sort=False)['pieces'].sum().reset_index()

    return {
        category: [
            ProductSummary(product_name=row.product_name, total_pieces=int(row.pieces))
            for row in grouped[grouped['category'] == category].itertuples()
        ]
        for category in sorted(grouped['category'].unique())
    }


def build_production_views(orders: pd.DataFrame, items: pd.DataFrame) -> ProductionViews:
    """
    Aggregate one date's orders into the product and customer views

    Args:
        orders: Orders of the selected date
        items: Their items with product columns

    Returns:
        ProductionViews
    """
    customers = build_customer_orders(orders, items)

    views = ProductionViews(
        product_view=summarize_pieces_by_category(customers),
        incomplete=[c for c in customers if not c.is_production_complete],
        completed=[c for c in customers if c.is_production_complete],
    )

    logger.debug(f"Production views: {views.incomplete_count} incomplete, "
                 f"{views.completed_count} completed, {len(views.categories)} categories")
    return views
