# bakery/sales/aggregator.py
"""
Sales aggregation for the Sales dashboard

- Revenue for a date and overall revenue (sums of Orders.total_amount)
- Per-baker breakdown of item revenue and quantity by product
- Unpaid orders of the date
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from ..common import BakeryConstants, format_unit_quantity
from ..config import APP_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class BakerProduct:
    product_name: str
    quantity: int
    revenue: float
    unit_type: str = BakeryConstants.UNIT_PIECE
    pieces_per_pack: Optional[int] = None

    @property
    def quantity_display(self) -> str:
        return format_unit_quantity(self.quantity, self.unit_type, self.pieces_per_pack)


@dataclass
class BakerSales:
    baker_name: str
    total_revenue: float
    products: List[BakerProduct] = field(default_factory=list)


@dataclass
class UnpaidOrder:
    order_id: str
    customer_name: str
    total_amount: float


@dataclass
class SalesSummary:
    """Everything the Sales dashboard shows for one date"""
    date_key: Optional[str]
    date_revenue: float
    overall_revenue: float
    bakers: List[BakerSales]
    unpaid_orders: List[UnpaidOrder]

    @property
    def unpaid_total(self) -> float:
        return round(sum(order.total_amount for order in self.unpaid_orders), 2)


def sum_revenue(orders: pd.DataFrame) -> float:
    """Sum of total_amount"""
    if orders is None or orders.empty:
        return 0.0
    return round(float(orders['total_amount'].fillna(0).astype(float).sum()), 2)


def list_unpaid_orders(orders: pd.DataFrame) -> List[UnpaidOrder]:
    """Orders with is_paid false, in the given order"""
    if orders is None or orders.empty:
        return []

    unpaid = orders[~orders['is_paid'].astype(bool)]
    return [
        UnpaidOrder(
            order_id=row['id'],
            customer_name=row['customer_name'],
            total_amount=float(row['total_amount'] or 0),
        )
        for _, row in unpaid.iterrows()
    ]


def sort_bakers(bakers: List[BakerSales],
                preferred_order: Optional[Sequence[str]] = None) -> List[BakerSales]:
    """
    Preferred bakers first in their fixed order, then the rest first-seen

    Not alphabetical on purpose: the shop lists its own bakers first.
    """
    preferred = list(preferred_order if preferred_order is not None else APP_CONFIG['BAKER_ORDER'])

    def rank(indexed):
        position, baker = indexed
        if baker.baker_name in preferred:
            return (0, preferred.index(baker.baker_name))
        return (1, position)

    return [baker for _, baker in sorted(enumerate(bakers), key=rank)]


def _clean_label(value, default: str) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    text = str(value).strip()
    return text or default


def group_sales_by_baker(items: pd.DataFrame,
                         preferred_order: Optional[Sequence[str]] = None) -> List[BakerSales]:
    """
    Group item revenue and quantity by baker, then by product name

    Args:
        items: Order items with product columns (baker, product_name,
               unit_type, pieces_per_pack)
        preferred_order: Bakers listed first, defaults to APP_CONFIG['BAKER_ORDER']

    Returns:
        BakerSales list
    """
    if items is None or items.empty:
        return []

    df = pd.DataFrame({
        'baker': items['baker'].apply(lambda v: _clean_label(v, BakeryConstants.UNASSIGNED_BAKER)),
        'product_name': items['product_name'].apply(lambda v: _clean_label(v, BakeryConstants.UNKNOWN_PRODUCT)),
        'quantity': items['quantity'].astype(int),
        'revenue': items['subtotal'].fillna(0).astype(float),
        'unit_type': items['unit_type'].apply(lambda v: _clean_label(v, BakeryConstants.UNIT_PIECE)),
        'pieces_per_pack': items['pieces_per_pack'],
    })

    products = df.groupby(['baker', 'product_name'], sort=False).agg(
        quantity=('quantity', 'sum'),
        revenue=('revenue', 'sum'),
        unit_type=('unit_type', 'first'),
        pieces_per_pack=('pieces_per_pack', 'first'),
    ).reset_index()

    bakers = []
    for baker_name in df['baker'].unique():
        rows = products[products['baker'] == baker_name]
        baker_products = [
            BakerProduct(
                product_name=row['product_name'],
                quantity=int(row['quantity']),
                revenue=round(float(row['revenue']), 2),
                unit_type=row['unit_type'],
                pieces_per_pack=None if pd.isna(row['pieces_per_pack']) else int(row['pieces_per_pack']),
            )
            for _, row in rows.iterrows()
        ]
        bakers.append(BakerSales(
            baker_name=baker_name,
            total_revenue=round(sum(p.revenue for p in baker_products), 2),
            products=baker_products,
        ))

    return sort_bakers(bakers, preferred_order)


def build_sales_summary(date_orders: pd.DataFrame, date_items: pd.DataFrame,
                        overall_revenue: float, date_key: Optional[str] = None,
                        preferred_order: Optional[Sequence[str]] = None) -> SalesSummary:
    """
    Assemble the Sales dashboard for one date

    Args:
        date_orders: Orders of the selected date
        date_items: Their items with product columns
        overall_revenue: Revenue across all orders, any date
        date_key: Selected date (YYYY-MM-DD)
    """
    return SalesSummary(
        date_key=date_key,
        date_revenue=sum_revenue(date_orders),
        overall_revenue=round(float(overall_revenue or 0), 2),
        bakers=group_sales_by_baker(date_items, preferred_order),
        unpaid_orders=list_unpaid_orders(date_orders),
    )
