# bakery/sales/__init__.py
"""
Sales dashboard: revenue totals, baker breakdown and unpaid orders
"""

from .aggregator import (
    BakerProduct,
    BakerSales,
    UnpaidOrder,
    SalesSummary,
    sum_revenue,
    list_unpaid_orders,
    sort_bakers,
    group_sales_by_baker,
    build_sales_summary
)
from .page import render_sales_page

__all__ = [
    'BakerProduct',
    'BakerSales',
    'UnpaidOrder',
    'SalesSummary',
    'sum_revenue',
    'list_unpaid_orders',
    'sort_bakers',
    'group_sales_by_baker',
    'build_sales_summary',
    'render_sales_page',
]
