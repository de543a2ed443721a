# bakery/production/__init__.py
"""
Production planning per order date
"""

from .aggregator import (
    ProductSummary,
    CustomerItem,
    CustomerOrder,
    ProductionViews,
    build_customer_orders,
    summarize_pieces_by_category,
    build_production_views
)
from .page import render_production_page

__all__ = [
    'ProductSummary',
    'CustomerItem',
    'CustomerOrder',
    'ProductionViews',
    'build_customer_orders',
    'summarize_pieces_by_category',
    'build_production_views',
    'render_production_page',
]
