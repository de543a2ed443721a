# bakery/catalog/__init__.py
"""
Product catalog: queries, category grouping and the Menu page
"""

from .queries import ProductQueries, normalize_products
from .common import (
    list_categories,
    group_by_category,
    products_in_category,
    format_product_option,
    format_pack_note
)

__all__ = [
    'ProductQueries',
    'normalize_products',
    'list_categories',
    'group_by_category',
    'products_in_category',
    'format_product_option',
    'format_pack_note',
]
