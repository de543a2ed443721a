# bakery/catalog/common.py
"""
Catalog helpers: category grouping and product labels
"""

from typing import Dict, List

import pandas as pd

from ..common import format_currency, is_pack


def list_categories(products: pd.DataFrame) -> List[str]:
    """Distinct categories, alphabetical"""
    if products is None or products.empty:
        return []
    return sorted(products['category'].dropna().unique().tolist())


def group_by_category(products: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """
    Group products by category

    Categories are alphabetical; products keep their incoming order
    (the catalog query sorts them by name).
    """
    return {
        category: products[products['category'] == category].reset_index(drop=True)
        for category in list_categories(products)
    }


def products_in_category(products: pd.DataFrame, category: str) -> pd.DataFrame:
    """Products of one category in catalog order"""
    if products is None:
        return pd.DataFrame()
    return products[products['category'] == category].reset_index(drop=True)


def format_product_option(product) -> str:
    """Selectbox label, e.g. 'Banana Loaf - ₱250.00'"""
    return f"{product['name']} - {format_currency(product['price'])}"


def format_pack_note(product) -> str:
    """'6 pcs per pack' for packs, empty otherwise"""
    if is_pack(product.get('unit_type'), product.get('pieces_per_pack')):
        return f"{int(product['pieces_per_pack'])} pcs per pack"
    return ''
