# bakery/catalog/page.py
"""
Menu page: read-only price list of active products by category
"""

import logging
from typing import Optional

import pandas as pd
import streamlit as st

from .queries import ProductQueries
from .common import group_by_category, format_pack_note
from ..common import format_currency, show_connection_error

logger = logging.getLogger(__name__)


@st.cache_data(ttl=300)
def load_active_products() -> Optional[pd.DataFrame]:
    """Active catalog, cached for five minutes"""
    return ProductQueries().get_active_products()


def render_menu_page():
    """Render the menu grouped by category"""
    products = load_active_products()

    if products is None:
        # Failed reads are not worth caching
        load_active_products.clear()
        show_connection_error("Cannot load products. Please check your network connection.")
        return

    if products.empty:
        st.info("📭 No products available")
        return

    for category, items in group_by_category(products).items():
        st.markdown(f"### {category}")

        for _, product in items.iterrows():
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**{product['name']}**")
                note = format_pack_note(product)
                if note:
                    st.caption(note)
            with col2:
                st.markdown(f"**{format_currency(product['price'])}**")

        st.markdown("---")
