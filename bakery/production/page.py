# bakery/production/page.py
"""
Production page: what to bake for one order date

Product view sums pieces per category for orders still in production;
customer view lists every order with a toggle for its production flag.
"""

import logging
from typing import Optional

import streamlit as st
import pandas as pd

from .aggregator import ProductionViews, CustomerOrder, build_production_views
from ..orders.queries import OrderQueries
from ..orders.manager import OrderManager
from ..orders.common import OrderConstants
from ..orders.filters import (
    list_available_dates, get_date_completion_status, resolve_selected_date, orders_for_date
)
from ..common import format_date, format_number, show_connection_error

logger = logging.getLogger(__name__)

PRODUCTION_FLAG = OrderConstants.FLAG_PRODUCTION_COMPLETE


# ==================== Date Selector ====================

def _render_date_selector(orders: pd.DataFrame) -> Optional[str]:
    dates = list_available_dates(orders)
    if not dates:
        return None

    completion = get_date_completion_status(orders, PRODUCTION_FLAG)
    current = resolve_selected_date(
        orders, st.session_state.get('production_selected_date'), PRODUCTION_FLAG
    )

    def label(date_key: str) -> str:
        text = format_date(date_key)
        return f"✓ {text}" if completion.get(date_key) else text

    selected = st.radio(
        "📅 Select Production Date",
        options=dates,
        index=dates.index(current),
        format_func=label,
        horizontal=True,
        key="production_date_radio",
    )
    st.session_state['production_selected_date'] = selected
    return selected


# ==================== Summary ====================

def _render_summary(views: ProductionViews):
    total_pieces = sum(
        product.total_pieces
        for products in views.product_view.values()
        for product in products
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("🔥 To Bake", format_number(views.incomplete_count, 0),
                  help="Orders whose production is not complete")
    with col2:
        st.metric("✅ Baked", format_number(views.completed_count, 0),
                  help="Orders whose production is complete")
    with col3:
        st.metric("🍞 Pieces Pending", format_number(total_pieces, 0))


# ==================== Product View ====================

def _render_product_view(views: ProductionViews):
    if not views.product_view:
        st.success("🎉 Nothing left to bake for this date")
        return

    for category, products in views.product_view.items():
        with st.container(border=True):
            st.markdown(f"#### {category}")
            for product in products:
                col1, col2 = st.columns([4, 1])
                with col1:
                    st.markdown(product.product_name)
                with col2:
                    st.markdown(f"**{format_number(product.total_pieces, 0)} pcs**")


# ==================== Customer View ====================

def _render_customer(customer: CustomerOrder, manager: OrderManager):
    with st.container(border=True):
        col1, col2 = st.columns([3, 1])

        with col1:
            status = ["💵 Paid" if customer.is_paid else "⏳ Unpaid",
                      "✅ Received" if customer.is_completed else "🕒 Pending"]
            st.markdown(f"**{customer.customer_name}**")
            st.caption(" · ".join(status))

        with col2:
            done = customer.is_production_complete
            label = "↩️ Not Baked" if done else "🍞 Mark Baked"
            if st.button(label, key=f"production_toggle_{customer.order_id}",
                         use_container_width=True, type="secondary" if done else "primary"):
                try:
                    with st.spinner("Updating..."):
                        manager.toggle_production_complete(customer.order_id, done)
                except Exception as e:
                    st.error("❌ Failed to update production status")
                    logger.error(f"Error toggling production for {customer.order_id}: {e}",
                                 exc_info=True)
                else:
                    st.rerun()

        if not customer.items:
            st.caption("No items")
        for item in customer.items:
            st.markdown(f"- {item.product_name}: **{item.quantity_display}**")


def _render_customer_view(views: ProductionViews):
    manager = OrderManager()

    st.markdown(f"### 🔥 In Production ({views.incomplete_count})")
    if not views.incomplete:
        st.info("No orders in production")
    for customer in views.incomplete:
        _render_customer(customer, manager)

    st.markdown(f"### ✅ Production Complete ({views.completed_count})")
    if not views.completed:
        st.info("No completed orders yet")
    for customer in views.completed:
        _render_customer(customer, manager)


# ==================== Main Render Function ====================

def render_production_page():
    """
    Main function to render the Production page
    Called from pages/3_🏭_Production.py
    """
    queries = OrderQueries()
    orders = queries.get_orders()

    if orders is None:
        show_connection_error(queries.get_last_error())
        return

    if orders.empty:
        st.info("📭 No orders yet")
        return

    selected_date = _render_date_selector(orders)
    date_orders = orders_for_date(orders, selected_date)

    items = queries.get_items_for_orders(date_orders['id'].tolist())
    if items is None:
        show_connection_error(queries.get_last_error())
        return

    views = build_production_views(date_orders, items)

    _render_summary(views)
    st.markdown("---")

    view = st.radio(
        "View",
        options=["📦 By Product", "👥 By Customer"],
        horizontal=True,
        label_visibility="collapsed",
        key="production_view_mode"
    )

    if view == "📦 By Product":
        _render_product_view(views)
    else:
        _render_customer_view(views)
