# bakery/sales/page.py
"""
Sales page: revenue per date, per-baker breakdown and unpaid orders

Version: 1.1.0
Changes:
- v1.1.0: Revenue per baker chart
"""

import logging
from typing import Optional

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from .aggregator import SalesSummary, BakerSales, build_sales_summary
from ..orders.queries import OrderQueries
from ..orders.manager import OrderManager
from ..orders.filters import list_available_dates, orders_for_date
from ..common import format_currency, format_date, format_number, show_connection_error

logger = logging.getLogger(__name__)


# ==================== Date Selector ====================

def _render_date_selector(orders: pd.DataFrame) -> Optional[str]:
    """Most recent date is preselected"""
    dates = list_available_dates(orders)
    if not dates:
        return None

    newest_first = list(reversed(dates))
    current = st.session_state.get('sales_selected_date')
    if current not in newest_first:
        current = newest_first[0]

    selected = st.selectbox(
        "📅 Select Sales Date",
        options=newest_first,
        index=newest_first.index(current),
        format_func=format_date,
        key="sales_date_select",
    )
    st.session_state['sales_selected_date'] = selected
    return selected


# ==================== Summary ====================

def _render_summary(summary: SalesSummary, order_count: int):
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("💰 Revenue (Date)", format_currency(summary.date_revenue))
    with col2:
        st.metric("🏦 Overall Revenue", format_currency(summary.overall_revenue),
                  help="All orders, every date")
    with col3:
        st.metric("📋 Orders", format_number(order_count, 0))
    with col4:
        unpaid = len(summary.unpaid_orders)
        st.metric(
            "⏳ Unpaid",
            format_currency(summary.unpaid_total),
            delta=f"{unpaid} orders" if unpaid > 0 else None,
            delta_color="inverse" if unpaid > 0 else "off"
        )


# ==================== Bakers ====================

def _render_baker_chart(summary: SalesSummary):
    fig = go.Figure(data=[go.Bar(
        x=[baker.baker_name for baker in summary.bakers],
        y=[baker.total_revenue for baker in summary.bakers],
        marker_color='#e67e22',
        hovertemplate="<b>%{x}</b><br>%{y:,.2f}<extra></extra>"
    )])

    fig.update_layout(
        height=300,
        margin=dict(l=20, r=20, t=10, b=10),
        yaxis_title="Revenue"
    )

    st.plotly_chart(fig, use_container_width=True)


def _render_baker(baker: BakerSales):
    with st.container(border=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"#### 👩‍🍳 {baker.baker_name}")
        with col2:
            st.markdown(f"### {format_currency(baker.total_revenue)}")

        for product in baker.products:
            col1, col2, col3 = st.columns([3, 2, 2])
            with col1:
                st.markdown(product.product_name)
            with col2:
                st.caption(product.quantity_display)
            with col3:
                st.markdown(f"**{format_currency(product.revenue)}**")


def _render_bakers(summary: SalesSummary):
    st.markdown("### 👩‍🍳 Sales by Baker")

    if not summary.bakers:
        st.info("No items sold on this date")
        return

    _render_baker_chart(summary)
    for baker in summary.bakers:
        _render_baker(baker)


# ==================== Unpaid Orders ====================

def _render_unpaid(summary: SalesSummary):
    st.markdown("### ⏳ Unpaid Orders")

    if not summary.unpaid_orders:
        st.success("✅ All orders for this date are paid")
        return

    manager = OrderManager()
    for order in summary.unpaid_orders:
        col1, col2, col3 = st.columns([3, 2, 2])
        with col1:
            st.markdown(f"**{order.customer_name}**")
        with col2:
            st.markdown(format_currency(order.total_amount))
        with col3:
            if st.button("💵 Mark as Paid", key=f"sales_paid_{order.order_id}",
                         use_container_width=True):
                try:
                    with st.spinner("Updating..."):
                        manager.mark_paid(order.order_id)
                except Exception as e:
                    st.error("❌ Failed to mark order as paid")
                    logger.error(f"Error marking {order.order_id} paid: {e}", exc_info=True)
                else:
                    st.rerun()


# ==================== Main Render Function ====================

def render_sales_page():
    """
    Main function to render the Sales page
    Called from pages/2_💰_Sales.py
    """
    queries = OrderQueries()
    orders = queries.get_orders()

    if orders is None:
        show_connection_error(queries.get_last_error())
        return

    if orders.empty:
        st.info("📭 No sales yet")
        return

    selected_date = _render_date_selector(orders)
    date_orders = orders_for_date(orders, selected_date)

    items = queries.get_items_for_orders(date_orders['id'].tolist())
    overall_revenue = queries.get_overall_revenue()
    if items is None or overall_revenue is None:
        show_connection_error(queries.get_last_error())
        return

    summary = build_sales_summary(date_orders, items, overall_revenue, selected_date)

    _render_summary(summary, len(date_orders))
    st.markdown("---")
    _render_bakers(summary)
    st.markdown("---")
    _render_unpaid(summary)
