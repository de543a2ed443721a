# bakery/orders/page.py
"""
Main UI orchestrator for Orders domain
Renders the date selector, search, order cards and the create/edit views

Version: 1.1.0
Changes:
- v1.1.0: Selected date survives mutations; fully received dates marked ✓
"""

import logging
from typing import Callable, Dict, Optional

import streamlit as st
import pandas as pd

from .queries import OrderQueries
from .manager import OrderManager
from .common import OrderConstants, OrderValidator
from .filters import filter_orders, list_available_dates, get_date_completion_status, resolve_selected_date
from .forms import OrderForms
from .dialogs import show_delete_dialog
from ..common import (
    format_currency, format_date, get_local_today, export_to_excel,
    show_connection_error
)

logger = logging.getLogger(__name__)


# ==================== Session State ====================

def _init_session_state():
    """Initialize session state for the orders page"""
    defaults = {
        'orders_view': 'list',  # 'list', 'create' or 'edit'
        'orders_edit_id': None,
        'orders_selected_date': None,
    }

    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _show_list():
    st.session_state.orders_view = 'list'
    st.session_state.orders_edit_id = None
    OrderForms.clear_draft()


# ==================== Mutations ====================

def _run_mutation(action: Callable[[], bool], error_message: str):
    """Run one write, then re-fetch; on failure show the error and keep state"""
    try:
        with st.spinner("Updating..."):
            action()
    except Exception as e:
        st.error(f"❌ {error_message}")
        logger.error(f"{error_message}: {e}", exc_info=True)
        return
    st.rerun()


# ==================== Date Selector ====================

def _render_date_selector(orders: pd.DataFrame) -> Optional[str]:
    """Pick an order date; dates where every order is received are marked ✓"""
    dates = list_available_dates(orders)
    if not dates:
        return None

    completion = get_date_completion_status(orders)
    current = resolve_selected_date(orders, st.session_state.orders_selected_date)

    def label(date_key: str) -> str:
        text = format_date(date_key)
        return f"✓ {text}" if completion.get(date_key) else text

    selected = st.radio(
        "📅 Select Order Date",
        options=dates,
        index=dates.index(current),
        format_func=label,
        horizontal=True,
        key="orders_date_radio",
    )
    st.session_state.orders_selected_date = selected
    return selected


# ==================== Order Card ====================

def _render_order_items(items: Optional[pd.DataFrame]):
    if items is None or items.empty:
        st.caption("No items")
        return

    for _, item in items.iterrows():
        name = item['product_name'] if pd.notna(item['product_name']) else OrderConstants.UNKNOWN_ITEM_PRODUCT
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"{name}")
            st.caption(f"{int(item['quantity'])} × {format_currency(item['unit_price'])}")
        with col2:
            st.markdown(f"**{format_currency(item['subtotal'])}**")


def _render_order_card(order: Dict, items: Optional[pd.DataFrame], manager: OrderManager):
    order_id = order['id']
    is_paid = bool(order['is_paid'])
    is_completed = bool(order['is_completed'])

    with st.container(border=True):
        col1, col2, col3 = st.columns([3, 2, 2])

        with col1:
            st.markdown(f"**{order['customer_name']}**")
            badges = ["✅ Received" if is_completed else "🕒 Pending"]
            if order['is_production_complete']:
                badges.append("🍞 Baked")
            st.caption(f"{format_date(order['order_date'])} · {' · '.join(badges)}")

        with col2:
            st.markdown(f"### {format_currency(order['total_amount'])}")

        with col3:
            paid_label = "💵 Paid" if is_paid else "⏳ Unpaid"
            if st.button(paid_label, key=f"order_paid_{order_id}", use_container_width=True,
                         help="Click to toggle paid status"):
                _run_mutation(lambda: manager.toggle_paid(order_id, is_paid),
                              "Failed to update paid status")

        with st.expander("Items"):
            _render_order_items(items)

        col1, col2, col3 = st.columns(3)

        with col1:
            received_label = "↩️ Mark as Not Received" if is_completed else "📦 Mark as Received"
            if st.button(received_label, key=f"order_complete_{order_id}", use_container_width=True,
                         type="secondary" if is_completed else "primary"):
                _run_mutation(lambda: manager.toggle_completed(order_id, is_completed),
                              "Failed to update completion status")

        with col2:
            if st.button("✏️ Edit", key=f"order_edit_{order_id}", use_container_width=True,
                         disabled=not OrderValidator.can_edit(order),
                         help="Cannot edit completed orders" if is_completed else "Edit order"):
                st.session_state.orders_view = 'edit'
                st.session_state.orders_edit_id = order_id
                st.rerun()

        with col3:
            if st.button("🗑️ Delete", key=f"order_delete_{order_id}", use_container_width=True):
                show_delete_dialog(order_id, order['customer_name'], order['total_amount'])


# ==================== Export ====================

def _export_orders_excel(orders: pd.DataFrame, items: Optional[pd.DataFrame], date_key: Optional[str]):
    """Offer the listed orders and their items as an Excel download"""
    if orders.empty:
        st.warning("No orders to export")
        return

    orders_df = orders[[
        'customer_name', 'order_date', 'total_amount', 'is_paid',
        'is_completed', 'is_production_complete'
    ]].copy()
    orders_df.columns = ['Customer', 'Order Date', 'Total', 'Paid', 'Received', 'Baked']

    sheets = {'Orders': orders_df}

    if items is not None and not items.empty:
        names = orders.set_index('id')['customer_name']
        items_df = items.copy()
        items_df['customer_name'] = items_df['order_id'].map(names)
        items_df['product_name'] = items_df['product_name'].fillna(OrderConstants.UNKNOWN_ITEM_PRODUCT)
        items_df = items_df[['customer_name', 'product_name', 'quantity', 'unit_price', 'subtotal']]
        items_df.columns = ['Customer', 'Product', 'Quantity', 'Unit Price', 'Subtotal']
        sheets['Items'] = items_df

    suffix = (date_key or get_local_today().isoformat()).replace('-', '')
    st.download_button(
        label="💾 Download Excel",
        data=export_to_excel(sheets),
        file_name=f"Orders_{suffix}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        key="download_orders_excel"
    )


# ==================== List View ====================

def _render_list_view(queries: OrderQueries):
    orders = queries.get_orders()

    if orders is None:
        show_connection_error(queries.get_last_error())
        return

    col1, col2 = st.columns([3, 1])
    with col2:
        if st.button("➕ New Order", type="primary", use_container_width=True,
                     key="btn_new_order"):
            st.session_state.orders_view = 'create'
            st.rerun()

    if orders.empty:
        st.info("📭 No orders yet")
        return

    selected_date = _render_date_selector(orders)

    search = st.text_input(
        "🔍 Search",
        placeholder="Search by customer name...",
        key="orders_search"
    )

    filtered = filter_orders(orders, selected_date, search)

    if filtered.empty:
        st.info("📭 No orders found for selected date.")
        return

    items = queries.get_items_for_orders(filtered['id'].tolist())
    if items is None:
        st.warning("⚠️ Could not load order items")

    with col1:
        if st.button("📊 Export Excel", key="btn_export_orders"):
            _export_orders_excel(filtered, items, selected_date)

    manager = OrderManager()
    for order in filtered.to_dict('records'):
        order_items = None
        if items is not None:
            order_items = items[items['order_id'] == order['id']]
        _render_order_card(order, order_items, manager)


# ==================== Main Render Function ====================

def render_orders_page():
    """
    Main function to render the Orders page
    Called from pages/1_📋_Orders.py
    """
    _init_session_state()

    flash = st.session_state.pop('orders_flash', None)
    if flash:
        st.success(f"✅ {flash}")

    queries = OrderQueries()
    view = st.session_state.orders_view

    if view in ('create', 'edit'):
        if st.button("⬅️ Back to Orders", key="btn_back_to_list"):
            _show_list()
            st.rerun()

        forms = OrderForms()
        if view == 'create':
            saved_id = forms.render_create_form()
            message = "Order created"
        else:
            saved_id = forms.render_edit_form(st.session_state.orders_edit_id)
            message = "Order updated"

        if saved_id:
            st.session_state['orders_flash'] = message
            _show_list()
            st.rerun()
        return

    st.subheader("📋 All Orders")
    _render_list_view(queries)
