# bakery/orders/dialogs.py
"""
Dialog components for Orders domain
"""

import logging

import streamlit as st

from .manager import OrderManager
from ..common import format_currency

logger = logging.getLogger(__name__)


# ==================== Delete Order Dialog ====================

@st.dialog("🗑️ Delete Order")
def show_delete_dialog(order_id: str, customer_name: str, total_amount: float):
    """
    Ask before deleting an order and all of its items

    Args:
        order_id: Order ID to delete
        customer_name: Customer name for display
        total_amount: Order total for display
    """
    st.markdown(f"### Delete order for **{customer_name}**?")
    st.markdown(f"Total: **{format_currency(total_amount)}**")
    st.warning("⚠️ This removes the order and all of its items. This action cannot be undone.")

    st.markdown("---")
    col1, col2 = st.columns(2)

    deleted = False
    with col1:
        if st.button("🗑️ Delete Order", type="primary", use_container_width=True,
                     key="dialog_delete_btn"):
            try:
                with st.spinner("Deleting..."):
                    OrderManager().delete_order(order_id)
                deleted = True
            except Exception as e:
                st.error("❌ Failed to delete order")
                logger.error(f"Error deleting order {order_id}: {e}", exc_info=True)

    with col2:
        if st.button("✖️ Cancel", use_container_width=True, key="dialog_cancel_delete"):
            st.rerun()

    if deleted:
        st.session_state['orders_flash'] = f"Order for {customer_name} deleted"
        st.rerun()
