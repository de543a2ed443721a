# bakery/orders/forms.py
"""
Form components for Orders domain
Create and Edit order forms sharing one item entry panel

The line items live in an OrderDraft in session state until the order is
saved; adding or removing an item never touches the database.

Version: 1.1.0
Changes:
- v1.1.0: Category picker outside the item panel so the product list follows
          the selected category
"""

import logging
from datetime import date
from typing import Optional

import streamlit as st
import pandas as pd

from .common import OrderDraft, OrderValidator
from .manager import OrderManager
from .queries import OrderQueries
from ..catalog.queries import ProductQueries
from ..catalog.common import list_categories, products_in_category, format_product_option
from ..common import format_currency, get_local_today, show_connection_error, to_date_key

logger = logging.getLogger(__name__)

DRAFT_KEY = 'order_draft'
DRAFT_OWNER_KEY = 'order_draft_owner'


def sync_product_choice(session_state, key_prefix: str, category: str) -> bool:
    """
    Drop the remembered product when the category changed since the last run,
    so the product selectbox falls back to the first product of the category

    Returns:
        True if the product choice was reset
    """
    category_key = f"{key_prefix}_last_category"
    changed = session_state.get(category_key) != category
    if changed:
        session_state.pop(f"{key_prefix}_product", None)
    session_state[category_key] = category
    return changed


class OrderForms:
    """Form components for order management"""

    def __init__(self):
        self.queries = OrderQueries()
        self.product_queries = ProductQueries()
        self.manager = OrderManager()

    # ==================== Draft State ====================

    @staticmethod
    def _get_draft(owner: str, loader=None) -> OrderDraft:
        """
        Draft for the order being edited ('new' or an order id)

        A different owner starts a fresh draft, filled by loader if given.
        """
        if st.session_state.get(DRAFT_OWNER_KEY) != owner or DRAFT_KEY not in st.session_state:
            st.session_state[DRAFT_KEY] = loader() if loader else OrderDraft()
            st.session_state[DRAFT_OWNER_KEY] = owner
        return st.session_state[DRAFT_KEY]

    @staticmethod
    def clear_draft():
        """Forget the draft and the create form inputs"""
        for key in (DRAFT_KEY, DRAFT_OWNER_KEY, 'create_order_customer', 'create_order_date'):
            st.session_state.pop(key, None)

    # ==================== Item Entry ====================

    def _render_item_entry(self, draft: OrderDraft, products: pd.DataFrame, key_prefix: str):
        """Category → product → quantity picker with Add Item button"""
        st.markdown("### 🧺 Add Order Item")

        categories = list_categories(products)
        if not categories:
            st.warning("No active products available")
            return

        category = st.selectbox(
            "Category",
            options=categories,
            key=f"{key_prefix}_category"
        )

        sync_product_choice(st.session_state, key_prefix, category)
        category_products = products_in_category(products, category)
        product_options = {
            format_product_option(row): row['id']
            for _, row in category_products.iterrows()
        }

        col1, col2, col3 = st.columns([3, 1, 1])

        with col1:
            selected_label = st.selectbox(
                "Product",
                options=list(product_options.keys()),
                key=f"{key_prefix}_product"
            )

        with col2:
            quantity_text = st.text_input(
                "Quantity",
                value="1",
                key=f"{key_prefix}_quantity"
            )

        with col3:
            st.markdown("<div style='height: 1.75rem'></div>", unsafe_allow_html=True)
            add_clicked = st.button("➕ Add Item", use_container_width=True,
                                    key=f"{key_prefix}_add_item")

        if add_clicked:
            product = None
            if selected_label is not None:
                product_id = product_options[selected_label]
                product = category_products[category_products['id'] == product_id].iloc[0].to_dict()

            if draft.add_item(product, quantity_text):
                st.toast(f"✅ Added {product['name']}")
                # Quantity goes back to 1 for the next item
                st.session_state.pop(f"{key_prefix}_quantity", None)
                st.rerun()

    def _render_item_list(self, draft: OrderDraft, key_prefix: str):
        """Current items with remove buttons and the running total"""
        st.markdown("### 📝 Order Items")

        if draft.is_empty():
            st.info("No items added yet")
        else:
            for index, item in enumerate(draft.items):
                col1, col2, col3 = st.columns([4, 2, 1])
                with col1:
                    st.markdown(f"**{item.product_name}**")
                    st.caption(f"{item.quantity} × {format_currency(item.unit_price)}")
                with col2:
                    st.markdown(f"**{format_currency(item.subtotal)}**")
                with col3:
                    if st.button("🗑️", key=f"{key_prefix}_remove_{index}", help="Remove item"):
                        draft.remove_item(index)
                        st.rerun()

        st.markdown("---")
        st.markdown(f"#### Total: {format_currency(draft.total)}")

    def _load_products(self) -> Optional[pd.DataFrame]:
        products = self.product_queries.get_active_products()
        if products is None:
            show_connection_error(self.product_queries.get_last_error())
        return products

    # ==================== Create Order Form ====================

    def render_create_form(self) -> Optional[str]:
        """
        Render the new order form

        Returns:
            New order id after a successful save, else None
        """
        st.subheader("➕ New Order")

        products = self._load_products()
        if products is None:
            return None

        draft = self._get_draft('new')

        col1, col2 = st.columns(2)
        with col1:
            customer_name = st.text_input("Customer Name *", key="create_order_customer")
        with col2:
            order_date = st.date_input("Order Date *", value=get_local_today(),
                                       key="create_order_date")

        st.markdown("---")
        self._render_item_entry(draft, products, "create_order")
        st.markdown("---")
        self._render_item_list(draft, "create_order")

        if st.button("💾 Save Order", type="primary", use_container_width=True,
                     disabled=draft.is_empty(), key="create_order_submit"):
            return self._submit(None, customer_name, order_date, draft)

        return None

    # ==================== Edit Order Form ====================

    def render_edit_form(self, order_id: str) -> Optional[str]:
        """
        Render the edit form for an existing order

        Returns:
            The order id after a successful save, else None
        """
        st.subheader("✏️ Edit Order")

        order = self.queries.get_order(order_id)
        if order is None:
            if self.queries.get_last_error():
                show_connection_error(self.queries.get_last_error())
            else:
                st.error("❌ Order not found")
            return None

        if not OrderValidator.can_edit(order):
            st.warning("🔒 Completed orders cannot be edited")
            return None

        def load_draft() -> OrderDraft:
            items = self.queries.get_order_items(order_id)
            if items is None:
                return OrderDraft()
            return OrderDraft.from_items(items)

        products = self._load_products()
        if products is None:
            return None

        draft = self._get_draft(order_id, load_draft)

        stored_date = to_date_key(order['order_date'])
        col1, col2 = st.columns(2)
        with col1:
            customer_name = st.text_input("Customer Name *", value=order['customer_name'],
                                          key=f"edit_order_customer_{order_id}")
        with col2:
            order_date = st.date_input(
                "Order Date *",
                value=date.fromisoformat(stored_date) if stored_date else get_local_today(),
                key=f"edit_order_date_{order_id}"
            )

        st.markdown("---")
        self._render_item_entry(draft, products, "edit_order")
        st.markdown("---")
        self._render_item_list(draft, "edit_order")

        if st.button("💾 Update Order", type="primary", use_container_width=True,
                     disabled=draft.is_empty(), key="edit_order_submit"):
            return self._submit(order_id, customer_name, order_date, draft)

        return None

    # ==================== Submit ====================

    def _submit(self, order_id: Optional[str], customer_name: str, order_date: date,
                draft: OrderDraft) -> Optional[str]:
        """Validate, then create or update; the draft survives failures"""
        is_valid, error = OrderValidator.validate_order(customer_name, order_date, draft)
        if not is_valid:
            st.error(f"⚠️ {error}")
            return None

        try:
            with st.spinner("Saving order..."):
                if order_id is None:
                    saved_id = self.manager.create_order(customer_name, order_date, draft)
                else:
                    self.manager.update_order(order_id, customer_name, order_date, draft)
                    saved_id = order_id
        except ValueError as e:
            st.error(f"❌ {str(e)}")
            return None
        except Exception as e:
            st.error("❌ Failed to save order. Please try again.")
            logger.error(f"Error saving order {order_id or '(new)'}: {e}", exc_info=True)
            return None

        self.clear_draft()
        return saved_id


def render_create_form() -> Optional[str]:
    """Convenience function to render the create form"""
    return OrderForms().render_create_form()


def render_edit_form(order_id: str) -> Optional[str]:
    """Convenience function to render the edit form"""
    return OrderForms().render_edit_form(order_id)
