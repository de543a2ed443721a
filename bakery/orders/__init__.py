# bakery/orders/__init__.py
"""
Orders Module
Order list, item entry and order lifecycle flags

Components:
- queries.py: Database queries (OrderQueries)
- manager.py: Create/update/delete and flag toggles (OrderManager)
- filters.py: Date selection, search and card ordering
- forms.py: Create/Edit forms with the item draft (OrderForms)
- dialogs.py: Delete confirmation dialog
- page.py: Main page orchestrator
- common.py: Draft model, validation and constants
"""

from .queries import OrderQueries, normalize_orders, normalize_items
from .manager import OrderManager
from .common import (
    OrderConstants,
    OrderDraft,
    OrderItemDraft,
    OrderValidator,
    parse_quantity
)
from .filters import (
    list_available_dates,
    get_date_completion_status,
    get_default_date,
    resolve_selected_date,
    orders_for_date,
    sort_orders,
    filter_orders
)
from .forms import OrderForms, render_create_form, render_edit_form
from .dialogs import show_delete_dialog
from .page import render_orders_page

__all__ = [
    'OrderQueries',
    'OrderManager',
    'OrderConstants',
    'OrderDraft',
    'OrderItemDraft',
    'OrderValidator',
    'parse_quantity',
    'normalize_orders',
    'normalize_items',
    'list_available_dates',
    'get_date_completion_status',
    'get_default_date',
    'resolve_selected_date',
    'orders_for_date',
    'sort_orders',
    'filter_orders',
    'OrderForms',
    'render_create_form',
    'render_edit_form',
    'show_delete_dialog',
    'render_orders_page',
]
