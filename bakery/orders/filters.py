# bakery/orders/filters.py
"""
Date bucketing, filtering and sorting of orders

All functions take the orders DataFrame as returned by OrderQueries and do
not touch the database.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from .common import OrderConstants
from ..common import to_date_key

logger = logging.getLogger(__name__)


def with_date_key(orders: pd.DataFrame) -> pd.DataFrame:
    """Copy of orders with a 'date_key' column (YYYY-MM-DD of order_date)"""
    df = orders.copy()
    df['date_key'] = df['order_date'].apply(to_date_key) if not df.empty else pd.Series(dtype=object)
    return df


def list_available_dates(orders: pd.DataFrame) -> List[str]:
    """Distinct order dates, oldest first"""
    if orders is None or orders.empty:
        return []
    keys = with_date_key(orders)['date_key'].dropna().unique().tolist()
    return sorted(keys)


def get_date_completion_status(orders: pd.DataFrame,
                               flag: str = OrderConstants.FLAG_COMPLETED) -> Dict[str, bool]:
    """
    Map each order date to whether every order on it has the flag set

    A date only appears when it has at least one order.
    """
    if orders is None or orders.empty:
        return {}

    df = with_date_key(orders).dropna(subset=['date_key'])
    status = df.groupby('date_key')[flag].agg(lambda values: bool(values.astype(bool).all()))
    return {key: bool(value) for key, value in status.items()}


def get_default_date(orders: pd.DataFrame,
                     flag: str = OrderConstants.FLAG_COMPLETED) -> Optional[str]:
    """
    Date to preselect: the earliest date with an order missing the flag,
    otherwise the earliest date. None when there are no orders.
    """
    dates = list_available_dates(orders)
    if not dates:
        return None

    completion = get_date_completion_status(orders, flag)
    for date_key in dates:
        if not completion.get(date_key, False):
            return date_key
    return dates[0]


def resolve_selected_date(orders: pd.DataFrame, current: Optional[str],
                          flag: str = OrderConstants.FLAG_COMPLETED) -> Optional[str]:
    """Keep the current selection while it still exists, else the default"""
    if current and current in list_available_dates(orders):
        return current
    return get_default_date(orders, flag)


def orders_for_date(orders: pd.DataFrame, date_key: Optional[str]) -> pd.DataFrame:
    """Orders whose order_date falls on date_key; all orders if date_key is empty"""
    if orders is None:
        return pd.DataFrame()

    df = with_date_key(orders)
    if date_key:
        df = df[df['date_key'] == date_key]
    return df.reset_index(drop=True)


def sort_orders(orders: pd.DataFrame) -> pd.DataFrame:
    """Undelivered orders first, then oldest created first"""
    if orders.empty:
        return orders

    df = orders.copy()
    df['_completed'] = df[OrderConstants.FLAG_COMPLETED].astype(bool)
    df['_created'] = pd.to_datetime(df['created_at'], utc=True, errors='coerce', format='mixed')
    df = df.sort_values(['_completed', '_created'], kind='mergesort', na_position='last')
    return df.drop(columns=['_completed', '_created']).reset_index(drop=True)


def filter_orders(orders: pd.DataFrame, selected_date: Optional[str] = None,
                  search: Optional[str] = None) -> pd.DataFrame:
    """
    Orders list shown on the Orders page

    Args:
        orders: All orders
        selected_date: YYYY-MM-DD, exact match on the date part of order_date
        search: Case-insensitive substring of customer_name

    Returns:
        Filtered and sorted DataFrame with a date_key column
    """
    df = orders_for_date(orders, selected_date)
    if df.empty:
        return df

    if search and search.strip():
        needle = search.lower()
        names = df['customer_name'].fillna('').str.lower()
        df = df[names.str.contains(needle, regex=False)]

    return sort_orders(df)
