# bakery/common.py
"""
Common utilities shared by all bakery pages
Constants, timezone and date helpers, number formatting, piece conversion,
Excel export and message helpers

Version: 1.0.0
"""

import logging
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union
from io import BytesIO
from zoneinfo import ZoneInfo

import pandas as pd
import streamlit as st

from .config import APP_CONFIG
from .db import reset_db_engine

logger = logging.getLogger(__name__)

LOCAL_TIMEZONE = ZoneInfo(APP_CONFIG["TIMEZONE"])


# ==================== Constants ====================

class BakeryConstants:
    """Catalog and display constants"""
    UNIT_PIECE = 'piece'
    UNIT_PACK = 'pack'

    UNKNOWN_PRODUCT = 'Unknown'
    UNKNOWN_CATEGORY = 'Others'
    UNASSIGNED_BAKER = 'Unassigned'

    DATE_KEY_FORMAT = '%Y-%m-%d'
    DISPLAY_DATE_FORMAT = '%b %d, %Y'


# ==================== Timezone Helpers ====================

def get_local_now() -> datetime:
    """Get current datetime in the bakery timezone"""
    return datetime.now(LOCAL_TIMEZONE)


def get_local_today() -> date:
    """Get current date in the bakery timezone"""
    return get_local_now().date()


# ==================== Date Helpers ====================

def to_date_key(value: Union[date, datetime, str, None]) -> Optional[str]:
    """
    Normalize a stored order date to its YYYY-MM-DD key

    Time of day is dropped. Strings may be plain dates or ISO timestamps.

    Returns:
        Date key string, or None if the value cannot be read as a date
    """
    if value is None:
        return None

    if isinstance(value, float) and pd.isna(value):
        return None

    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        return value.strftime(BakeryConstants.DATE_KEY_FORMAT)

    if isinstance(value, datetime):
        return value.strftime(BakeryConstants.DATE_KEY_FORMAT)

    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        logger.warning(f"Unreadable order date: {value!r}")
        return None


def format_date(value: Union[date, datetime, str, None],
                fmt: str = BakeryConstants.DISPLAY_DATE_FORMAT) -> str:
    """Format a date or date key for display, e.g. 'Mar 05, 2025'"""
    key = to_date_key(value)
    if key is None:
        return ''
    return date.fromisoformat(key).strftime(fmt)


# ==================== Number Formatting ====================

def format_number(value: Union[int, float, Decimal, None],
                  decimal_places: int = 2,
                  use_thousands_separator: bool = True) -> str:
    """Format number with precision and separators"""
    if value is None or pd.isna(value):
        return "0"

    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))

        quantize_str = '0.' + '0' * decimal_places if decimal_places > 0 else '0'
        value = value.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)

        if use_thousands_separator:
            return f"{value:,}"
        return str(value)

    except Exception as e:
        logger.error(f"Error formatting number {value}: {e}")
        return str(value)


def format_currency(value: Union[int, float, Decimal, None]) -> str:
    """Format a peso amount, e.g. '₱1,250.00'"""
    if value is None or pd.isna(value):
        value = 0
    return f"{APP_CONFIG['CURRENCY_SYMBOL']}{format_number(value, 2)}"


def to_money(value: Union[int, float, Decimal, str, None]) -> Decimal:
    """Convert a stored amount to a 2-place Decimal"""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return Decimal('0.00')
    return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


# ==================== Piece Conversion ====================

def is_pack(unit_type: Optional[str], pieces_per_pack: Any) -> bool:
    """True when an item is sold in packs with a known piece count"""
    if unit_type != BakeryConstants.UNIT_PACK:
        return False
    if pieces_per_pack is None or pd.isna(pieces_per_pack):
        return False
    return int(pieces_per_pack) > 0


def calculate_pieces(quantity: int, unit_type: Optional[str], pieces_per_pack: Any) -> int:
    """
    Total pieces for an ordered quantity

    Packs with a piece count multiply out; everything else counts as pieces.
    """
    if is_pack(unit_type, pieces_per_pack):
        return int(quantity) * int(pieces_per_pack)
    return int(quantity)


def _plural(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def format_piece_quantity(quantity: int, unit_type: Optional[str], pieces_per_pack: Any) -> str:
    """Quantity with piece total, e.g. '2 packs (12 pcs)' or '3 pcs'"""
    quantity = int(quantity)
    if is_pack(unit_type, pieces_per_pack):
        total = calculate_pieces(quantity, unit_type, pieces_per_pack)
        return f"{quantity} {_plural('pack', quantity)} ({total} pcs)"
    return f"{quantity} {_plural('pc', quantity)}"


def format_unit_quantity(quantity: int, unit_type: Optional[str], pieces_per_pack: Any) -> str:
    """Quantity in selling units only, e.g. '2 packs' or '1 pc'"""
    quantity = int(quantity)
    if is_pack(unit_type, pieces_per_pack):
        return f"{quantity} {_plural('pack', quantity)}"
    return f"{quantity} {_plural('pc', quantity)}"


# ==================== Excel Export ====================

def export_to_excel(dataframes: Union[pd.DataFrame, Dict[str, pd.DataFrame]],
                    include_index: bool = False) -> bytes:
    """Export DataFrame(s) to Excel"""
    output = BytesIO()

    if isinstance(dataframes, pd.DataFrame):
        dataframes = {"Sheet1": dataframes}

    try:
        with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
            for sheet_name, df in dataframes.items():
                safe_name = sheet_name[:31].replace('[', '').replace(']', '')
                df.to_excel(writer, sheet_name=safe_name, index=include_index)

        return output.getvalue()

    except Exception as e:
        logger.error(f"Error exporting to Excel: {e}")
        raise


# ==================== UI Helpers ====================

def show_connection_error(error_msg: Optional[str]):
    """Standard banner for failed reads, with a button that reconnects"""
    st.error(f"🔌 **Database Connection Error**\n\n{error_msg or 'Cannot connect to database'}")
    st.info("💡 **Troubleshooting:**\n- Check your internet connection\n- Refresh the page\n- Contact the admin if the issue persists")

    if st.button("🔄 Reconnect", key="reconnect_db"):
        reset_db_engine()
        st.cache_data.clear()
        st.rerun()
