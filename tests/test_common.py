from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from bakery.common import (
    to_date_key,
    format_date,
    format_currency,
    to_money,
    export_to_excel,
)


@pytest.mark.parametrize("value, expected", [
    ('2026-03-01', '2026-03-01'),
    ('2026-03-01T23:59:00+08:00', '2026-03-01'),
    (date(2026, 3, 1), '2026-03-01'),
    (datetime(2026, 3, 1, 18, 30), '2026-03-01'),
    (pd.Timestamp('2026-03-01 06:00'), '2026-03-01'),
    (None, None),
    (float('nan'), None),
    ('soon', None),
])
def test_to_date_key(value, expected):
    assert to_date_key(value) == expected


def test_format_date():
    assert format_date('2026-03-05') == 'Mar 05, 2026'
    assert format_date(None) == ''


def test_money_helpers():
    assert format_currency(1250) == '₱1,250.00'
    assert format_currency(None) == '₱0.00'
    assert to_money('270') == Decimal('270.00')
    assert to_money(0.1 + 0.2) == Decimal('0.30')


def test_export_to_excel_writes_workbook():
    data = export_to_excel({
        'Orders': pd.DataFrame({'Customer': ['Ana'], 'Total': [790.0]}),
        'Items': pd.DataFrame({'Product': ['Ensaymada'], 'Quantity': [2]}),
    })

    assert data[:2] == b'PK'
