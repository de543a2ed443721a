from datetime import date
from decimal import Decimal

import pytest

from bakery.orders.common import OrderDraft, OrderValidator, parse_quantity


@pytest.fixture
def ensaymada(catalog):
    return catalog['p-ensaymada']


@pytest.fixture
def ube_cake(catalog):
    return catalog['p-ube-cake']


@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    (" 4 ", 4),
    ("", 1),
    ("abc", 1),
    (None, 1),
    ("2.7", 2),
    ("0", 0),
    ("-2", -2),
    (5, 5),
    ("inf", 1),
    ("-Infinity", 1),
    ("1e999", 1),
    ("nan", 1),
    (float("inf"), 1),
    ("1e2", 100),
])
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_total_is_sum_of_subtotals(ensaymada, ube_cake):
    draft = OrderDraft()

    assert draft.add_item(ensaymada, "2")
    assert draft.add_item(ube_cake, "1")

    assert [item.subtotal for item in draft.items] == [Decimal('540.00'), Decimal('250.00')]
    assert draft.total == Decimal('790.00')


def test_add_snapshots_current_price(ensaymada):
    draft = OrderDraft()
    draft.add_item(ensaymada, "1")

    ensaymada['price'] = 300.00

    assert draft.items[0].unit_price == Decimal('270.00')


def test_add_refuses_missing_product_or_low_quantity(ensaymada):
    draft = OrderDraft()

    assert not draft.add_item(None, "2")
    assert not draft.add_item(ensaymada, "0")
    assert not draft.add_item(ensaymada, "-1")
    assert draft.is_empty()


def test_non_numeric_quantity_adds_one(ensaymada):
    draft = OrderDraft()

    assert draft.add_item(ensaymada, "lots")
    assert draft.items[0].quantity == 1


def test_overflowing_quantity_adds_one(catalog):
    draft = OrderDraft()

    assert draft.add_item(catalog['p-pandesal'], 'inf')
    assert draft.add_item(catalog['p-pandesal'], '1e999')
    assert [item.quantity for item in draft.items] == [1, 1]
    assert draft.total == Decimal('10.00')


def test_remove_by_position(ensaymada, ube_cake):
    draft = OrderDraft()
    draft.add_item(ensaymada, "2")
    draft.add_item(ube_cake, "1")

    assert draft.remove_item(0)
    assert [item.product_name for item in draft.items] == ['Ube Cake']
    assert draft.total == Decimal('250.00')


def test_remove_out_of_range_is_noop(ensaymada):
    draft = OrderDraft()
    draft.add_item(ensaymada, "1")

    assert not draft.remove_item(5)
    assert not draft.remove_item(-1)
    assert len(draft.items) == 1


def test_from_items_rebuilds_draft():
    draft = OrderDraft.from_items([
        {'id': 'i1', 'product_id': 'p1', 'product_name': 'Ensaymada',
         'quantity': 2, 'unit_price': 270.0},
        {'id': 'i2', 'product_id': None, 'product_name': None,
         'quantity': 1, 'unit_price': 99.5},
    ])

    assert draft.items[1].product_name == 'Unknown Product'
    assert draft.total == Decimal('639.50')


def test_validation_messages(ensaymada):
    draft = OrderDraft()

    assert OrderValidator.validate_order("  ", date(2026, 3, 1), draft) == \
        (False, "Please enter customer name")
    assert OrderValidator.validate_order("Ana", date(2026, 3, 1), draft) == \
        (False, "Please add at least one item to the order")

    draft.add_item(ensaymada, "1")
    assert OrderValidator.validate_order("Ana", date(2026, 3, 1), draft) == (True, None)


def test_completed_orders_cannot_be_edited():
    assert OrderValidator.can_edit({'is_completed': False})
    assert not OrderValidator.can_edit({'is_completed': True})
