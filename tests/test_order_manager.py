from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from bakery.common import to_date_key
from bakery.db import check_db_connection
from bakery.orders.common import OrderDraft, OrderItemDraft


@pytest.fixture
def draft(catalog):
    draft = OrderDraft()
    draft.add_item(catalog['p-ensaymada'], "2")
    draft.add_item(catalog['p-ube-cake'], "1")
    return draft


@pytest.fixture
def order_id(manager, draft):
    return manager.create_order("Ana Cruz", date(2026, 3, 1), draft)


def _count(engine, table, order_id):
    column = 'order_id' if table == 'OrderItems' else 'id'
    with engine.connect() as conn:
        return conn.execute(
            text(f'SELECT COUNT(*) FROM "{table}" WHERE {column} = :order_id'),
            {'order_id': order_id}
        ).scalar()


def test_connection_check(engine):
    assert check_db_connection(engine) == (True, None)


def test_create_then_fetch_round_trip(queries, order_id):
    order = queries.get_order(order_id)

    assert order['customer_name'] == "Ana Cruz"
    assert to_date_key(order['order_date']) == '2026-03-01'
    assert order['total_amount'] == 790.0
    assert not order['is_paid']
    assert not order['is_completed']
    assert not order['is_production_complete']

    items = queries.get_order_items(order_id)
    assert items[['product_id', 'quantity', 'unit_price', 'subtotal']].to_dict('records') == [
        {'product_id': 'p-ensaymada', 'quantity': 2, 'unit_price': 270.0, 'subtotal': 540.0},
        {'product_id': 'p-ube-cake', 'quantity': 1, 'unit_price': 250.0, 'subtotal': 250.0},
    ]
    assert list(items['product_name']) == ['Ensaymada', 'Ube Cake']
    assert list(items['baker']) == ['Anna', 'Mommy']


def test_create_rejects_invalid_order(manager, queries, draft):
    with pytest.raises(ValueError, match="customer name"):
        manager.create_order("   ", date(2026, 3, 1), draft)

    with pytest.raises(ValueError, match="at least one item"):
        manager.create_order("Ana", date(2026, 3, 1), OrderDraft())

    assert queries.get_orders().empty


def test_update_replaces_items_and_total(manager, queries, catalog, order_id):
    new_draft = OrderDraft()
    new_draft.add_item(catalog['p-pandesal'], "10")

    assert manager.update_order(order_id, "Ana C.", date(2026, 3, 2), new_draft)

    order = queries.get_order(order_id)
    assert order['customer_name'] == "Ana C."
    assert to_date_key(order['order_date']) == '2026-03-02'
    assert order['total_amount'] == 50.0

    items = queries.get_order_items(order_id)
    assert list(items['product_id']) == ['p-pandesal']
    assert list(items['quantity']) == [10]


def test_failed_update_keeps_previous_order(manager, queries, engine, order_id):
    bad_draft = OrderDraft(items=[
        OrderItemDraft(product_id='p-missing', product_name='Ghost', quantity=1,
                       unit_price=Decimal('1.00')),
    ])

    with pytest.raises(IntegrityError):
        manager.update_order(order_id, "Changed", date(2026, 3, 9), bad_draft)

    order = queries.get_order(order_id)
    assert order['customer_name'] == "Ana Cruz"
    assert order['total_amount'] == 790.0
    assert _count(engine, 'OrderItems', order_id) == 2


def test_update_missing_order(manager, draft):
    with pytest.raises(ValueError, match="not found"):
        manager.update_order('no-such-order', "Ana", date(2026, 3, 1), draft)


def test_delete_removes_order_and_items(manager, engine, order_id):
    assert manager.delete_order(order_id)

    assert _count(engine, 'Orders', order_id) == 0
    assert _count(engine, 'OrderItems', order_id) == 0


def test_delete_missing_order(manager):
    with pytest.raises(ValueError):
        manager.delete_order('no-such-order')


def test_toggles_flip_one_flag(manager, queries, order_id):
    manager.toggle_paid(order_id, False)
    order = queries.get_order(order_id)
    assert (order['is_paid'], order['is_completed'], order['is_production_complete']) == \
        (True, False, False)

    manager.toggle_production_complete(order_id, False)
    manager.toggle_completed(order_id, False)
    manager.toggle_paid(order_id, True)
    order = queries.get_order(order_id)
    assert (order['is_paid'], order['is_completed'], order['is_production_complete']) == \
        (False, True, True)


def test_mark_paid_is_idempotent(manager, queries, order_id):
    manager.mark_paid(order_id)
    manager.mark_paid(order_id)

    assert queries.get_order(order_id)['is_paid']


def test_unknown_flag_is_rejected(manager, order_id):
    with pytest.raises(ValueError, match="Unknown order flag"):
        manager.set_flag(order_id, 'customer_name', True)


def test_overall_revenue_spans_all_dates(manager, queries, catalog, order_id):
    other = OrderDraft()
    other.add_item(catalog['p-pandesal'], "4")
    manager.create_order("Ben", date(2026, 3, 5), other)

    assert queries.get_overall_revenue() == 810.0


def test_orders_list_and_items_for_several_orders(manager, queries, catalog, order_id):
    other = OrderDraft()
    other.add_item(catalog['p-pandesal'], "4")
    other_id = manager.create_order("Ben", date(2026, 3, 5), other)

    orders = queries.get_orders()
    assert list(orders['id']) == [order_id, other_id]
    assert orders['is_paid'].dtype == bool

    items = queries.get_items_for_orders([order_id, other_id])
    assert len(items) == 3
    assert queries.get_items_for_orders([]).empty

