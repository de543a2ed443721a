import pytest

from bakery.common import calculate_pieces, format_piece_quantity
from bakery.production.aggregator import build_production_views


@pytest.mark.parametrize("quantity, unit_type, pieces_per_pack, expected", [
    (3, 'pack', 6, 18),
    (5, 'piece', None, 5),
    (2, 'pack', None, 2),
    (4, None, None, 4),
])
def test_piece_rule(quantity, unit_type, pieces_per_pack, expected):
    assert calculate_pieces(quantity, unit_type, pieces_per_pack) == expected


@pytest.mark.parametrize("quantity, unit_type, pieces_per_pack, expected", [
    (2, 'pack', 6, "2 packs (12 pcs)"),
    (1, 'pack', 6, "1 pack (6 pcs)"),
    (3, 'piece', None, "3 pcs"),
    (1, 'piece', None, "1 pc"),
])
def test_customer_quantity_display(quantity, unit_type, pieces_per_pack, expected):
    assert format_piece_quantity(quantity, unit_type, pieces_per_pack) == expected


@pytest.fixture
def day(make_orders, make_items):
    orders = make_orders([
        {'id': 'o1', 'customer_name': 'Ana', 'order_date': '2026-03-01'},
        {'id': 'o2', 'customer_name': 'Ben', 'order_date': '2026-03-01'},
        {'id': 'o3', 'customer_name': 'Cora', 'order_date': '2026-03-01',
         'is_production_complete': True, 'is_paid': True},
    ])
    items = make_items([
        {'order_id': 'o1', 'product_id': 'p-pandesal', 'quantity': 5,
         'product_name': 'Pandesal', 'category': 'Bread', 'unit_type': 'piece'},
        {'order_id': 'o1', 'product_id': 'p-ensaymada', 'quantity': 3,
         'product_name': 'Ensaymada', 'category': 'Bread', 'unit_type': 'pack',
         'pieces_per_pack': 6},
        {'order_id': 'o2', 'product_id': 'p-ube-cake', 'quantity': 1,
         'product_name': 'Ube Cake', 'category': 'Cakes', 'unit_type': 'piece'},
        {'order_id': 'o2', 'product_id': 'p-gone', 'quantity': 2},
        {'order_id': 'o2', 'product_id': 'p-pandesal', 'quantity': 10,
         'product_name': 'Pandesal', 'category': 'Bread', 'unit_type': 'piece'},
        {'order_id': 'o3', 'product_id': 'p-ensaymada', 'quantity': 4,
         'product_name': 'Ensaymada', 'category': 'Bread', 'unit_type': 'pack',
         'pieces_per_pack': 6},
    ])
    return orders, items


def test_product_view_sums_pieces_for_incomplete_orders(day):
    views = build_production_views(*day)

    bread = {p.product_name: p.total_pieces for p in views.product_view['Bread']}
    assert bread == {'Pandesal': 15, 'Ensaymada': 18}


def test_product_view_categories_alphabetical_products_first_seen(day):
    views = build_production_views(*day)

    assert views.categories == ['Bread', 'Cakes', 'Others']
    assert [p.product_name for p in views.product_view['Bread']] == ['Pandesal', 'Ensaymada']


def test_missing_product_counts_as_unknown_in_others(day):
    views = build_production_views(*day)

    others = views.product_view['Others']
    assert [(p.product_name, p.total_pieces) for p in others] == [('Unknown', 2)]


def test_customer_view_partitions_by_production_flag(day):
    views = build_production_views(*day)

    assert [c.customer_name for c in views.incomplete] == ['Ana', 'Ben']
    assert [c.customer_name for c in views.completed] == ['Cora']
    assert views.incomplete_count == 2
    assert views.completed_count == 1
    assert views.completed[0].is_paid


def test_customer_items_carry_quantity_strings(day):
    views = build_production_views(*day)

    ana = views.incomplete[0]
    assert [item.quantity_display for item in ana.items] == ["5 pcs", "3 packs (18 pcs)"]


def test_all_complete_leaves_product_view_empty(make_orders, make_items):
    orders = make_orders([{'id': 'o1', 'order_date': '2026-03-01', 'is_production_complete': True}])
    items = make_items([{'order_id': 'o1', 'quantity': 2, 'product_name': 'Pandesal',
                         'category': 'Bread', 'unit_type': 'piece'}])

    views = build_production_views(orders, items)

    assert views.product_view == {}
    assert views.completed_count == 1


def test_orders_without_items(make_orders, make_items):
    orders = make_orders([{'id': 'o1', 'customer_name': 'Ana', 'order_date': '2026-03-01'}])

    views = build_production_views(orders, make_items([]))

    assert views.product_view == {}
    assert views.incomplete[0].items == []
