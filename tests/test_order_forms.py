from bakery.orders.forms import sync_product_choice


def test_first_run_resets_product_choice():
    state = {}

    assert sync_product_choice(state, 'create_order', 'Bread')
    assert state['create_order_last_category'] == 'Bread'


def test_same_category_keeps_product_choice():
    state = {}
    sync_product_choice(state, 'create_order', 'Bread')
    state['create_order_product'] = 'Pandesal - ₱5.00'

    assert not sync_product_choice(state, 'create_order', 'Bread')
    assert state['create_order_product'] == 'Pandesal - ₱5.00'


def test_returning_to_a_visited_category_resets_product_choice():
    state = {}
    sync_product_choice(state, 'create_order', 'Bread')
    state['create_order_product'] = 'Pandesal - ₱5.00'

    assert sync_product_choice(state, 'create_order', 'Cakes')
    assert 'create_order_product' not in state
    state['create_order_product'] = 'Ube Cake - ₱250.00'

    assert sync_product_choice(state, 'create_order', 'Bread')
    assert 'create_order_product' not in state


def test_forms_keep_separate_choices():
    state = {'edit_order_product': 'Ube Cake - ₱250.00', 'edit_order_last_category': 'Cakes'}

    sync_product_choice(state, 'create_order', 'Bread')

    assert state['edit_order_product'] == 'Ube Cake - ₱250.00'
