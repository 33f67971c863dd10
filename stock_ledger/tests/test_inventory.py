from stock_ledger.models.entities import Item
from stock_ledger.services import sanitize_text


def test_add_assigns_increasing_ids_and_find_returns_fields(container):
    inventory = container.inventory_service
    first = inventory.add('Cog', 'Green', 2, 1.0, 2.0)
    second = inventory.add('Nut', 'Steel', 0, 0.1, 0.2)

    assert first == 1
    assert second > first

    item = inventory.find_by_id(first)
    assert item == Item(id=1, name='Cog', variant='Green', quantity=2,
                        purchase_price=1.0, selling_price=2.0)


def test_seeded_store_continues_ids_after_defaults(loaded):
    assert loaded.inventory_service.add('Cog', 'Green', 2, 1.0, 2.0) == 4


def test_delete_removes_item_and_missing_id_changes_nothing(loaded):
    inventory = loaded.inventory_service

    assert inventory.delete(2) is True
    assert inventory.find_by_id(2) is None
    assert [i.id for i in inventory.list_items()] == [1, 3]

    before = [i.to_dict() for i in inventory.list_items()]
    assert inventory.delete(99) is False
    assert [i.to_dict() for i in inventory.list_items()] == before


def test_delete_keeps_sales_referencing_the_item(loaded):
    loaded.sales_service.sell(1, 2)
    assert loaded.inventory_service.delete(1)

    sales = loaded.sales_service.list_sales()
    assert len(sales) == 1
    assert sales[0].item_id == 1
    assert sales[0].item_name == 'Widget'


def test_update_overwrites_stock_and_prices_only(loaded):
    inventory = loaded.inventory_service

    assert inventory.update(1, 42, 6.5, 9.25) is True
    item = inventory.find_by_id(1)
    assert (item.name, item.variant) == ('Widget', 'Small')
    assert (item.quantity, item.purchase_price, item.selling_price) == (42, 6.5, 9.25)


def test_update_missing_item_returns_false(loaded):
    before = [i.to_dict() for i in loaded.inventory_service.list_items()]
    assert loaded.inventory_service.update(77, 1, 1.0, 1.0) is False
    assert [i.to_dict() for i in loaded.inventory_service.list_items()] == before


def test_update_does_not_validate_ranges(loaded):
    assert loaded.inventory_service.update(2, -4, -1.0, 0.0)
    assert loaded.inventory_service.find_by_id(2).quantity == -4


def test_search_by_name_is_case_insensitive(loaded):
    inventory = loaded.inventory_service
    lower = [i.id for i in inventory.search_by_name('bolt')]
    upper = [i.id for i in inventory.search_by_name('BOLT')]

    assert lower == upper == [2]
    assert [i.id for i in inventory.search_by_name('g')] == [1, 3]
    assert inventory.search_by_name('sprocket') == []


def test_low_stock_default_seed_returns_only_bolt(loaded):
    low = loaded.inventory_service.low_stock(5)
    assert [i.name for i in low] == ['Bolt']


def test_low_stock_threshold_is_inclusive(loaded):
    assert [i.id for i in loaded.inventory_service.low_stock(10)] == [1, 2]
    assert loaded.inventory_service.low_stock(2) == []


def test_duplicate_ids_first_occurrence_wins(loaded):
    state = loaded.state
    state.items.append(Item(id=1, name='Shadow', variant='x', quantity=1))

    assert loaded.inventory_service.find_by_id(1).name == 'Widget'
    assert loaded.inventory_service.update(1, 0, 0.0, 0.0)
    assert state.items[-1].quantity == 1

    assert loaded.inventory_service.delete(1)
    assert loaded.inventory_service.find_by_id(1).name == 'Shadow'


def test_sanitize_text_replaces_delimiter_and_newlines():
    assert sanitize_text('Bolt, M8\nlong') == 'Bolt  M8 long'
    assert sanitize_text(None) == ''
