import threading

import pytest

from stock_ledger.models.entities import SellStatus


def test_sell_scenario_insufficient_then_ok(loaded):
    inventory = loaded.inventory_service
    sales = loaded.sales_service

    cog = inventory.add('Cog', 'Green', 2, 1.0, 2.0)
    assert cog == 4

    rejected = sales.sell(cog, 5)
    assert rejected.status == SellStatus.INSUFFICIENT_STOCK
    assert not rejected.ok
    assert inventory.find_by_id(cog).quantity == 2
    assert sales.list_sales() == []

    result = sales.sell(cog, 2)
    assert result.ok
    assert result.profit == pytest.approx(2.0)
    assert inventory.find_by_id(cog).quantity == 0

    recorded = sales.list_sales()
    assert len(recorded) == 1
    assert recorded[0].item_id == 4
    assert recorded[0].quantity_sold == 2
    assert recorded[0].profit == pytest.approx(2.0)


def test_sell_unknown_item_changes_nothing(loaded):
    result = loaded.sales_service.sell(404, 1)

    assert result.status == SellStatus.ITEM_NOT_FOUND
    assert result.error == 'Item no encontrado'
    assert loaded.state.next_sale_id == 1
    assert loaded.sales_service.list_sales() == []


def test_sell_records_snapshot_and_timestamp(loaded):
    result = loaded.sales_service.sell(3, 4)

    sale = result.sale
    assert sale.id == 1
    assert sale.item_name == 'Gadget'
    assert sale.date_sold == '2024-03-05 09:07:02'
    assert result.profit == pytest.approx((15.0 - 10.0) * 4)
    assert loaded.inventory_service.find_by_id(3).quantity == 16


def test_sale_ids_strictly_increase(loaded):
    ids = [loaded.sales_service.sell(1, 1).sale.id for _ in range(3)]
    assert ids == [1, 2, 3]


def test_profit_can_be_negative(loaded):
    item_id = loaded.inventory_service.add('Loss', 'Leader', 5, 3.0, 2.0)
    result = loaded.sales_service.sell(item_id, 2)
    assert result.profit == pytest.approx(-2.0)


def test_selling_entire_stock_is_allowed(loaded):
    assert loaded.sales_service.sell(2, 3).ok
    assert loaded.inventory_service.find_by_id(2).quantity == 0
    assert loaded.sales_service.sell(2, 1).status == SellStatus.INSUFFICIENT_STOCK


def test_non_positive_quantity_is_not_rejected(loaded):
    # Comportamiento conservado: una cantidad negativa devuelve stock
    result = loaded.sales_service.sell(1, -5)

    assert result.ok
    assert result.profit == pytest.approx(-15.0)
    assert loaded.inventory_service.find_by_id(1).quantity == 15


def test_list_sales_newest_first_and_summary(loaded):
    loaded.sales_service.sell(1, 1)
    loaded.sales_service.sell(3, 2)

    newest = loaded.sales_service.list_sales(newest_first=True)
    assert [s.id for s in newest] == [2, 1]

    summary = loaded.sales_service.summary()
    assert summary['sales_count'] == 2
    assert summary['units_sold'] == 3
    assert summary['total_profit'] == pytest.approx(3.0 + 10.0)


def test_get_sale(loaded):
    loaded.sales_service.sell(1, 1)
    assert loaded.sales_service.get_sale(1).item_name == 'Widget'
    assert loaded.sales_service.get_sale(2) is None


def test_sell_result_to_dict(loaded):
    ok = loaded.sales_service.sell(1, 1).to_dict()
    assert ok['ok'] is True
    assert ok['sale']['item_id'] == 1

    bad = loaded.sales_service.sell(2, 50).to_dict()
    assert bad == {'ok': False, 'status': 'INSUFFICIENT_STOCK', 'error': 'Stock insuficiente'}


def test_concurrent_sells_never_oversell(loaded):
    start = threading.Barrier(8)

    def worker():
        start.wait()
        for _ in range(50):
            loaded.sales_service.sell(3, 1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    sales = loaded.sales_service.list_sales()
    assert loaded.inventory_service.find_by_id(3).quantity == 0
    assert len(sales) == 20
    assert [s.id for s in sales] == list(range(1, 21))
