import logging
import os
import threading

import pytest

from conftest import read_lines, write_lines
from stock_ledger.exceptions import PersistenceWriteError
from stock_ledger.services import StorageService


def test_load_from_absent_files_seeds_default_items(container):
    items, sales = container.storage_service.load()

    assert [(i.id, i.name, i.variant, i.quantity, i.purchase_price, i.selling_price) for i in items] == [
        (1, 'Widget', 'Small', 10, 5.0, 8.0),
        (2, 'Bolt', 'Red', 3, 0.5, 1.0),
        (3, 'Gadget', 'Blue', 20, 10.0, 15.0),
    ]
    assert sales == []
    assert container.state.next_item_id == 4
    assert container.state.next_sale_id == 1


def test_load_does_not_create_files(container, data_dir):
    container.storage_service.load()
    assert not os.path.exists(os.path.join(data_dir, 'items.csv'))
    assert not os.path.exists(os.path.join(data_dir, 'sales.csv'))


def test_save_then_load_round_trip(loaded, data_dir):
    loaded.inventory_service.add('Cog', 'Green', 2, 1.0, 2.0)
    loaded.inventory_service.add('Pin', 'Tiny', 7, 0.1, 0.3)
    loaded.sales_service.sell(4, 2)
    loaded.sales_service.sell(5, 3)
    loaded.inventory_service.delete(2)

    items_before = [i.to_dict() for i in loaded.inventory_service.list_items()]
    sales_before = [s.to_dict() for s in loaded.sales_service.list_sales()]

    result = loaded.storage_service.save()
    assert result.ok
    assert result.errors == []

    loaded.state.clear()
    items, sales = loaded.storage_service.load()

    assert [i.to_dict() for i in items] == items_before
    assert [s.to_dict() for s in sales] == sales_before
    assert loaded.state.next_item_id >= max(i.id for i in items) + 1
    assert loaded.state.next_sale_id >= max(s.id for s in sales) + 1


def test_saved_lines_use_fixed_field_order(loaded, data_dir):
    loaded.sales_service.sell(2, 1)
    loaded.storage_service.save()

    assert read_lines(os.path.join(data_dir, 'items.csv')) == [
        '1,Widget,Small,10,5.0,8.0',
        '2,Bolt,Red,2,0.5,1.0',
        '3,Gadget,Blue,20,10.0,15.0',
    ]
    assert read_lines(os.path.join(data_dir, 'sales.csv')) == [
        '1,2,Bolt,1,0.5,2024-03-05 09:07:02',
    ]


def test_save_overwrites_previous_content(loaded, data_dir):
    loaded.storage_service.save()
    loaded.inventory_service.delete(1)
    loaded.inventory_service.delete(3)
    loaded.storage_service.save()

    assert read_lines(os.path.join(data_dir, 'items.csv')) == ['2,Bolt,Red,3,0.5,1.0']
    assert read_lines(os.path.join(data_dir, 'sales.csv')) == []


def test_load_skips_malformed_and_blank_rows(container, data_dir):
    write_lines(os.path.join(data_dir, 'items.csv'), [
        '1,Widget,Small,10,5,8',
        '',
        '2,Bolt,Red',
        'x,Broken,Id,1,1.0,1.0',
        '7,Gear,Black,4,2.5,3.5',
    ])
    write_lines(os.path.join(data_dir, 'sales.csv'), [
        '3,1,Widget,2,6.0,2024-01-01 10:00:00',
        'garbage',
    ])

    items, sales = container.storage_service.load()

    assert [i.id for i in items] == [1, 7]
    assert items[0].purchase_price == 5.0
    assert [s.id for s in sales] == [3]
    assert container.state.next_item_id == 8
    assert container.state.next_sale_id == 4


def test_load_counter_follows_max_id_not_last_row(container, data_dir):
    write_lines(os.path.join(data_dir, 'items.csv'), [
        '9,Nine,a,1,1.0,1.0',
        '2,Two,b,1,1.0,1.0',
    ])
    container.storage_service.load()

    assert container.state.next_item_id == 10
    assert container.inventory_service.add('Ten', 'c', 1, 1.0, 1.0) == 10


def test_load_with_only_sales_does_not_seed(container, data_dir):
    write_lines(os.path.join(data_dir, 'sales.csv'), [
        '1,5,Ghost,1,1.0,2024-01-01 10:00:00',
    ])
    items, sales = container.storage_service.load()

    assert items == []
    assert len(sales) == 1


def test_load_with_empty_files_seeds(container, data_dir):
    write_lines(os.path.join(data_dir, 'items.csv'), ['   '])
    open(os.path.join(data_dir, 'sales.csv'), 'w').close()

    items, _ = container.storage_service.load()
    assert [i.name for i in items] == ['Widget', 'Bolt', 'Gadget']


def test_load_replaces_in_memory_state(loaded):
    loaded.inventory_service.add('Unsaved', 'x', 1, 1.0, 1.0)
    loaded.sales_service.sell(1, 1)

    items, sales = loaded.storage_service.load()

    assert [i.name for i in items] == ['Widget', 'Bolt', 'Gadget']
    assert sales == []
    assert loaded.state.next_sale_id == 1


def test_save_failure_on_items_still_writes_sales(loaded, data_dir, caplog):
    os.mkdir(os.path.join(data_dir, 'items.csv'))
    loaded.sales_service.sell(1, 1)

    with caplog.at_level(logging.ERROR, logger='stock_ledger'):
        result = loaded.storage_service.save()

    assert result.items_saved is False
    assert result.sales_saved is True
    assert not result.ok
    assert len(result.errors) == 1
    assert 'items.csv' in result.errors[0]
    assert read_lines(os.path.join(data_dir, 'sales.csv'))[0].startswith('1,1,Widget,1,')
    assert not os.path.exists(os.path.join(data_dir, 'items.csv.tmp'))
    assert any(r.getMessage() == 'items_save_failed' for r in caplog.records)


class _FailingRepo:
    def __init__(self, file_path):
        self.file_path = file_path

    def exists(self):
        return False

    def load(self):
        return [], 0

    def save(self, records):
        raise PersistenceWriteError(self.file_path, OSError('disk full'))


def test_save_failure_on_sales_does_not_block_items(loaded, data_dir):
    storage = StorageService(
        loaded.state,
        loaded.item_repo,
        _FailingRepo(os.path.join(data_dir, 'sales.csv')),
        loaded.inventory_service,
    )
    result = storage.save()

    assert result.items_saved is True
    assert result.sales_saved is False
    assert 'disk full' in result.errors[0]
    assert len(read_lines(os.path.join(data_dir, 'items.csv'))) == 3


def test_save_into_missing_directory_reports_both_failures(tmp_path):
    from stock_ledger.app_container import AppContainer

    container = AppContainer(str(tmp_path / 'missing'))
    container.storage_service.load()
    result = container.storage_service.save()

    assert result.to_dict() == {
        'ok': False,
        'items_saved': False,
        'sales_saved': False,
        'errors': result.errors,
    }
    assert len(result.errors) == 2


def test_status_reports_counts_and_files(loaded, data_dir):
    loaded.sales_service.sell(1, 1)
    status = loaded.storage_service.status()

    assert status['items'] == 3
    assert status['sales'] == 1
    assert status['next_sale_id'] == 2
    assert status['items_file'] == os.path.join(data_dir, 'items.csv')


@pytest.mark.parametrize('threshold', [0, 3])
def test_reload_after_save_preserves_low_stock(loaded, threshold):
    loaded.storage_service.save()
    loaded.storage_service.load()
    expected = [i.id for i in loaded.inventory_service.list_items() if i.quantity <= threshold]
    assert [i.id for i in loaded.inventory_service.low_stock(threshold)] == expected


class _BlockingRepo:
    """Repositorio que se detiene dentro de save() hasta que el test lo libere."""

    def __init__(self, inner):
        self.inner = inner
        self.file_path = inner.file_path
        self.entered = threading.Event()
        self.release = threading.Event()
        self.written = None

    def exists(self):
        return self.inner.exists()

    def load(self):
        return self.inner.load()

    def save(self, records):
        self.entered.set()
        self.release.wait(timeout=5)
        self.written = [r.quantity for r in records]
        return self.inner.save(records)


def test_sell_waits_while_save_holds_the_lock(loaded, data_dir):
    blocking = _BlockingRepo(loaded.item_repo)
    storage = StorageService(loaded.state, blocking, loaded.sale_repo, loaded.inventory_service)

    saver = threading.Thread(target=storage.save)
    saver.start()
    assert blocking.entered.wait(timeout=5)

    seller = threading.Thread(target=loaded.sales_service.sell, args=(3, 4))
    seller.start()
    seller.join(timeout=0.2)
    assert seller.is_alive()
    assert loaded.state.sales == []

    blocking.release.set()
    saver.join(timeout=5)
    seller.join(timeout=5)

    assert blocking.written == [10, 3, 20]
    assert read_lines(os.path.join(data_dir, 'sales.csv')) == []
    assert loaded.inventory_service.find_by_id(3).quantity == 16
    assert len(loaded.sales_service.list_sales()) == 1
