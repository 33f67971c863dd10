import os
import sys
from datetime import datetime

import pytest

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from stock_ledger.app_container import AppContainer
from stock_ledger.logging_config import reset_logging
from stock_ledger.main import create_app

FIXED_NOW = datetime(2024, 3, 5, 9, 7, 2)


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def container(data_dir):
    """Contenedor sin cargar, con reloj fijo."""
    return AppContainer(data_dir, clock=lambda: FIXED_NOW)


@pytest.fixture
def loaded(container):
    """Contenedor cargado desde un directorio vacío (items de ejemplo)."""
    container.storage_service.load()
    return container


@pytest.fixture
def client(container):
    app = create_app(container=container)
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


def write_lines(path, lines):
    with open(path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines) + '\n')


def read_lines(path):
    with open(path, 'r', encoding='utf-8') as f:
        return [line.rstrip('\n') for line in f]
