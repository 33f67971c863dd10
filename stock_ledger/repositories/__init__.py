# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (archivos CSV).
#
# ESTRUCTURA:
# ├── interfaces.py       → Protocolos (contratos)
# ├── base.py             → RecordRepository (lectura/escritura por líneas)
# ├── item_repository.py  → Acceso a items.csv
# └── sale_repository.py  → Acceso a sales.csv
# ==============================================================================

from stock_ledger.repositories.interfaces import IItemRepository, ISaleRepository

from stock_ledger.repositories.base import RecordRepository
from stock_ledger.repositories.item_repository import ItemRepository
from stock_ledger.repositories.sale_repository import SaleRepository

__all__ = [
    # Interfaces
    'IItemRepository',
    'ISaleRepository',

    # Clase base
    'RecordRepository',

    # Implementaciones CSV
    'ItemRepository',
    'SaleRepository',
]
