# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# PRINCIPIOS:
# 1. Los servicios operan sobre un LedgerState compartido
# 2. Devuelven resultados explícitos (bool, SellResult, SaveResult)
# 3. Las shells (Flask y consola) solo llaman a servicios
#
# ESTRUCTURA:
# ├── inventory_service.py → Items y stock
# ├── sales_service.py     → Venta y ledger de ventas
# └── storage_service.py   → Carga, siembra y guardado
# ==============================================================================

from stock_ledger.services.inventory_service import InventoryService, sanitize_text
from stock_ledger.services.sales_service import SalesService
from stock_ledger.services.storage_service import StorageService

__all__ = [
    'InventoryService',
    'SalesService',
    'StorageService',
    'sanitize_text',
]
