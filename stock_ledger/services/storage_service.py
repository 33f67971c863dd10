# ==============================================================================
# SERVICIO DE ALMACENAMIENTO
# ==============================================================================
# Carga y guarda el estado completo (items.csv + sales.csv).
#
# - load(): lee ambos archivos, ajusta contadores de ID y siembra items de
#   ejemplo si no hay datos.
# - save(): reescribe ambos archivos. Si uno falla, el otro igual se intenta.
# ==============================================================================

from typing import Any, Dict, List, Tuple

from stock_ledger.config import DEFAULT_ITEMS
from stock_ledger.exceptions import PersistenceWriteError
from stock_ledger.logging_config import get_logger
from stock_ledger.models.entities import Item, Sale, SaveResult
from stock_ledger.models.state import LedgerState
from stock_ledger.performance_logger import profile_function
from stock_ledger.repositories.interfaces import IItemRepository, ISaleRepository
from stock_ledger.services.inventory_service import InventoryService

logger = get_logger("services.storage")


class StorageService:
    """
    Puerta de persistencia del ledger.

    Responsabilidades:
    - Cargar items y ventas al iniciar
    - Sembrar items de ejemplo cuando no hay datos
    - Guardar todo el estado de forma explícita
    """

    def __init__(
        self,
        state: LedgerState,
        item_repo: IItemRepository,
        sale_repo: ISaleRepository,
        inventory_service: InventoryService
    ):
        """
        Args:
            state: Estado compartido del ledger
            item_repo: Repositorio de items
            sale_repo: Repositorio de ventas
            inventory_service: Usado para sembrar los items de ejemplo
        """
        self.state = state
        self.item_repo = item_repo
        self.sale_repo = sale_repo
        self.inventory_service = inventory_service

    # =========================================================================
    # CARGA
    # =========================================================================

    @profile_function(name="Cargar datos")
    def load(self) -> Tuple[List[Item], List[Sale]]:
        """
        Reemplaza el estado en memoria con el contenido de los archivos.

        Un archivo inexistente cuenta como colección vacía. Las líneas
        inválidas se descartan. Si al final no hay items ni ventas, se
        siembran DEFAULT_ITEMS.

        Returns:
            (items, ventas) cargados
        """
        with self.state.lock:
            self.state.clear()

            items, skipped_items = self.item_repo.load()
            for item in items:
                self.state.items.append(item)
                self.state.next_item_id = max(self.state.next_item_id, item.id + 1)

            sales, skipped_sales = self.sale_repo.load()
            for sale in sales:
                self.state.sales.append(sale)
                self.state.next_sale_id = max(self.state.next_sale_id, sale.id + 1)

            logger.info("data_loaded", extra={
                "items": len(items),
                "sales": len(sales),
                "skipped_items": skipped_items,
                "skipped_sales": skipped_sales,
            })

            if self.state.is_empty():
                self.seed()

            return list(self.state.items), list(self.state.sales)

    def seed(self) -> List[int]:
        """
        Agrega los items de ejemplo.

        Returns:
            IDs asignados
        """
        ids = [self.inventory_service.add(*values) for values in DEFAULT_ITEMS]
        logger.info("default_items_seeded", extra={"item_ids": ids})
        return ids

    # =========================================================================
    # GUARDADO
    # =========================================================================

    @profile_function(name="Guardar datos")
    def save(self) -> SaveResult:
        """
        Reescribe items.csv y sales.csv con el estado actual.
        Nunca lanza por errores de escritura: quedan en SaveResult.errors.

        Returns:
            SaveResult indicando qué archivo se guardó
        """
        result = SaveResult()
        with self.state.lock:
            try:
                count = self.item_repo.save(self.state.items)
                result.items_saved = True
                logger.info("items_saved", extra={"count": count, "file": self.item_repo.file_path})
            except PersistenceWriteError as e:
                result.errors.append(str(e))
                logger.error("items_save_failed", extra={"file": e.path, "error": str(e.cause)})

            try:
                count = self.sale_repo.save(self.state.sales)
                result.sales_saved = True
                logger.info("sales_saved", extra={"count": count, "file": self.sale_repo.file_path})
            except PersistenceWriteError as e:
                result.errors.append(str(e))
                logger.error("sales_save_failed", extra={"file": e.path, "error": str(e.cause)})

        return result

    # =========================================================================
    # ESTADO
    # =========================================================================

    def status(self) -> Dict[str, Any]:
        """Resumen del estado del sistema (items, ventas, archivos)."""
        with self.state.lock:
            return {
                'items': self.inventory_service.count(),
                'sales': len(self.state.sales),
                'next_item_id': self.state.next_item_id,
                'next_sale_id': self.state.next_sale_id,
                'items_file': self.item_repo.file_path,
                'sales_file': self.sale_repo.file_path,
            }
