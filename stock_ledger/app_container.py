# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único para obtener el estado, los repositorios y los servicios de
# un directorio de datos. Facilita:
#   - Inyección de dependencias
#   - Testing (un contenedor por directorio temporal)
#   - Cambiar repositorios sin tocar servicios
# ==============================================================================

import os
from datetime import datetime
from typing import Callable, Optional

from stock_ledger.config import get_data_dir
from stock_ledger.models.state import LedgerState
from stock_ledger.repositories import ItemRepository, SaleRepository
from stock_ledger.services import InventoryService, SalesService, StorageService


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.
    Todas las piezas comparten el mismo LedgerState.

    Uso:
        container = AppContainer(base_path='/path/to/data')
        container.storage_service.load()
        container.sales_service.sell(1, 2)
    """

    def __init__(
        self,
        base_path: str = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Inicializa el contenedor.

        Args:
            base_path: Directorio donde están items.csv y sales.csv
            clock: Fuente de hora para las ventas
        """
        self._base_path = os.path.abspath(base_path or get_data_dir())
        self._clock = clock

        self.state = LedgerState()

        # Repositorios y servicios (lazy loading)
        self._item_repo: Optional[ItemRepository] = None
        self._sale_repo: Optional[SaleRepository] = None
        self._inventory_service: Optional[InventoryService] = None
        self._sales_service: Optional[SalesService] = None
        self._storage_service: Optional[StorageService] = None

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def item_repo(self) -> ItemRepository:
        """Repositorio de items (singleton)."""
        if self._item_repo is None:
            self._item_repo = ItemRepository(self._base_path)
        return self._item_repo

    @property
    def sale_repo(self) -> SaleRepository:
        """Repositorio de ventas (singleton)."""
        if self._sale_repo is None:
            self._sale_repo = SaleRepository(self._base_path)
        return self._sale_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def inventory_service(self) -> InventoryService:
        """Servicio de inventario (singleton)."""
        if self._inventory_service is None:
            self._inventory_service = InventoryService(self.state)
        return self._inventory_service

    @property
    def sales_service(self) -> SalesService:
        """Servicio de ventas (singleton)."""
        if self._sales_service is None:
            self._sales_service = SalesService(
                self.state,
                self.inventory_service,
                self._clock
            )
        return self._sales_service

    @property
    def storage_service(self) -> StorageService:
        """Servicio de almacenamiento (singleton)."""
        if self._storage_service is None:
            self._storage_service = StorageService(
                self.state,
                self.item_repo,
                self.sale_repo,
                self.inventory_service
            )
        return self._storage_service
