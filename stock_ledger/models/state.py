# ==============================================================================
# ESTADO DEL LEDGER - Colecciones en memoria
# ==============================================================================
# Un único objeto con las dos colecciones y los contadores de ID.
# Se comparte por referencia entre InventoryService, SalesService y
# StorageService (ver app_container.py). El lock protege todo el estado.
# ==============================================================================

import threading
from dataclasses import dataclass, field
from typing import List

from stock_ledger.models.entities import Item, Sale


@dataclass
class LedgerState:
    """
    Estado compartido del inventario y del ledger de ventas.

    Attributes:
        items: Items en orden de inserción
        sales: Ventas en orden cronológico (solo se agregan)
        next_item_id: Próximo ID de item
        next_sale_id: Próximo ID de venta
        lock: Lock reentrante; toda lectura/escritura del estado lo toma
    """
    items: List[Item] = field(default_factory=list)
    sales: List[Sale] = field(default_factory=list)
    next_item_id: int = 1
    next_sale_id: int = 1
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def clear(self) -> None:
        """Vacía colecciones y reinicia contadores."""
        with self.lock:
            self.items.clear()
            self.sales.clear()
            self.next_item_id = 1
            self.next_sale_id = 1

    def allocate_item_id(self) -> int:
        with self.lock:
            item_id = self.next_item_id
            self.next_item_id += 1
            return item_id

    def allocate_sale_id(self) -> int:
        with self.lock:
            sale_id = self.next_sale_id
            self.next_sale_id += 1
            return sale_id

    def is_empty(self) -> bool:
        with self.lock:
            return not self.items and not self.sales
