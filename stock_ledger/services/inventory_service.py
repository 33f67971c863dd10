# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con items y stock.
# Opera sobre el LedgerState compartido; no toca archivos.
# ==============================================================================

from typing import List, Optional

from stock_ledger.config import FIELD_DELIMITER, LOW_STOCK_THRESHOLD
from stock_ledger.logging_config import get_logger
from stock_ledger.models.entities import Item
from stock_ledger.models.state import LedgerState

logger = get_logger("services.inventory")


def sanitize_text(value: str) -> str:
    """
    Limpia texto libre antes de guardarlo.
    El formato de archivo no tiene comillas: el separador y los saltos de
    línea se reemplazan por espacios.
    """
    if value is None:
        return ''
    for ch in (FIELD_DELIMITER, '\r', '\n'):
        value = value.replace(ch, ' ')
    return value


class InventoryService:
    """
    Servicio para gestión de inventario.

    Responsabilidades:
    - Alta, actualización y baja de items
    - Búsqueda por ID y por nombre
    - Alerta de stock bajo

    Todas las búsquedas por ID son lineales y devuelven la PRIMERA
    coincidencia en el orden del inventario.
    """

    def __init__(self, state: LedgerState):
        """
        Inicializa el servicio de inventario.

        Args:
            state: Estado compartido del ledger
        """
        self.state = state

    # =========================================================================
    # OPERACIONES DE ITEMS
    # =========================================================================

    def add(
        self,
        name: str,
        variant: str,
        quantity: int,
        purchase_price: float,
        selling_price: float
    ) -> int:
        """
        Agrega un item nuevo. No valida rangos numéricos (lo hace el llamador).

        Returns:
            ID asignado
        """
        with self.state.lock:
            item_id = self.state.allocate_item_id()
            self.state.items.append(Item(
                id=item_id,
                name=name,
                variant=variant,
                quantity=quantity,
                purchase_price=purchase_price,
                selling_price=selling_price,
            ))
        logger.info("item_added", extra={"item_id": item_id, "item_name": name})
        return item_id

    def delete(self, item_id: int) -> bool:
        """
        Elimina el item. Las ventas que lo referencian quedan intactas.

        Returns:
            True si existía y se eliminó
        """
        with self.state.lock:
            for index, item in enumerate(self.state.items):
                if item.id == item_id:
                    del self.state.items[index]
                    logger.info("item_deleted", extra={"item_id": item_id})
                    return True
        return False

    def update(
        self,
        item_id: int,
        quantity: int,
        purchase_price: float,
        selling_price: float
    ) -> bool:
        """
        Actualiza cantidad y precios. Nombre y variante no cambian.

        Returns:
            True si se actualizó, False si no existía
        """
        with self.state.lock:
            item = self.find_by_id(item_id)
            if item is None:
                return False
            item.quantity = quantity
            item.purchase_price = purchase_price
            item.selling_price = selling_price
        logger.info("item_updated", extra={"item_id": item_id, "quantity": quantity})
        return True

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def find_by_id(self, item_id: int) -> Optional[Item]:
        """Primer item con ese ID, o None."""
        with self.state.lock:
            for item in self.state.items:
                if item.id == item_id:
                    return item
        return None

    def search_by_name(self, query: str) -> List[Item]:
        """
        Busca items por nombre (búsqueda parcial, sin distinguir mayúsculas).

        Args:
            query: Texto a buscar

        Returns:
            Items que coinciden, en orden del inventario
        """
        query_lower = query.lower()
        with self.state.lock:
            return [item for item in self.state.items if query_lower in item.name.lower()]

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> List[Item]:
        """Items con cantidad <= threshold, en orden del inventario."""
        with self.state.lock:
            return [item for item in self.state.items if item.is_low_stock(threshold)]

    def list_items(self) -> List[Item]:
        with self.state.lock:
            return list(self.state.items)

    def count(self) -> int:
        with self.state.lock:
            return len(self.state.items)
