# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Centraliza la transacción de venta y el ledger de ventas.
# La venta es la ÚNICA operación que toca items y ventas a la vez.
# ==============================================================================

from datetime import datetime
from typing import Any, Callable, Dict, List

from stock_ledger.config import DATE_FORMAT
from stock_ledger.logging_config import get_logger
from stock_ledger.models.entities import Sale, SellResult, SellStatus
from stock_ledger.models.state import LedgerState
from stock_ledger.performance_logger import profile_function
from stock_ledger.services.inventory_service import InventoryService

logger = get_logger("services.sales")


class SalesService:
    """
    Servicio para gestión de ventas.

    Responsabilidades:
    - Registrar ventas (descuento de stock + cálculo de ganancia + ledger)
    - Historial de ventas
    - Resumen de ganancias
    """

    def __init__(
        self,
        state: LedgerState,
        inventory_service: InventoryService,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Inicializa el servicio de ventas.

        Args:
            state: Estado compartido del ledger
            inventory_service: Servicio de inventario
            clock: Fuente de hora local (inyectable para tests)
        """
        self.state = state
        self.inventory_service = inventory_service
        self.clock = clock

    # =========================================================================
    # VENTA
    # =========================================================================

    @profile_function(name="Registrar venta")
    def sell(self, item_id: int, quantity: int) -> SellResult:
        """
        Registra la venta de `quantity` unidades de un item.

        Pasos (todos bajo el lock del estado):
        1. Buscar item → ITEM_NOT_FOUND si no existe
        2. quantity > stock → INSUFFICIENT_STOCK, sin cambios
        3. Ganancia = (precio venta - precio compra) * quantity
        4. Descontar stock
        5. Agregar venta al ledger con el nombre actual del item

        NOTA: quantity <= 0 no se rechaza aquí; una cantidad negativa
        aumenta el stock y registra una ganancia negativa.

        Returns:
            SellResult con status, profit y la venta registrada
        """
        with self.state.lock:
            item = self.inventory_service.find_by_id(item_id)
            if item is None:
                logger.warning("sell_rejected", extra={"item_id": item_id, "reason": "not_found"})
                return SellResult(SellStatus.ITEM_NOT_FOUND)

            if quantity > item.quantity:
                logger.warning("sell_rejected", extra={
                    "item_id": item_id,
                    "reason": "insufficient_stock",
                    "requested": quantity,
                    "available": item.quantity,
                })
                return SellResult(SellStatus.INSUFFICIENT_STOCK)

            profit = item.unit_profit * quantity
            item.quantity -= quantity

            sale = Sale(
                id=self.state.allocate_sale_id(),
                item_id=item.id,
                item_name=item.name,
                quantity_sold=quantity,
                profit=profit,
                date_sold=self.clock().strftime(DATE_FORMAT),
            )
            self.state.sales.append(sale)

        logger.info("sale_recorded", extra={
            "sale_id": sale.id,
            "item_id": item_id,
            "quantity": quantity,
            "profit": profit,
        })
        return SellResult(SellStatus.OK, profit=profit, sale=sale)

    # =========================================================================
    # CONSULTAS DEL LEDGER
    # =========================================================================

    def list_sales(self, newest_first: bool = False) -> List[Sale]:
        """
        Historial de ventas.

        Args:
            newest_first: True para la más reciente primero (como en pantalla)
        """
        with self.state.lock:
            sales = list(self.state.sales)
        if newest_first:
            sales.reverse()
        return sales

    def get_sale(self, sale_id: int):
        with self.state.lock:
            for sale in self.state.sales:
                if sale.id == sale_id:
                    return sale
        return None

    def summary(self) -> Dict[str, Any]:
        """
        Totales agregados del ledger.

        Returns:
            Dict con sales_count, units_sold, total_profit
        """
        with self.state.lock:
            sales = list(self.state.sales)
        return {
            'sales_count': len(sales),
            'units_sold': sum(s.quantity_sold for s in sales),
            'total_profit': sum(s.profit for s in sales),
        }
