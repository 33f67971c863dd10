# ==============================================================================
# CONSOLA INTERACTIVA - Menú del gestor de inventario
# ==============================================================================
# Menú numerado por líneas. Cada pregunta acepta 'cancel' (o 'c') para
# volver al menú. Solo la opción 10 guarda los datos.
#
# Uso:
#   stock-ledger --data-dir /ruta/a/datos
# ==============================================================================

import argparse
import math
import os
import sys
from typing import List, Optional

from stock_ledger.app_container import AppContainer
from stock_ledger.config import LOW_STOCK_THRESHOLD
from stock_ledger.logging_config import configure_logging
from stock_ledger.performance_logger import set_logs_dir, write_function_stats_report
from stock_ledger.services import sanitize_text

CANCEL_WORDS = frozenset(['cancel', 'c', 'cancelar'])

MENU = """
===== GESTOR DE INVENTARIO (Almacenamiento local) =====
1. Agregar item
2. Actualizar item
3. Eliminar item
4. Buscar item
5. Alerta de stock bajo
6. Vender item
7. Historial de ventas
8. Listar items
9. Estado del sistema
10. Guardar y salir"""

EXIT_CHOICE = 10


class _Cancelled(Exception):
    """El usuario canceló o ingresó un valor inválido."""


class LedgerConsole:
    """
    Shell de consola sobre los servicios del contenedor.

    Args:
        container: Contenedor con el estado ya cargado
        stdin / stdout: Flujos de entrada/salida (inyectables para tests)
    """

    def __init__(self, container: AppContainer, stdin=None, stdout=None):
        self.container = container
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    # =========================================================================
    # E/S
    # =========================================================================

    def write(self, text: str = '') -> None:
        print(text, file=self.stdout)

    def prompt(self, message: str) -> Optional[str]:
        """Muestra el mensaje y lee una línea (None en fin de entrada)."""
        self.stdout.write(message)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip('\r\n')

    def _ask(self, message: str, allow_empty: bool = True) -> str:
        value = self.prompt(f"{message} (o escribe 'cancel' para volver): ")
        if value is None or value.strip().lower() in CANCEL_WORDS:
            raise _Cancelled("Cancelado.")
        if not allow_empty and not value.strip():
            raise _Cancelled("Cancelado.")
        return value

    def _ask_int(self, message: str, error: str) -> int:
        try:
            return int(self._ask(message).strip())
        except ValueError:
            raise _Cancelled(error) from None

    def _ask_float(self, message: str, error: str) -> float:
        try:
            value = float(self._ask(message).strip())
        except ValueError:
            raise _Cancelled(error) from None
        if not math.isfinite(value):
            raise _Cancelled(error)
        return value

    def _pause(self) -> None:
        self.prompt("Presiona Enter para volver al menú...")

    # =========================================================================
    # ACCIONES DEL MENÚ
    # =========================================================================

    def add_item(self) -> None:
        name = sanitize_text(self._ask("Nombre del item", allow_empty=False)).strip()
        variant = sanitize_text(self._ask("Talla/Color"))
        quantity = self._ask_int("Cantidad", "Cancelado o cantidad inválida.")
        purchase = self._ask_float("Precio de compra", "Cancelado o precio de compra inválido.")
        selling = self._ask_float("Precio de venta", "Cancelado o precio de venta inválido.")
        if quantity < 0 or purchase < 0 or selling < 0:
            raise _Cancelled("La cantidad y los precios no pueden ser negativos.")

        item_id = self.container.inventory_service.add(name, variant, quantity, purchase, selling)
        self.write(f"Item agregado. ID asignado: {item_id}")

    def update_item(self) -> None:
        item_id = self._ask_int("ID del item", "Cancelado o ID inválido.")
        quantity = self._ask_int("Nueva cantidad", "Cancelado o cantidad inválida.")
        purchase = self._ask_float("Nuevo precio de compra", "Cancelado o precio de compra inválido.")
        selling = self._ask_float("Nuevo precio de venta", "Cancelado o precio de venta inválido.")
        if quantity < 0 or purchase < 0 or selling < 0:
            raise _Cancelled("La cantidad y los precios no pueden ser negativos.")

        if self.container.inventory_service.update(item_id, quantity, purchase, selling):
            self.write("Item actualizado.")
        else:
            self.write("Item no encontrado.")

    def delete_item(self) -> None:
        item_id = self._ask_int("ID del item a ELIMINAR", "Cancelado o ID inválido.")
        inventory = self.container.inventory_service

        item = inventory.find_by_id(item_id)
        if item is None:
            self.write("Item no encontrado.")
            return

        self.write(f"Eliminando item: {item.name} (Cant: {item.quantity})")
        confirm = self.prompt("¿Seguro? (s/n): ") or ''
        if confirm.strip().lower() not in ('s', 'y'):
            self.write("Eliminación cancelada.")
            return

        if inventory.delete(item_id):
            self.write("Item eliminado.")
        else:
            self.write("Error al eliminar el item.")

    def search_items(self) -> None:
        query = self._ask("Nombre a buscar", allow_empty=False)
        self.write("\n--- RESULTADOS ---")
        items = self.container.inventory_service.search_by_name(query.strip())
        if not items:
            self.write("Sin coincidencias.")
        for item in items:
            self._write_item(item)

    def low_stock(self) -> None:
        self._ask("¿Mostrar items con stock bajo? Enter para continuar")
        self.write("\n--- STOCK BAJO ---")
        items = self.container.inventory_service.low_stock(LOW_STOCK_THRESHOLD)
        if not items:
            self.write("No hay items con stock bajo.")
        for item in items:
            self.write(f"{item.name} | Cant: {item.quantity}")
        self._pause()

    def sell_item(self) -> None:
        item_id = self._ask_int("ID del item", "Cancelado o ID inválido.")
        quantity = self._ask_int("Cantidad vendida", "Cancelado o cantidad inválida.")
        if quantity <= 0:
            raise _Cancelled("La cantidad debe ser mayor que 0.")

        result = self.container.sales_service.sell(item_id, quantity)
        if result.ok:
            self.write(f"Venta registrada. Ganancia: {result.profit:.2f}")
        else:
            self.write(f"{result.error}.")

    def sales_history(self) -> None:
        self._ask("¿Mostrar historial de ventas? Enter para continuar")
        self.write("\n--- HISTORIAL DE VENTAS ---")
        sales = self.container.sales_service.list_sales(newest_first=True)
        if not sales:
            self.write("Aún no hay ventas registradas.")
        for sale in sales:
            self.write(
                f"Venta: {sale.id} | {sale.item_name} | Cant: {sale.quantity_sold}"
                f" | Ganancia: {sale.profit:.2f} | Fecha: {sale.date_sold}"
            )
        self._pause()

    def list_items(self) -> None:
        self.write("\n--- LISTA DE ITEMS ---")
        items = self.container.inventory_service.list_items()
        if not items:
            self.write("No hay items en el inventario.")
        for item in items:
            self._write_item(item)
        self._pause()

    def system_status(self) -> None:
        status = self.container.storage_service.status()
        summary = self.container.sales_service.summary()
        self.write("\nVerificando estado del sistema...")
        self.write(f" [OK] Items en memoria: {status['items']}")
        self.write(f" [OK] Ventas registradas: {status['sales']}")
        self.write(f" [OK] Ganancia total: {summary['total_profit']:.2f}")
        self.write(f" Archivos: {status['items_file']} / {status['sales_file']}")
        self._pause()

    def save(self) -> bool:
        result = self.container.storage_service.save()
        if result.items_saved:
            self.write(f" [Guardado] Items en {self.container.item_repo.file_path}")
        else:
            self.write(" [Error] No se pudieron guardar los items")
        if result.sales_saved:
            self.write(f" [Guardado] Ventas en {self.container.sale_repo.file_path}")
        else:
            self.write(" [Error] No se pudieron guardar las ventas")
        return result.ok

    def _write_item(self, item) -> None:
        self.write(
            f"ID: {item.id} | {item.name} | {item.variant} | Cant: {item.quantity}"
            f" | Compra: {item.purchase_price:.2f} | Venta: {item.selling_price:.2f}"
        )

    # =========================================================================
    # LOOP PRINCIPAL
    # =========================================================================

    def run(self) -> int:
        """
        Ejecuta el menú hasta 'Guardar y salir' o fin de entrada.

        Returns:
            0 si se guardó todo, 1 si hubo errores al guardar o salida sin guardar
        """
        actions = {
            1: self.add_item,
            2: self.update_item,
            3: self.delete_item,
            4: self.search_items,
            5: self.low_stock,
            6: self.sell_item,
            7: self.sales_history,
            8: self.list_items,
            9: self.system_status,
        }

        while True:
            self.write(MENU)
            raw = self.prompt("Opción: ")
            if raw is None:
                self.write("\nFin de entrada. Saliendo sin guardar.")
                return 1

            try:
                choice = int(raw.strip())
            except ValueError:
                continue

            if choice == EXIT_CHOICE:
                return 0 if self.save() else 1

            action = actions.get(choice)
            if action is None:
                continue
            try:
                action()
            except _Cancelled as e:
                self.write(str(e))


def main(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Gestor de inventario y ventas")
    parser.add_argument("--data-dir", default=None, help="Directorio de items.csv y sales.csv")
    args = parser.parse_args(argv)

    configure_logging()

    container = AppContainer(args.data_dir)
    set_logs_dir(os.path.join(container.base_path, 'logs'))
    print("Modo local (memoria + archivos CSV)")
    items, sales = container.storage_service.load()
    print(f" [Cargado] {len(items)} items, {len(sales)} ventas.")

    try:
        return LedgerConsole(container).run()
    finally:
        write_function_stats_report()


if __name__ == '__main__':
    sys.exit(main())
