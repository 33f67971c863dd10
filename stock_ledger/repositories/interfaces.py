# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Contratos que cumplen los repositorios. Los servicios dependen de estas
# interfaces, no de los archivos CSV:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Cambiar CSV por otro formato solo requiere una nueva implementación
#
# 2. TESTING
#    - Fácil crear dobles que fallen al escribir, sin tocar el disco
#
# ==============================================================================

from typing import Iterable, List, Protocol, Tuple, runtime_checkable

from stock_ledger.models.entities import Item, Sale


@runtime_checkable
class IItemRepository(Protocol):
    """Interfaz para el repositorio de items."""

    file_path: str

    def exists(self) -> bool:
        """Indica si el archivo de items existe."""
        ...

    def load(self) -> Tuple[List[Item], int]:
        """Carga items válidos y cuenta las líneas descartadas."""
        ...

    def save(self, records: Iterable[Item]) -> int:
        """Reemplaza todos los items."""
        ...


@runtime_checkable
class ISaleRepository(Protocol):
    """Interfaz para el repositorio de ventas."""

    file_path: str

    def exists(self) -> bool:
        """Indica si el archivo de ventas existe."""
        ...

    def load(self) -> Tuple[List[Sale], int]:
        """Carga ventas válidas y cuenta las líneas descartadas."""
        ...

    def save(self, records: Iterable[Sale]) -> int:
        """Reemplaza todas las ventas."""
        ...
