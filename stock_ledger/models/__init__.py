# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio (dataclasses) y el estado compartido en memoria.
# Independientes del mecanismo de persistencia (CSV ahora).
# ==============================================================================

from .entities import (
    # Inventario
    Item,

    # Ventas
    Sale,
    SellStatus,

    # Resultados
    SellResult,
    SaveResult,
)
from .state import LedgerState

__all__ = [
    # Inventario
    'Item',

    # Ventas
    'Sale',
    'SellStatus',

    # Resultados
    'SellResult',
    'SaveResult',

    # Estado
    'LedgerState',
]
