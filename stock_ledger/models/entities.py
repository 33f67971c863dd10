# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# La conversión a/desde líneas de texto (to_record / from_record) mantiene
# el orden fijo de campos de los archivos CSV.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

from stock_ledger.config import FIELD_DELIMITER, RECORD_FIELDS
from stock_ledger.exceptions import MalformedRecordError


# ==============================================================================
# ENUMERACIONES - Resultados posibles
# ==============================================================================

class SellStatus(str, Enum):
    """Resultado de una venta."""
    OK = "OK"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"          # El item no existe
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"  # Cantidad mayor al stock


# Mensajes para las shells (HTTP y consola)
SELL_ERRORS = {
    SellStatus.ITEM_NOT_FOUND: 'Item no encontrado',
    SellStatus.INSUFFICIENT_STOCK: 'Stock insuficiente',
}


def format_decimal(value: float) -> str:
    """Representación más corta que se relee sin pérdida."""
    return repr(float(value))


def _parse(fields: List[str], line: str, index: int, cast):
    try:
        return cast(fields[index])
    except ValueError:
        raise MalformedRecordError(line, f"campo {index} inválido") from None


def _split(line: str) -> List[str]:
    fields = line.split(FIELD_DELIMITER)
    if len(fields) < RECORD_FIELDS:
        raise MalformedRecordError(line, f"se esperaban {RECORD_FIELDS} campos, hay {len(fields)}")
    return fields


# ==============================================================================
# ENTIDADES DE INVENTARIO
# ==============================================================================

@dataclass
class Item:
    """
    Item del inventario.

    Attributes:
        id: Identificador único (asignado por el inventario, empieza en 1)
        name: Nombre del item (inmutable después de crearse)
        variant: Talla o color (inmutable después de crearse)
        quantity: Stock actual
        purchase_price: Precio de compra (costo)
        selling_price: Precio de venta
    """
    id: int
    name: str
    variant: str = ''
    quantity: int = 0
    purchase_price: float = 0.0
    selling_price: float = 0.0

    @property
    def unit_profit(self) -> float:
        """Ganancia por unidad vendida."""
        return self.selling_price - self.purchase_price

    def is_low_stock(self, threshold: int) -> bool:
        return self.quantity <= threshold

    def to_record(self) -> List[str]:
        """Campos en orden: id,name,variant,quantity,purchase_price,selling_price"""
        return [
            str(self.id),
            self.name,
            self.variant,
            str(self.quantity),
            format_decimal(self.purchase_price),
            format_decimal(self.selling_price),
        ]

    @classmethod
    def from_record(cls, line: str) -> 'Item':
        """
        Crea instancia desde una línea de items.csv.

        Raises:
            MalformedRecordError: Si faltan campos o un número no es válido
        """
        fields = _split(line)
        return cls(
            id=_parse(fields, line, 0, int),
            name=fields[1],
            variant=fields[2],
            quantity=_parse(fields, line, 3, int),
            purchase_price=_parse(fields, line, 4, float),
            selling_price=_parse(fields, line, 5, float),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para respuestas JSON."""
        return {
            'id': self.id,
            'name': self.name,
            'variant': self.variant,
            'quantity': self.quantity,
            'purchase_price': self.purchase_price,
            'selling_price': self.selling_price,
        }


# ==============================================================================
# ENTIDADES DE VENTA
# ==============================================================================

@dataclass(frozen=True)
class Sale:
    """
    Registro de venta. Inmutable una vez agregado al ledger.

    Attributes:
        id: Identificador único, estrictamente creciente
        item_id: ID del item vendido (referencia débil, el item puede borrarse)
        item_name: Nombre del item al momento de la venta
        quantity_sold: Cantidad vendida
        profit: Ganancia de la venta (puede ser negativa)
        date_sold: Fecha y hora local (YYYY-MM-DD HH:MM:SS)
    """
    id: int
    item_id: int
    item_name: str
    quantity_sold: int
    profit: float
    date_sold: str

    def to_record(self) -> List[str]:
        """Campos en orden: id,item_id,item_name,quantity_sold,profit,date_sold"""
        return [
            str(self.id),
            str(self.item_id),
            self.item_name,
            str(self.quantity_sold),
            format_decimal(self.profit),
            self.date_sold,
        ]

    @classmethod
    def from_record(cls, line: str) -> 'Sale':
        """
        Crea instancia desde una línea de sales.csv.

        Raises:
            MalformedRecordError: Si faltan campos o un número no es válido
        """
        fields = _split(line)
        return cls(
            id=_parse(fields, line, 0, int),
            item_id=_parse(fields, line, 1, int),
            item_name=fields[2],
            quantity_sold=_parse(fields, line, 3, int),
            profit=_parse(fields, line, 4, float),
            date_sold=fields[5],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para respuestas JSON."""
        return {
            'id': self.id,
            'item_id': self.item_id,
            'item_name': self.item_name,
            'quantity_sold': self.quantity_sold,
            'profit': self.profit,
            'date_sold': self.date_sold,
        }


# ==============================================================================
# RESULTADOS DE OPERACIONES
# ==============================================================================

@dataclass
class SellResult:
    """
    Resultado de SalesService.sell().

    Attributes:
        status: OK / ITEM_NOT_FOUND / INSUFFICIENT_STOCK
        profit: Ganancia calculada (solo si status == OK)
        sale: Venta registrada (solo si status == OK)
    """
    status: SellStatus
    profit: Optional[float] = None
    sale: Optional[Sale] = None

    @property
    def ok(self) -> bool:
        return self.status == SellStatus.OK

    @property
    def error(self) -> Optional[str]:
        return SELL_ERRORS.get(self.status)

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {'ok': False, 'status': self.status.value, 'error': self.error}
        return {
            'ok': True,
            'status': self.status.value,
            'profit': self.profit,
            'sale': self.sale.to_dict(),
        }


@dataclass
class SaveResult:
    """
    Resultado de StorageService.save().
    Cada archivo se escribe por separado: uno puede fallar y el otro no.
    """
    items_saved: bool = False
    sales_saved: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.items_saved and self.sales_saved

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.ok,
            'items_saved': self.items_saved,
            'sales_saved': self.sales_saved,
            'errors': list(self.errors),
        }
