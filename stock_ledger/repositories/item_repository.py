# ==============================================================================
# REPOSITORIO DE ITEMS
# ==============================================================================
# Encapsula todo el acceso a items.csv
# Una línea por item: id,name,variant,quantity,purchase_price,selling_price
# ==============================================================================

import os
from typing import List

from stock_ledger.config import ITEMS_FILE
from stock_ledger.models.entities import Item
from stock_ledger.repositories.base import RecordRepository


class ItemRepository(RecordRepository[Item]):
    """
    Repositorio de items del inventario.

    Formato de items.csv:
        1,Widget,Small,10,5.0,8.0
        2,Bolt,Red,3,0.5,1.0
    """

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Directorio de datos
        """
        super().__init__(os.path.join(base_path, ITEMS_FILE))

    def _parse_line(self, line: str) -> Item:
        return Item.from_record(line)

    def _format_record(self, record: Item) -> List[str]:
        return record.to_record()
