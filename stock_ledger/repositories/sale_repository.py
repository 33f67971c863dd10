# ==============================================================================
# REPOSITORIO DE VENTAS
# ==============================================================================
# Encapsula todo el acceso a sales.csv
# Las ventas se guardan en orden cronológico, una por línea:
# id,item_id,item_name,quantity_sold,profit,date_sold
# ==============================================================================

import os
from typing import List

from stock_ledger.config import SALES_FILE
from stock_ledger.models.entities import Sale
from stock_ledger.repositories.base import RecordRepository


class SaleRepository(RecordRepository[Sale]):
    """
    Repositorio del ledger de ventas.

    Formato de sales.csv:
        1,4,Cog,2,2.0,2024-01-01 10:00:00
    """

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Directorio de datos
        """
        super().__init__(os.path.join(base_path, SALES_FILE))

    def _parse_line(self, line: str) -> Sale:
        return Sale.from_record(line)

    def _format_record(self, record: Sale) -> List[str]:
        return record.to_record()
