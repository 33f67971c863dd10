# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para archivos de registros
# ==============================================================================

import contextlib
import os
import threading
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Tuple, TypeVar

from stock_ledger.config import FIELD_DELIMITER
from stock_ledger.exceptions import MalformedRecordError, PersistenceWriteError
from stock_ledger.logging_config import get_logger

logger = get_logger("repositories")

T = TypeVar('T')


class RecordRepository(ABC, Generic[T]):
    """
    Clase base abstracta para los repositorios de archivos planos.
    Un registro por línea, campos separados por FIELD_DELIMITER, sin
    encabezado ni comillas.

    Cada repositorio concreto define cómo se interpreta y se escribe
    un registro (_parse_line / _format_record).
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo de datos.

        Args:
            file_path: Ruta absoluta al archivo
        """
        self.file_path = file_path

    @abstractmethod
    def _parse_line(self, line: str) -> T:
        """
        Convierte una línea en entidad.

        Raises:
            MalformedRecordError: Si la línea no es un registro válido
        """

    @abstractmethod
    def _format_record(self, record: T) -> List[str]:
        """Campos de la entidad en el orden fijo del archivo."""

    def exists(self) -> bool:
        return os.path.exists(self.file_path)

    def _read_lines(self) -> List[str]:
        """
        Lee las líneas crudas del archivo.

        Returns:
            Líneas sin salto de línea; lista vacía si el archivo no existe
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return [line.rstrip('\r\n') for line in f]
            except FileNotFoundError:
                return []

    def _write_lines(self, lines: Iterable[str]) -> None:
        """
        Reemplaza el archivo completo.

        Raises:
            PersistenceWriteError: Si no se pudo abrir o escribir
        """
        with self._file_lock:
            # Escribir a archivo temporal primero para atomicidad
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8', newline='\n') as f:
                    for line in lines:
                        f.write(line + '\n')
                os.replace(temp_path, self.file_path)
            except OSError as e:
                # Limpiar archivo temporal si algo falla
                with contextlib.suppress(OSError):
                    os.remove(temp_path)
                raise PersistenceWriteError(self.file_path, e) from e

    def load(self) -> Tuple[List[T], int]:
        """
        Carga todos los registros válidos.
        Las líneas vacías se ignoran; las inválidas se descartan sin error.

        Returns:
            (registros en orden del archivo, cantidad de líneas descartadas)
        """
        records = []
        skipped = 0
        for line in self._read_lines():
            if not line.strip():
                continue
            try:
                records.append(self._parse_line(line))
            except MalformedRecordError as e:
                skipped += 1
                logger.debug("record_skipped", extra={"file": self.file_path, "reason": e.reason})
        return records, skipped

    def save(self, records: Iterable[T]) -> int:
        """
        Guarda todos los registros (reemplazo completo).

        Returns:
            Cantidad de registros escritos
        """
        lines = [FIELD_DELIMITER.join(self._format_record(r)) for r in records]
        self._write_lines(lines)
        return len(lines)
