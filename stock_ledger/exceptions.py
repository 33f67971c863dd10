# ==============================================================================
# EXCEPCIONES DEL LEDGER
# ==============================================================================
# Los servicios devuelven resultados explícitos (SellResult, SaveResult).
# Estas excepciones solo viajan entre repositorios y servicios.
# ==============================================================================


class LedgerError(Exception):
    """Error base del ledger de inventario."""


class MalformedRecordError(LedgerError):
    """
    Una línea persistida no se pudo interpretar.

    Attributes:
        line: Línea original (sin salto de línea)
        reason: Motivo del rechazo
    """

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Registro inválido ({reason}): {line!r}")


class PersistenceWriteError(LedgerError):
    """
    No se pudo abrir o escribir un archivo de datos.

    Attributes:
        path: Archivo que falló
    """

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"No se pudo guardar {path}: {cause}")
