# ==============================================================================
# CONFIGURACIÓN - Constantes del sistema
# ==============================================================================
# Valores por defecto del ledger. Se pueden sobrescribir con variables de
# entorno sin tocar el código:
#
#   export STOCK_LEDGER_DATA_DIR=/ruta/a/datos
#   export STOCK_LEDGER_LOW_STOCK=5
#   export STOCK_LEDGER_PROFILING=0
#   export STOCK_LEDGER_LOG_LEVEL=DEBUG
# ==============================================================================

import os


def _env_int(name: str, default: int) -> int:
    """Lee un entero de una variable de entorno (fallback al default)."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ('0', 'false', 'no', 'off', '')


# ═══════════════════════════════════════════════════════════════════════════
# ARCHIVOS DE DATOS
# ═══════════════════════════════════════════════════════════════════════════

ITEMS_FILE = 'items.csv'
SALES_FILE = 'sales.csv'

# Separador de campos. El formato NO tiene comillas ni escape:
# nombre/variante deben limpiarse antes de guardarse (ver sanitize_text)
FIELD_DELIMITER = ','

# Cantidad de campos por registro (items y ventas)
RECORD_FIELDS = 6


def get_data_dir() -> str:
    """
    Directorio donde viven items.csv y sales.csv.

    Returns:
        STOCK_LEDGER_DATA_DIR si está definida, si no el directorio actual
    """
    return os.environ.get('STOCK_LEDGER_DATA_DIR') or os.getcwd()


# ═══════════════════════════════════════════════════════════════════════════
# REGLAS DE NEGOCIO
# ═══════════════════════════════════════════════════════════════════════════

# Umbral de alerta de stock bajo (cantidad <= umbral)
LOW_STOCK_THRESHOLD = _env_int('STOCK_LEDGER_LOW_STOCK', 5)

# Formato de fecha de venta (hora local, con ceros a la izquierda)
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Items de ejemplo cuando no hay datos previos:
# (nombre, variante, cantidad, precio compra, precio venta)
DEFAULT_ITEMS = (
    ('Widget', 'Small', 10, 5.0, 8.0),
    ('Bolt', 'Red', 3, 0.5, 1.0),
    ('Gadget', 'Blue', 20, 10.0, 15.0),
)


# ═══════════════════════════════════════════════════════════════════════════
# LOGGING Y PROFILING
# ═══════════════════════════════════════════════════════════════════════════

LOG_LEVEL = os.environ.get('STOCK_LEDGER_LOG_LEVEL', 'INFO').upper()

ENABLE_PROFILING = _env_flag('STOCK_LEDGER_PROFILING', True)

LOGS_DIR = os.environ.get(
    'STOCK_LEDGER_LOGS_DIR',
    os.path.join(get_data_dir(), 'logs')
)
