# ==============================================================================
# PROFILING DEL LEDGER
# ==============================================================================
# Tiempos de rutas HTTP y de las operaciones del ledger (vender, cargar,
# guardar). Una línea por evento en LOGS_DIR:
#
#   performance.log  → cada request de la API
#   slow.log         → requests y operaciones que superan SLOW_MS
#   stats.log        → resumen por operación al cerrar la consola
#
# ACTIVAR/DESACTIVAR: variable de entorno STOCK_LEDGER_PROFILING (ver config)
# ==============================================================================

import os
import threading
import time
from collections import defaultdict
from datetime import datetime
from functools import wraps

from stock_ledger import config

ENABLE_PROFILING = config.ENABLE_PROFILING

# Umbral de operación lenta (milisegundos)
SLOW_MS = 300

PERFORMANCE_LOG = 'performance.log'
SLOW_LOG = 'slow.log'
STATS_LOG = 'stats.log'

# Nombre legible por regla de Flask
ROUTE_NAMES = {
    'GET /api/items': 'Listar items',
    'POST /api/items': 'Agregar item',
    'GET /api/items/<int:item_id>': 'Ver item',
    'PUT /api/items/<int:item_id>': 'Actualizar item',
    'DELETE /api/items/<int:item_id>': 'Eliminar item',
    'GET /api/items/search': 'Buscar items',
    'GET /api/items/low-stock': 'Alerta de stock bajo',
    'POST /api/sell': 'Vender item',
    'GET /api/sales': 'Historial de ventas',
    'GET /api/sales/<int:sale_id>': 'Ver venta',
    'POST /api/save': 'Guardar datos',
    'GET /api/status': 'Estado del sistema',
}

_logs_dir = config.LOGS_DIR
_write_lock = threading.Lock()

# {operación: {'calls', 'total_ms', 'max_ms'}}
_stats = defaultdict(lambda: {'calls': 0, 'total_ms': 0.0, 'max_ms': 0.0})
_stats_lock = threading.Lock()


def set_logs_dir(path):
    """Directorio de los archivos de profiling (lo fijan create_app y la consola)."""
    global _logs_dir
    _logs_dir = path


def _append(filename, line):
    try:
        with _write_lock:
            os.makedirs(_logs_dir, exist_ok=True)
            with open(os.path.join(_logs_dir, filename), 'a', encoding='utf-8') as f:
                f.write(line + '\n')
    except OSError:
        pass  # Los errores de log no deben afectar la app


def _line(label, elapsed_ms):
    now = datetime.now().strftime(config.DATE_FORMAT)
    return f"{now} | {label} | {elapsed_ms:.0f} ms"


# ═══════════════════════════════════════════════════════════════════════════
# RUTAS (hooks de Flask)
# ═══════════════════════════════════════════════════════════════════════════

def init_profiling(app):
    """Registra los hooks de tiempo en la app Flask."""
    if not ENABLE_PROFILING:
        return

    from flask import g, request

    @app.before_request
    def _start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if not ENABLE_PROFILING or not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000
        rule = str(request.url_rule) if request.url_rule else request.path
        name = ROUTE_NAMES.get(f"{request.method} {rule}", f"{request.method} {request.path}")
        line = _line(f"{name} ({request.method} {request.path}) -> {response.status_code}", elapsed)

        _append(PERFORMANCE_LOG, line)
        if elapsed >= SLOW_MS:
            _append(SLOW_LOG, line)
        return response


# ═══════════════════════════════════════════════════════════════════════════
# OPERACIONES (decorador)
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Acumula llamadas y tiempos de una operación.

    Uso:
        @profile_function(name="Registrar venta")
        def sell(self, item_id, quantity):
            ...
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn

        label = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed = (time.perf_counter() - start) * 1000
                with _stats_lock:
                    stats = _stats[label]
                    stats['calls'] += 1
                    stats['total_ms'] += elapsed
                    stats['max_ms'] = max(stats['max_ms'], elapsed)
                if elapsed >= SLOW_MS:
                    _append(SLOW_LOG, _line(label, elapsed))

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def get_function_stats():
    """
    Returns:
        dict: {operación: {calls, avg_ms, max_ms}}
    """
    with _stats_lock:
        return {
            label: {
                'calls': s['calls'],
                'avg_ms': round(s['total_ms'] / s['calls'], 2) if s['calls'] else 0,
                'max_ms': round(s['max_ms'], 2),
            }
            for label, s in _stats.items()
        }


def write_function_stats_report():
    """Agrega a stats.log una línea por operación (la consola lo llama al salir)."""
    if not ENABLE_PROFILING:
        return
    for label, data in sorted(get_function_stats().items()):
        _append(STATS_LOG, _line(
            f"{label} | llamadas: {data['calls']} | máx: {data['max_ms']:.0f} ms | promedio", data['avg_ms']
        ))


def reset_stats():
    with _stats_lock:
        _stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'write_function_stats_report',
    'reset_stats',
    'set_logs_dir',
]
