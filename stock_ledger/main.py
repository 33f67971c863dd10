# ==============================================================================
# API HTTP - Flask
# ==============================================================================
# Expone el inventario y el ledger de ventas como endpoints JSON.
# Las rutas solo validan la entrada y llaman a servicios del contenedor.
#
# Uso:
#   from stock_ledger.main import create_app
#   app = create_app('/ruta/a/datos')
# ==============================================================================

import math
import os

from flask import Blueprint, Flask, abort, current_app, request
from werkzeug.exceptions import HTTPException

from stock_ledger.app_container import AppContainer
from stock_ledger.config import LOW_STOCK_THRESHOLD
from stock_ledger.logging_config import configure_logging, get_logger
from stock_ledger.models.entities import SellStatus
from stock_ledger.performance_logger import init_profiling, set_logs_dir
from stock_ledger.services import sanitize_text

logger = get_logger("api")

api = Blueprint('api', __name__, url_prefix='/api')


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def to_int(v, default=None):
    if isinstance(v, bool):
        return default
    if isinstance(v, float):
        return int(v) if v.is_integer() else default
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        return default


def to_float(v, default=None):
    if isinstance(v, bool) or v is None:
        return default
    try:
        value = float(str(v).strip())
    except (TypeError, ValueError):
        return default
    # nan/inf no son precios y rompen el JSON de respuesta
    return value if math.isfinite(value) else default


def _container() -> AppContainer:
    return current_app.extensions['stock_ledger']


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        abort(400, description="El cuerpo debe ser un objeto JSON")
    return data


def _read_stock_fields(data):
    """Valida quantity / purchase_price / selling_price del cuerpo."""
    quantity = to_int(data.get("quantity"))
    purchase_price = to_float(data.get("purchase_price"))
    selling_price = to_float(data.get("selling_price"))

    if quantity is None:
        return None, "Cantidad inválida"
    if purchase_price is None or selling_price is None:
        return None, "Precio inválido"
    if quantity < 0:
        return None, "La cantidad no puede ser negativa"
    if purchase_price < 0 or selling_price < 0:
        return None, "Los precios no pueden ser negativos"
    return (quantity, purchase_price, selling_price), None


# ═══════════════════════════════════════════════════════════════════════════
# ITEMS
# ═══════════════════════════════════════════════════════════════════════════

@api.route("/items", methods=["GET"])
def list_items():
    items = _container().inventory_service.list_items()
    return {"ok": True, "items": [i.to_dict() for i in items]}


@api.route("/items", methods=["POST"])
def add_item():
    """Agregar un item nuevo - retorna el ID asignado"""
    data = _json_body()
    name = sanitize_text(str(data.get("name") or "")).strip()
    variant = sanitize_text(str(data.get("variant") or ""))

    if not name:
        return {"ok": False, "error": "El nombre es obligatorio"}, 400

    fields, error = _read_stock_fields(data)
    if error:
        return {"ok": False, "error": error}, 400

    item_id = _container().inventory_service.add(name, variant, *fields)
    return {"ok": True, "id": item_id}, 201


@api.route("/items/<int:item_id>", methods=["GET"])
def get_item(item_id):
    item = _container().inventory_service.find_by_id(item_id)
    if item is None:
        return {"ok": False, "error": "Item no encontrado"}, 404
    return {"ok": True, "item": item.to_dict()}


@api.route("/items/<int:item_id>", methods=["PUT"])
def update_item(item_id):
    """Actualizar cantidad y precios (nombre y variante no cambian)"""
    fields, error = _read_stock_fields(_json_body())
    if error:
        return {"ok": False, "error": error}, 400

    container = _container()
    inventory = container.inventory_service
    # Actualizar y releer bajo el mismo lock: un DELETE no puede colarse en medio
    with container.state.lock:
        if not inventory.update(item_id, *fields):
            return {"ok": False, "error": "Item no encontrado"}, 404
        item = inventory.find_by_id(item_id).to_dict()
    return {"ok": True, "item": item}


@api.route("/items/<int:item_id>", methods=["DELETE"])
def delete_item(item_id):
    if not _container().inventory_service.delete(item_id):
        return {"ok": False, "error": "Item no encontrado"}, 404
    return {"ok": True, "id": item_id}


@api.route("/items/search", methods=["GET"])
def search_items():
    query = (request.args.get("q") or "").strip()
    if not query:
        return {"ok": False, "error": "Falta el texto de búsqueda (q)"}, 400
    items = _container().inventory_service.search_by_name(query)
    return {"ok": True, "items": [i.to_dict() for i in items]}


@api.route("/items/low-stock", methods=["GET"])
def low_stock():
    threshold = to_int(request.args.get("threshold"), LOW_STOCK_THRESHOLD)
    items = _container().inventory_service.low_stock(threshold)
    return {"ok": True, "threshold": threshold, "items": [i.to_dict() for i in items]}


# ═══════════════════════════════════════════════════════════════════════════
# VENTAS
# ═══════════════════════════════════════════════════════════════════════════

_SELL_HTTP_STATUS = {
    SellStatus.OK: 200,
    SellStatus.ITEM_NOT_FOUND: 404,
    SellStatus.INSUFFICIENT_STOCK: 409,
}


@api.route("/sell", methods=["POST"])
def sell():
    """Registrar una venta - retorna la ganancia y la venta"""
    data = _json_body()
    item_id = to_int(data.get("item_id"))
    quantity = to_int(data.get("quantity"))

    if item_id is None or quantity is None:
        return {"ok": False, "error": "ID o cantidad inválida"}, 400
    if quantity <= 0:
        return {"ok": False, "error": "La cantidad debe ser mayor que 0"}, 400

    result = _container().sales_service.sell(item_id, quantity)
    return result.to_dict(), _SELL_HTTP_STATUS[result.status]


@api.route("/sales/<int:sale_id>", methods=["GET"])
def get_sale(sale_id):
    sale = _container().sales_service.get_sale(sale_id)
    if sale is None:
        return {"ok": False, "error": "Venta no encontrada"}, 404
    return {"ok": True, "sale": sale.to_dict()}


@api.route("/sales", methods=["GET"])
def list_sales():
    sales_service = _container().sales_service
    return {
        "ok": True,
        "sales": [s.to_dict() for s in sales_service.list_sales(newest_first=True)],
        "summary": sales_service.summary(),
    }


# ═══════════════════════════════════════════════════════════════════════════
# SISTEMA
# ═══════════════════════════════════════════════════════════════════════════

@api.route("/save", methods=["POST"])
def save():
    result = _container().storage_service.save()
    return result.to_dict(), (200 if result.ok else 500)


@api.route("/status", methods=["GET"])
def status():
    container = _container()
    return {
        "ok": True,
        "storage": container.storage_service.status(),
        "sales": container.sales_service.summary(),
    }


@api.errorhandler(HTTPException)
def handle_http_error(e):
    # Usar "ok" para consistencia con el resto de la API
    return {"ok": False, "error": e.description}, e.code


# ═══════════════════════════════════════════════════════════════════════════
# FÁBRICA DE LA APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════

def create_app(base_path: str = None, container: AppContainer = None) -> Flask:
    """
    Crea la app Flask y carga los datos del directorio.

    Args:
        base_path: Directorio de datos (items.csv, sales.csv)
        container: Contenedor ya armado (tiene prioridad sobre base_path)
    """
    configure_logging()

    container = container or AppContainer(base_path)
    container.storage_service.load()

    app = Flask(__name__)
    app.extensions['stock_ledger'] = container

    set_logs_dir(os.path.join(container.base_path, 'logs'))
    init_profiling(app)

    app.register_blueprint(api)

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    logger.info("app_created", extra={"base_path": container.base_path})
    return app
