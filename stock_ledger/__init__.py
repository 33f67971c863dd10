# ==============================================================================
# STOCK LEDGER - Inventario y punto de venta con archivos planos
# ==============================================================================
# Paquetes:
#   models/        → Entidades (Item, Sale) y estado en memoria
#   repositories/  → Lectura/escritura de items.csv y sales.csv
#   services/      → Inventario, ventas y almacenamiento
#   main.py        → API HTTP (Flask)
#   console.py     → Menú interactivo
# ==============================================================================

__version__ = "1.0.0"
