"""
Configuración de base de datos.
"""
from catalog_sync.infrastructure.database.session import build_engine, close_engine
from catalog_sync.infrastructure.database.tables import build_products_table, localized_column_name

__all__ = ["build_engine", "close_engine", "build_products_table", "localized_column_name"]
