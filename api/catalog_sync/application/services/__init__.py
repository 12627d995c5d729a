"""
Servicios de aplicacion.

Contiene la logica de negocio reutilizable que no pertenece
a un caso de uso especifico.
"""
from catalog_sync.application.services.product_mapper import (
    MappingResult,
    PricePolicy,
    ProductRowMapper,
    SheetLayout,
    map_row,
    map_rows,
    parse_price,
    parse_product_id,
    parse_stock,
)

__all__ = [
    "MappingResult",
    "PricePolicy",
    "ProductRowMapper",
    "SheetLayout",
    "map_row",
    "map_rows",
    "parse_price",
    "parse_product_id",
    "parse_stock",
]
