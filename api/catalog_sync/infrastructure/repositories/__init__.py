"""
Implementaciones de repositorios.
"""
from catalog_sync.infrastructure.repositories.product_repository import ProductRepository

__all__ = ["ProductRepository"]
