"""
Interfaces de repositorios del dominio.
"""
from catalog_sync.domain.repositories.product_repository import IProductRepository

__all__ = ["IProductRepository"]
