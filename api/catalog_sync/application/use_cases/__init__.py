"""
Casos de uso de la aplicacion.
"""
from catalog_sync.application.use_cases.product_use_cases import ProductCatalogUseCases
from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator

__all__ = ["ProductCatalogUseCases", "SyncOrchestrator"]
