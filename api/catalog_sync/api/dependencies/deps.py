"""
Dependencias de FastAPI.

Los objetos compartidos (repositorio, orquestador) se crean en el
startup y viven en `app.state`; los tests los reemplazan con
`app.dependency_overrides`.
"""
from fastapi import Depends, Request

from catalog_sync.application.use_cases.product_use_cases import ProductCatalogUseCases
from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator
from catalog_sync.core.config import settings
from catalog_sync.infrastructure.repositories.product_repository import ProductRepository


def get_product_repository(request: Request) -> ProductRepository:
    return request.app.state.product_repository


def get_sync_orchestrator(request: Request) -> SyncOrchestrator:
    return request.app.state.sync_orchestrator


def get_product_use_cases(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductCatalogUseCases:
    """
    Dependencia para obtener los casos de uso del catalogo.

    Returns:
        ProductCatalogUseCases: Con los locales y el estado publicado configurados
    """
    return ProductCatalogUseCases(
        repository,
        published_status=settings.PUBLISHED_STATUS,
        locales=settings.locales,
        default_locale=settings.DEFAULT_LOCALE,
    )
