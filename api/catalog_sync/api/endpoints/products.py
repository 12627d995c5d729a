"""
Endpoints del catalogo publicado (lectura para la tienda).
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog_sync.api.dependencies.deps import get_product_use_cases
from catalog_sync.application.dto.product_dto import ProductListResponseDTO
from catalog_sync.application.use_cases.product_use_cases import ProductCatalogUseCases


router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=ProductListResponseDTO,
    summary="Listar productos publicados"
)
async def list_products(
    lang: Optional[str] = Query(
        default=None,
        description="Locale de los textos (zh, en). Si falta o no existe se usa el locale por defecto."
    ),
    use_cases: ProductCatalogUseCases = Depends(get_product_use_cases),
) -> ProductListResponseDTO:
    """
    Retorna los productos publicados con los textos en el idioma pedido.

    Los textos vacios en ese idioma se completan con los del idioma por defecto.
    """
    products = await use_cases.list_published(lang)
    return ProductListResponseDTO(data=products)
