"""
Casos de uso de lectura del catalogo publicado.
"""
from typing import List, Optional, Sequence

from catalog_sync.application.dto.product_dto import ProductDTO
from catalog_sync.domain.entities.product import (
    DEFAULT_LOCALE,
    LOCALIZED_FIELD_NAMES,
    ProductRecord,
    resolve_locale,
)
from catalog_sync.domain.repositories.product_repository import IProductRepository


class ProductCatalogUseCases:
    """
    Lista los productos publicados en un locale.

    Los textos vacios en el locale pedido se completan con los del
    locale por defecto.
    """

    def __init__(
        self,
        repository: IProductRepository,
        published_status: str,
        locales: Sequence[str] = (DEFAULT_LOCALE, "en"),
        default_locale: str = DEFAULT_LOCALE,
    ):
        self.repository = repository
        self.published_status = published_status
        self.locales = tuple(locales)
        self.default_locale = default_locale

    async def list_published(self, lang: Optional[str] = None) -> List[ProductDTO]:
        locale = resolve_locale(lang, self.locales, self.default_locale)
        records = await self.repository.fetch_by_status(self.published_status)
        return [self._to_dto(record, locale) for record in records]

    def _to_dto(self, record: ProductRecord, locale: str) -> ProductDTO:
        texts = {
            name: record.text(name, locale, self.default_locale)
            for name in LOCALIZED_FIELD_NAMES
        }
        return ProductDTO(
            id=record.id,
            category=record.category,
            price=record.price,
            image_url=record.image_url,
            stock=record.stock,
            status=record.status,
            **texts,
        )
