"""
Implementación SQLAlchemy (Core, async) del repositorio de productos.
"""
from typing import Any, Dict, List, Mapping, Sequence

from loguru import logger
from sqlalchemy import MetaData, delete, func, inspect, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from catalog_sync.domain.entities.product import (
    DEFAULT_LOCALE,
    LOCALIZED_FIELD_NAMES,
    LocalizedFields,
    ProductRecord,
)
from catalog_sync.domain.repositories.product_repository import IProductRepository
from catalog_sync.infrastructure.database.tables import build_products_table, localized_column_name
from catalog_sync.shared.exceptions import EmptyResultSetError, WriteFailedError


class ProductRepository(IProductRepository):
    """
    Repositorio de productos sobre un AsyncEngine.

    Cada operacion toma una conexion del pool y la devuelve al salir
    (`async with`), tambien cuando hay errores.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table_name: str = "products",
        locales: Sequence[str] = (DEFAULT_LOCALE, "en"),
    ):
        self.engine = engine
        self.locales = tuple(locales)
        self.table = build_products_table(table_name, self.locales, MetaData())

    @property
    def table_name(self) -> str:
        return self.table.name

    async def replace_all(self, records: Sequence[ProductRecord]) -> int:
        if not records:
            raise EmptyResultSetError()

        rows = [self._to_row(record) for record in records]

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(self.table.metadata.create_all, tables=[self.table], checkfirst=True)
                await conn.execute(delete(self.table))
                await conn.execute(insert(self.table), rows)
        except Exception as e:
            # Errores de SQLAlchemy o del driver (p. ej. OverflowError); el rollback ya ocurrio
            raise WriteFailedError(
                f"No se pudo reemplazar la tabla '{self.table_name}': {e}",
                table=self.table_name,
            ) from e

        logger.info(f"Tabla '{self.table_name}' reemplazada con {len(rows)} productos")
        return len(rows)

    async def fetch_by_status(self, status: str) -> List[ProductRecord]:
        async with self.engine.connect() as conn:
            if not await conn.run_sync(self._table_exists):
                logger.warning(f"La tabla '{self.table_name}' todavia no existe")
                return []

            query = (
                select(self.table)
                .where(self.table.c.status == status)
                .order_by(self.table.c.id)
            )
            result = await conn.execute(query)
            return [self._to_record(row) for row in result.mappings()]

    async def count(self) -> int:
        async with self.engine.connect() as conn:
            if not await conn.run_sync(self._table_exists):
                return 0
            result = await conn.execute(select(func.count()).select_from(self.table))
            return int(result.scalar_one())

    def _table_exists(self, sync_conn) -> bool:
        return inspect(sync_conn).has_table(self.table_name)

    def _to_row(self, record: ProductRecord) -> Dict[str, Any]:
        """Convierte la entidad a una fila de la tabla."""
        row: Dict[str, Any] = {
            "id": record.id,
            "category": record.category,
            "price": record.price,
            "image_url": record.image_url,
            "stock": record.stock,
            "status": record.status,
        }
        for locale in self.locales:
            bundle = record.localized.get(locale) or LocalizedFields()
            for field_name in LOCALIZED_FIELD_NAMES:
                column = localized_column_name(field_name, locale, self.locales)
                row[column] = getattr(bundle, field_name)
        return row

    def _to_record(self, row: Mapping[str, Any]) -> ProductRecord:
        """Convierte una fila de la tabla a la entidad."""
        localized = {}
        for locale in self.locales:
            localized[locale] = LocalizedFields(**{
                field_name: row.get(localized_column_name(field_name, locale, self.locales))
                for field_name in LOCALIZED_FIELD_NAMES
            })

        return ProductRecord(
            id=row["id"],
            category=row["category"],
            price=row["price"],
            image_url=row["image_url"],
            stock=row["stock"] if row["stock"] is not None else 0,
            status=row["status"],
            localized=localized,
        )
