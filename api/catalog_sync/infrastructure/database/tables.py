"""
Definicion de la tabla de productos.

Con un solo locale las columnas de texto no llevan sufijo (`name`,
`product_desc`...). Con varios locales cada texto se guarda como
`<campo>_<locale>` (`name_zh`, `name_en`...).
"""
from typing import Sequence

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    func,
)

from catalog_sync.domain.entities.product import LOCALIZED_FIELD_NAMES, LONG_TEXT_FIELDS


def localized_column_name(field_name: str, locale: str, locales: Sequence[str]) -> str:
    """Nombre fisico de la columna para un campo localizado."""
    if len(locales) == 1:
        return field_name
    return f"{field_name}_{locale}"


def build_products_table(table_name: str, locales: Sequence[str], metadata: MetaData = None) -> Table:
    """
    Construye la tabla de productos para los locales dados.

    El primer locale de `locales` es el locale por defecto.
    """
    metadata = metadata if metadata is not None else MetaData()

    localized_columns = []
    for locale in locales:
        for field_name in LOCALIZED_FIELD_NAMES:
            column_type = Text() if field_name in LONG_TEXT_FIELDS else String(255)
            localized_columns.append(
                Column(localized_column_name(field_name, locale, locales), column_type, nullable=True)
            )

    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=False),
        Column("category", String(255), nullable=True),
        Column("price", Numeric(10, 2), nullable=True),
        Column("image_url", Text, nullable=True),
        Column("stock", Integer, nullable=False, default=0),
        Column("status", String(255), nullable=True),
        *localized_columns,
        Column("updated_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
