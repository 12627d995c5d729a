"""
Configuración de fixtures para pytest.
"""
from typing import AsyncGenerator, List, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from catalog_sync.infrastructure.repositories.product_repository import ProductRepository


def make_row(
    id: Optional[str] = "1",
    name: Optional[str] = "马克杯",
    price: Optional[str] = "9.99",
    category: str = "杯子",
    image_url: str = "https://cdn.example.com/mug.jpg",
    stock: str = "10",
    status: str = "上架",
    name_en: str = "",
    product_desc: str = "",
    product_desc_en: str = "",
) -> List[str]:
    """
    Fila cruda de la hoja en el orden de columnas del catalogo.

    Las celdas vacias al final se recortan, igual que en la API de Sheets.
    """
    row = [""] * 18
    row[0] = id or ""
    row[1] = category
    row[2] = name or ""
    row[3] = price if price is not None else ""
    row[4] = image_url
    row[5] = stock
    row[6] = status
    row[9] = product_desc
    row[12] = name_en
    row[15] = product_desc_en
    while row and row[-1] == "":
        row.pop()
    return row


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine SQLite (archivo temporal) para cada test.
    Se usa archivo y no :memory: para que todas las conexiones del pool
    vean la misma base.
    """
    db_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", echo=False)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def repository(engine: AsyncEngine) -> ProductRepository:
    return ProductRepository(engine, table_name="products", locales=("zh", "en"))
