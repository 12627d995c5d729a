"""
Tests del repositorio de productos sobre SQLite (aiosqlite).

Verifica el reemplazo completo en una transaccion:
- el contenido final es exactamente el lote escrito
- un fallo a mitad de la escritura deja intactas las filas anteriores
"""
from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import inspect

from catalog_sync.domain.entities.product import LocalizedFields, ProductRecord
from catalog_sync.infrastructure.repositories.product_repository import ProductRepository
from catalog_sync.shared.exceptions import EmptyResultSetError, WriteFailedError


def _record(product_id: int, name: str = "马克杯", status: str = "上架", price: str = "9.99") -> ProductRecord:
    return ProductRecord(
        id=product_id,
        category="杯子",
        price=Decimal(price),
        stock=5,
        status=status,
        localized={
            "zh": LocalizedFields(name=name, product_desc="陶瓷"),
            "en": LocalizedFields(name=f"{name}-en"),
        },
    )


@pytest.mark.asyncio
async def test_fetch_before_first_sync_returns_empty(repository: ProductRepository) -> None:
    assert await repository.fetch_by_status("上架") == []
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_replace_all_creates_table_and_writes_rows(repository: ProductRepository) -> None:
    written = await repository.replace_all([_record(1), _record(2, status="下架")])

    assert written == 2
    assert await repository.count() == 2

    published = await repository.fetch_by_status("上架")
    assert [p.id for p in published] == [1]
    product = published[0]
    assert product.price == Decimal("9.99")
    assert product.stock == 5
    assert product.localized["zh"].name == "马克杯"
    assert product.localized["zh"].product_desc == "陶瓷"
    assert product.localized["en"].name == "马克杯-en"
    assert product.localized["en"].product_desc is None


@pytest.mark.asyncio
async def test_replace_all_discards_previous_rows(repository: ProductRepository) -> None:
    await repository.replace_all([_record(1), _record(2), _record(3)])

    await repository.replace_all([_record(3, name="新")])

    rows = await repository.fetch_by_status("上架")
    assert [(p.id, p.localized["zh"].name) for p in rows] == [(3, "新")]


@pytest.mark.asyncio
async def test_failed_write_rolls_back_and_keeps_previous_rows(repository: ProductRepository) -> None:
    await repository.replace_all([_record(1), _record(2)])

    # IDs repetidos violan la PK a mitad del insert
    with pytest.raises(WriteFailedError) as exc_info:
        await repository.replace_all([_record(7), _record(7)])

    assert exc_info.value.error_code == "WRITE_FAILED"
    assert exc_info.value.__cause__ is not None
    rows = await repository.fetch_by_status("上架")
    assert [p.id for p in rows] == [1, 2]


@pytest.mark.asyncio
async def test_driver_error_is_reported_as_write_failure(repository: ProductRepository) -> None:
    await repository.replace_all([_record(1)])

    # El driver de SQLite rechaza el entero con OverflowError, no con un error de SQLAlchemy
    with pytest.raises(WriteFailedError) as exc_info:
        await repository.replace_all([_record(2), _record(10**24)])

    assert exc_info.value.error_code == "WRITE_FAILED"
    assert exc_info.value.details["table"] == "products"
    assert [p.id for p in await repository.fetch_by_status("上架")] == [1]


@pytest.mark.asyncio
async def test_empty_collection_is_rejected_without_touching_table(repository: ProductRepository) -> None:
    await repository.replace_all([_record(1)])

    with pytest.raises(EmptyResultSetError):
        await repository.replace_all([])

    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_single_locale_table_uses_unsuffixed_columns(engine) -> None:
    repository = ProductRepository(engine, table_name="products_zh", locales=("zh",))

    await repository.replace_all([_record(1)])

    async with engine.connect() as conn:
        columns = await conn.run_sync(
            lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("products_zh")]
        )
    assert "name" in columns
    assert "name_zh" not in columns
    assert "name_en" not in columns

    rows = await repository.fetch_by_status("上架")
    assert rows[0].localized["zh"].name == "马克杯"


@pytest.mark.asyncio
async def test_bilingual_table_uses_suffixed_columns(repository: ProductRepository, engine) -> None:
    await repository.replace_all([_record(1)])

    async with engine.connect() as conn:
        columns = await conn.run_sync(
            lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("products")]
        )
    for expected in ("id", "category", "price", "image_url", "stock", "status",
                     "name_zh", "name_en", "shipping_info_zh", "shipping_info_en", "updated_at"):
        assert expected in columns
