"""
Tests unitarios para la busqueda de textos por locale y el listado publicado.
"""
from decimal import Decimal
from typing import List

import pytest

from catalog_sync.application.use_cases.product_use_cases import ProductCatalogUseCases
from catalog_sync.domain.entities.product import (
    LocalizedFields,
    ProductRecord,
    resolve_locale,
    resolve_localized,
)


BUNDLES = {
    "zh": LocalizedFields(name="马克杯", product_desc="陶瓷杯", shipping_info=None),
    "en": LocalizedFields(name="Mug", product_desc=None, shipping_info=None),
}


class TestResolveLocalized:

    def test_uses_requested_locale_when_present(self) -> None:
        assert resolve_localized(BUNDLES, "name", "en") == "Mug"

    def test_falls_back_to_default_locale(self) -> None:
        assert resolve_localized(BUNDLES, "product_desc", "en") == "陶瓷杯"

    def test_empty_string_when_no_locale_has_value(self) -> None:
        assert resolve_localized(BUNDLES, "shipping_info", "en") == ""

    def test_missing_bundle_falls_back(self) -> None:
        assert resolve_localized({"zh": BUNDLES["zh"]}, "name", "en") == "马克杯"

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(KeyError):
            resolve_localized(BUNDLES, "price", "zh")


class TestResolveLocale:

    @pytest.mark.parametrize(
        "requested, expected",
        [("en", "en"), ("EN", "en"), (" zh ", "zh"), ("fr", "zh"), (None, "zh"), ("", "zh")],
    )
    def test_normalizes_requested_locale(self, requested, expected) -> None:
        assert resolve_locale(requested, ("zh", "en"), "zh") == expected


class _FakeRepository:
    def __init__(self, records: List[ProductRecord]) -> None:
        self.records = records
        self.requested_status = None

    async def fetch_by_status(self, status: str) -> List[ProductRecord]:
        self.requested_status = status
        return [r for r in self.records if r.status == status]


@pytest.mark.asyncio
async def test_list_published_localizes_every_text_field() -> None:
    repo = _FakeRepository([
        ProductRecord(id=1, price=Decimal("9.99"), stock=3, status="上架", localized=BUNDLES),
        ProductRecord(id=2, status="下架", localized=BUNDLES),
    ])
    use_cases = ProductCatalogUseCases(repo, published_status="上架", locales=("zh", "en"))

    products = await use_cases.list_published("en")

    assert repo.requested_status == "上架"
    assert len(products) == 1
    product = products[0]
    assert product.id == 1
    assert product.name == "Mug"
    assert product.product_desc == "陶瓷杯"
    assert product.shipping_info == ""
    assert product.price == Decimal("9.99")


@pytest.mark.asyncio
async def test_unknown_lang_uses_default_locale() -> None:
    repo = _FakeRepository([ProductRecord(id=1, status="上架", localized=BUNDLES)])
    use_cases = ProductCatalogUseCases(repo, published_status="上架", locales=("zh", "en"))

    products = await use_cases.list_published("ja")

    assert products[0].name == "马克杯"
