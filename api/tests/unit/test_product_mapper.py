"""
Tests unitarios para el mapper fila de la hoja -> ProductRecord.
"""
from decimal import Decimal

import pytest

from catalog_sync.application.services.product_mapper import (
    PricePolicy,
    ProductRowMapper,
    SheetLayout,
    map_row,
    map_rows,
    parse_price,
    parse_product_id,
    parse_stock,
)
from catalog_sync.domain.entities.sync_run import RejectionReason


class TestParsePrice:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("9.99", Decimal("9.99")),
            ("9,99", Decimal("9.99")),
            ("1,299", Decimal("1299.00")),
            ("1,299.50", Decimal("1299.50")),
            ("1.299,50", Decimal("1299.50")),
            ("12,345,678", Decimal("12345678.00")),
            (" 15 ", Decimal("15.00")),
            ("0", Decimal("0.00")),
            (None, Decimal("0.00")),
            (12, Decimal("12.00")),
            (7.5, Decimal("7.50")),
        ],
    )
    def test_valid_prices(self, raw, expected) -> None:
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "-1", "9,99,9", "NaN", "Infinity", "1e12"])
    def test_invalid_prices(self, raw) -> None:
        assert parse_price(raw) is None


class TestParseProductId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), ("7.0", 7), (3, 3), ("2147483647", 2147483647)])
    def test_valid_ids(self, raw, expected) -> None:
        assert parse_product_id(raw) == expected

    @pytest.mark.parametrize(
        "raw", [None, "", "abc", "0", "-3", "1.5", True, "2147483648", "123456789012345678901234"]
    )
    def test_invalid_ids(self, raw) -> None:
        assert parse_product_id(raw) is None


class TestParseStock:

    @pytest.mark.parametrize(
        "raw, expected",
        [("10", 10), ("3.9", 3), (None, 0), ("", 0), ("muchos", 0), ("-2", 0), ("99999999999", 0)],
    )
    def test_stock_coercion(self, raw, expected) -> None:
        assert parse_stock(raw) == expected


class TestProductRowMapper:

    @pytest.fixture
    def mapper(self) -> ProductRowMapper:
        return ProductRowMapper()

    def test_maps_full_row(self, mapper, row_factory) -> None:
        raw = row_factory(
            id="5",
            name="  马克杯 ",
            price="9,99",
            name_en="Mug",
            product_desc="陶瓷",
            product_desc_en="Ceramic",
        )

        result = mapper.map_row(raw, row_number=6)

        assert result.is_valid
        assert result.row_number == 6
        record = result.record
        assert record.id == 5
        assert record.price == Decimal("9.99")
        assert record.stock == 10
        assert record.status == "上架"
        assert record.localized["zh"].name == "马克杯"
        assert record.localized["en"].name == "Mug"
        assert record.localized["zh"].product_desc == "陶瓷"
        assert record.localized["en"].product_desc == "Ceramic"

    def test_short_row_fills_missing_cells_with_none(self, mapper) -> None:
        result = mapper.map_row(["8", "", "礼盒"])

        assert result.is_valid
        record = result.record
        assert record.category is None
        assert record.price == Decimal("0.00")
        assert record.stock == 0
        assert record.image_url is None
        assert record.localized["en"].name is None
        assert record.localized["zh"].shipping_info is None

    def test_rejects_missing_id(self, mapper, row_factory) -> None:
        result = mapper.map_row(row_factory(id=""))

        assert not result.is_valid
        assert result.rejection is RejectionReason.MISSING_OR_INVALID_ID

    def test_rejects_non_numeric_id(self, mapper, row_factory) -> None:
        result = mapper.map_row(row_factory(id="A-1"))

        assert result.rejection is RejectionReason.MISSING_OR_INVALID_ID

    def test_rejects_blank_default_name_even_with_english_name(self, mapper, row_factory) -> None:
        result = mapper.map_row(row_factory(name="   ", name_en="Mug"))

        assert result.rejection is RejectionReason.MISSING_NAME

    def test_rejects_invalid_price_by_default(self, mapper, row_factory) -> None:
        result = mapper.map_row(row_factory(price="consultar"))

        assert result.rejection is RejectionReason.INVALID_PRICE

    def test_allow_invalid_price_keeps_row_with_null_price(self, row_factory) -> None:
        mapper = ProductRowMapper(price_policy=PricePolicy.ALLOW_INVALID)

        result = mapper.map_row(row_factory(price="consultar"))

        assert result.is_valid
        assert result.record.price is None

    def test_short_text_is_cut_to_column_width(self, mapper, row_factory) -> None:
        raw = row_factory(category="c" * 300, name="n" * 300, product_desc="d" * 300)

        record = mapper.map_row(raw).record

        assert len(record.category) == 255
        assert len(record.localized["zh"].name) == 255
        assert len(record.localized["zh"].product_desc) == 300

    def test_map_rows_numbers_rows_like_the_sheet(self, mapper, row_factory) -> None:
        rows = [row_factory(id="1"), row_factory(id=""), row_factory(id="3")]

        results = list(mapper.map_rows(rows))

        assert [r.row_number for r in results] == [2, 3, 4]
        assert [r.is_valid for r in results] == [True, False, True]

    def test_map_rows_is_lazy(self, mapper, row_factory) -> None:
        def rows():
            yield row_factory(id="1")
            raise AssertionError("no deberia leerse la segunda fila")

        first = next(iter(mapper.map_rows(rows())))

        assert first.record.id == 1

    def test_single_locale_layout_ignores_english_columns(self, row_factory) -> None:
        mapper = ProductRowMapper(SheetLayout.for_locales(["zh"]))

        record = mapper.map_row(row_factory(name_en="Mug")).record

        assert set(record.localized) == {"zh"}


def test_module_level_map_row_uses_given_layout_and_policy(row_factory) -> None:
    layout = SheetLayout.for_locales(["zh", "en"])

    kept = map_row(row_factory(price="a consultar"), layout, PricePolicy.ALLOW_INVALID)
    rejected = [r.rejection for r in map_rows([row_factory(price="a consultar")], layout)]

    assert kept.record.price is None
    assert rejected == [RejectionReason.INVALID_PRICE]


class TestSheetLayout:

    def test_for_locales_puts_default_first(self) -> None:
        layout = SheetLayout.for_locales(["en", "zh"], default_locale="zh")

        assert layout.locales == ("zh", "en")

    def test_unknown_locale_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            SheetLayout.for_locales(["zh", "fr"])
