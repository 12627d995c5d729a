"""
Mapper fila de Google Sheets -> ProductRecord.

Transformacion pura (sin I/O): cada fila produce un MappingResult que
contiene el producto validado o el motivo de rechazo. Los rechazos se
cuentan y loguean en el orquestador; nunca hacen fallar la corrida.

Orden de columnas de la hoja (indice 0-based, fila 1 = encabezados):
    0  ID
    1  Categoria
    2  Nombre (zh)
    3  Precio
    4  URL de imagen
    5  Stock
    6  Estado
    7  Descripcion de vitrina (zh)
    8  Detalle de regalo (zh)
    9  Descripcion de producto (zh)
    10 Especificaciones (zh)
    11 Informacion de envio (zh)
    12-17 Los mismos seis textos en ingles (en)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from catalog_sync.domain.entities.product import (
    DEFAULT_LOCALE,
    LOCALIZED_FIELD_NAMES,
    LONG_TEXT_FIELDS,
    LocalizedFields,
    ProductRecord,
)
from catalog_sync.domain.entities.sync_run import RejectionReason


RawRow = Sequence[Any]

# Primera fila de datos en la numeracion de la hoja (la fila 1 es el encabezado)
FIRST_DATA_ROW = 2

# Limites de las columnas: INTEGER, NUMERIC(10, 2) y VARCHAR(255)
MAX_INT = 2**31 - 1
MAX_PRICE = Decimal("99999999.99")
PRICE_QUANTUM = Decimal("0.01")
MAX_SHORT_TEXT = 255

DEFAULT_LOCALE_COLUMNS: Dict[str, Dict[str, int]] = {
    "zh": {
        "name": 2,
        "display_desc": 7,
        "gift_detail_desc": 8,
        "product_desc": 9,
        "product_specs": 10,
        "shipping_info": 11,
    },
    "en": {
        "name": 12,
        "display_desc": 13,
        "gift_detail_desc": 14,
        "product_desc": 15,
        "product_specs": 16,
        "shipping_info": 17,
    },
}

_GROUPED_COMMAS = re.compile(r"[-+]?\d{1,3}(,\d{3})+")


class PricePolicy(Enum):
    """
    Que hacer con un precio no numerico.

    REQUIRE_NUMERIC: la fila se rechaza (INVALID_PRICE).
    ALLOW_INVALID: la fila se conserva con price=None (NULL en la tabla).
    """
    REQUIRE_NUMERIC = "require_numeric"
    ALLOW_INVALID = "allow_invalid"


@dataclass(frozen=True)
class SheetLayout:
    """Posiciones de columnas en la hoja y locales a mapear."""

    id: int = 0
    category: int = 1
    price: int = 3
    image_url: int = 4
    stock: int = 5
    status: int = 6
    locales: Tuple[str, ...] = (DEFAULT_LOCALE, "en")
    default_locale: str = DEFAULT_LOCALE
    locale_columns: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: DEFAULT_LOCALE_COLUMNS
    )

    def __post_init__(self) -> None:
        if self.default_locale not in self.locales:
            raise ValueError(
                f"El locale por defecto '{self.default_locale}' no esta en {self.locales}"
            )
        unknown = [loc for loc in self.locales if loc not in self.locale_columns]
        if unknown:
            raise ValueError(f"Locales sin columnas definidas en la hoja: {unknown}")

    @classmethod
    def for_locales(cls, locales: Iterable[str], default_locale: str = DEFAULT_LOCALE) -> "SheetLayout":
        ordered = (default_locale,) + tuple(loc for loc in locales if loc != default_locale)
        return cls(locales=ordered, default_locale=default_locale)


@dataclass(frozen=True)
class MappingResult:
    """Resultado de mapear una fila: producto o rechazo."""

    row_number: int
    record: Optional[ProductRecord] = None
    rejection: Optional[RejectionReason] = None
    detail: str = ""

    @property
    def is_valid(self) -> bool:
        return self.record is not None


def _cell(raw: RawRow, index: int) -> Any:
    """Valor de la celda o None si no existe o esta vacia."""
    if index >= len(raw):
        return None
    value = raw[index]
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _text(raw: RawRow, index: int, max_length: Optional[int] = None) -> Optional[str]:
    value = _cell(raw, index)
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text[:max_length] if max_length else text


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Coercion numerica; None si el valor no es un numero finito."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, float):
            number = Decimal(repr(value))
        elif isinstance(value, (int, Decimal)):
            number = Decimal(value)
        else:
            number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _normalize_separators(text: str) -> str:
    """
    Quita separadores de miles y deja '.' como separador decimal.

    - "1,299.50" -> "1299.50" y "1.299,50" -> "1299.50" (manda el ultimo separador)
    - "1,299"    -> "1299" (grupos de tres digitos)
    - "9,99"     -> "9.99" (una sola coma que no agrupa miles)
    """
    text = text.replace(" ", "").replace("\u00a0", "")
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        if _GROUPED_COMMAS.fullmatch(text):
            return text.replace(",", "")
        if text.count(",") == 1:
            return text.replace(",", ".")
    return text


def parse_product_id(value: Any) -> Optional[int]:
    """ID entero positivo que cabe en INTEGER, o None."""
    number = _to_decimal(value)
    if number is None or number <= 0 or number > MAX_INT or number != number.to_integral_value():
        return None
    return int(number)


def parse_price(value: Any) -> Optional[Decimal]:
    """
    Precio no negativo con dos decimales, o None si no es valido.

    Una celda vacia equivale a 0.
    """
    if value is None:
        return Decimal("0.00")
    if isinstance(value, str):
        value = _normalize_separators(value)
    number = _to_decimal(value)
    if number is None or number < 0:
        return None
    number = number.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    if number > MAX_PRICE:
        return None
    return number


def parse_stock(value: Any) -> int:
    """Stock entero no negativo; un valor no numerico o fuera de rango es 0."""
    number = _to_decimal(value)
    if number is None or number < 0 or number > MAX_INT:
        return 0
    return int(number)


def _max_length(field_name: str) -> Optional[int]:
    return None if field_name in LONG_TEXT_FIELDS else MAX_SHORT_TEXT


def _localized_fields(raw: RawRow, columns: Mapping[str, int]) -> LocalizedFields:
    return LocalizedFields(**{
        name: _text(raw, columns[name], _max_length(name)) for name in LOCALIZED_FIELD_NAMES
    })


def map_row(
    raw: RawRow,
    layout: SheetLayout,
    policy: PricePolicy = PricePolicy.REQUIRE_NUMERIC,
    row_number: int = FIRST_DATA_ROW,
) -> MappingResult:
    """
    Valida y convierte una fila.

    Orden de las validaciones: ID, nombre en el locale por defecto, precio.
    """
    product_id = parse_product_id(_cell(raw, layout.id))
    if product_id is None:
        return MappingResult(
            row_number=row_number,
            rejection=RejectionReason.MISSING_OR_INVALID_ID,
            detail=f"id={_cell(raw, layout.id)!r}",
        )

    localized = {
        locale: _localized_fields(raw, layout.locale_columns[locale])
        for locale in layout.locales
    }
    if not localized[layout.default_locale].name:
        return MappingResult(
            row_number=row_number,
            rejection=RejectionReason.MISSING_NAME,
            detail=f"id={product_id}",
        )

    raw_price = _cell(raw, layout.price)
    price = parse_price(raw_price)
    if price is None and policy is PricePolicy.REQUIRE_NUMERIC:
        return MappingResult(
            row_number=row_number,
            rejection=RejectionReason.INVALID_PRICE,
            detail=f"id={product_id} price={raw_price!r}",
        )

    record = ProductRecord(
        id=product_id,
        category=_text(raw, layout.category, MAX_SHORT_TEXT),
        price=price,
        image_url=_text(raw, layout.image_url),
        stock=parse_stock(_cell(raw, layout.stock)),
        status=_text(raw, layout.status, MAX_SHORT_TEXT),
        localized=localized,
    )
    return MappingResult(row_number=row_number, record=record)


def map_rows(
    rows: Iterable[RawRow],
    layout: SheetLayout,
    policy: PricePolicy = PricePolicy.REQUIRE_NUMERIC,
    start_row: int = FIRST_DATA_ROW,
) -> Iterator[MappingResult]:
    """Mapea perezosamente; la numeracion sigue la de la hoja."""
    for offset, raw in enumerate(rows):
        yield map_row(raw, layout, policy, row_number=start_row + offset)


class ProductRowMapper:
    """
    Layout y politica de precios configurados, para inyectar en el orquestador.

    Uso:
        mapper = ProductRowMapper(SheetLayout.for_locales(("zh", "en")))
        for result in mapper.map_rows(rows):
            ...
    """

    def __init__(
        self,
        layout: Optional[SheetLayout] = None,
        price_policy: PricePolicy = PricePolicy.REQUIRE_NUMERIC,
    ) -> None:
        self.layout = layout or SheetLayout()
        self.price_policy = price_policy

    def map_row(self, raw: RawRow, row_number: int = FIRST_DATA_ROW) -> MappingResult:
        return map_row(raw, self.layout, self.price_policy, row_number=row_number)

    def map_rows(self, rows: Iterable[RawRow], start_row: int = FIRST_DATA_ROW) -> Iterator[MappingResult]:
        return map_rows(rows, self.layout, self.price_policy, start_row=start_row)
