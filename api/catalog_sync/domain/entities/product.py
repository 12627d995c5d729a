"""
Entidades de producto y busqueda por locale.

Un producto guarda los campos comunes (precio, stock, estado...) y un
bundle de textos por locale. La busqueda por locale es una funcion pura:
si el locale pedido no tiene valor, se usa el del locale por defecto.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Dict, Mapping, Optional, Tuple


DEFAULT_LOCALE = "zh"


@dataclass(frozen=True)
class LocalizedFields:
    """Textos de un producto en un locale."""

    name: Optional[str] = None
    display_desc: Optional[str] = None
    gift_detail_desc: Optional[str] = None
    product_desc: Optional[str] = None
    product_specs: Optional[str] = None
    shipping_info: Optional[str] = None

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


LOCALIZED_FIELD_NAMES: Tuple[str, ...] = LocalizedFields.field_names()

# Textos largos (TEXT); el resto de campos localizados son VARCHAR(255)
LONG_TEXT_FIELDS = frozenset({"display_desc", "gift_detail_desc", "product_desc", "product_specs", "shipping_info"})


@dataclass(frozen=True)
class ProductRecord:
    """
    Producto validado, listo para persistir.

    `localized` mapea locale -> LocalizedFields. El locale por defecto
    siempre esta presente y con `name` no vacio (lo garantiza el mapper).
    """

    id: int
    category: Optional[str] = None
    price: Optional[Decimal] = None
    image_url: Optional[str] = None
    stock: int = 0
    status: Optional[str] = None
    localized: Dict[str, LocalizedFields] = field(default_factory=dict)

    def text(self, field_name: str, locale: str, default_locale: str = DEFAULT_LOCALE) -> str:
        """Atajo de `resolve_localized` sobre este producto."""
        return resolve_localized(self.localized, field_name, locale, default_locale)


def resolve_locale(requested: Optional[str], supported: Tuple[str, ...], default_locale: str = DEFAULT_LOCALE) -> str:
    """
    Normaliza el locale pedido.

    Locales desconocidos o vacios se resuelven al locale por defecto.
    """
    candidate = (requested or "").strip().lower()
    return candidate if candidate in supported else default_locale


def resolve_localized(
    bundles: Mapping[str, LocalizedFields],
    field_name: str,
    locale: str,
    default_locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Busca `field_name` en el locale pedido con fallback al locale por defecto.

    Retorna cadena vacia si ninguno de los dos tiene valor.
    """
    if field_name not in LOCALIZED_FIELD_NAMES:
        raise KeyError(f"Campo localizado desconocido: {field_name}")

    for loc in (locale, default_locale):
        bundle = bundles.get(loc)
        value = getattr(bundle, field_name) if bundle else None
        if value:
            return value
    return ""
