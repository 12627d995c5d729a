"""
DTOs del catalogo publicado.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class ProductDTO(BaseModel):
    """Producto publicado, con los textos resueltos para un locale."""

    id: int = Field(..., description="ID del producto en la hoja")
    category: Optional[str] = Field(None, description="Categoria")
    price: Optional[Decimal] = Field(None, description="Precio (2 decimales)")
    image_url: Optional[str] = Field(None, description="URL de la imagen")
    stock: int = Field(0, description="Unidades disponibles")
    status: Optional[str] = Field(None, description="Estado de publicacion")
    name: str = Field("", description="Nombre")
    display_desc: str = Field("", description="Descripcion de vitrina")
    gift_detail_desc: str = Field("", description="Detalle de regalo")
    product_desc: str = Field("", description="Descripcion del producto")
    product_specs: str = Field("", description="Especificaciones")
    shipping_info: str = Field("", description="Informacion de envio")


class ProductListResponseDTO(BaseModel):
    success: bool = True
    data: List[ProductDTO] = Field(default_factory=list)
