"""
Data Transfer Objects de la API.
"""
from catalog_sync.application.dto.product_dto import ProductDTO, ProductListResponseDTO
from catalog_sync.application.dto.sync_dto import (
    HealthResponseDTO,
    SyncErrorResponseDTO,
    SyncResponseDTO,
)

__all__ = [
    "ProductDTO",
    "ProductListResponseDTO",
    "HealthResponseDTO",
    "SyncErrorResponseDTO",
    "SyncResponseDTO",
]
