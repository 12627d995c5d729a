"""
Health check.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from catalog_sync.application.dto.sync_dto import HealthResponseDTO
from catalog_sync.core.config import settings


router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check() -> HealthResponseDTO:
    """Endpoint para verificar el estado de la aplicación."""
    return HealthResponseDTO(
        status="ok",
        service=settings.APP_NAME,
        timestamp=datetime.now(timezone.utc),
    )
