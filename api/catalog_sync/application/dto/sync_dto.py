"""
DTOs de la sincronizacion manual y del health check.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SyncResponseDTO(BaseModel):
    """Respuesta de GET /sync cuando la corrida termina bien o se omite."""

    success: bool = True
    message: str
    outcome: str = Field(..., description="succeeded | skipped_empty | skipped_already_running")
    written_rows: int = 0
    rejected_rows: int = 0


class SyncErrorResponseDTO(BaseModel):
    """Respuesta de GET /sync cuando la corrida falla."""

    success: bool = False
    error: str
    error_code: Optional[str] = None
    outcome: str = "failed"


class HealthResponseDTO(BaseModel):
    status: str = "ok"
    service: str
    timestamp: datetime
