"""
Endpoint de sincronizacion manual Google Sheets -> base de datos.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from catalog_sync.api.dependencies.deps import get_sync_orchestrator
from catalog_sync.application.dto.sync_dto import SyncErrorResponseDTO, SyncResponseDTO
from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator
from catalog_sync.domain.entities.sync_run import SyncOutcome, SyncRunResult, SyncTrigger


router = APIRouter(tags=["Sync"])


def _success_message(result: SyncRunResult) -> str:
    if result.outcome is SyncOutcome.SKIPPED_ALREADY_RUNNING:
        return "Ya hay una sincronizacion en curso; esta invocacion se omitio"
    if result.outcome is SyncOutcome.SKIPPED_EMPTY:
        return "Sin productos validos en la hoja; la tabla no se modifico"
    return f"Sincronizacion manual completada: {result.written_rows} producto(s) escrito(s)"


@router.get(
    "/sync",
    response_model=SyncResponseDTO,
    responses={500: {"model": SyncErrorResponseDTO}},
    summary="Sincronizar Google Sheets con la base de datos"
)
async def sync_now(orchestrator: SyncOrchestrator = Depends(get_sync_orchestrator)):
    """
    Ejecuta una sincronizacion completa y espera a que termine.

    - 200 si la corrida termina bien o se omite (ya en curso / sin productos validos)
    - 500 si la lectura o la escritura fallan (la tabla queda como estaba)
    """
    logger.info("Sincronizacion manual solicitada desde API")
    result = await orchestrator.run(SyncTrigger.MANUAL)

    if result.outcome is SyncOutcome.FAILED:
        body = SyncErrorResponseDTO(
            error=result.error or "Error desconocido",
            error_code=result.error_code,
            outcome=result.outcome.value,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )

    return SyncResponseDTO(
        message=_success_message(result),
        outcome=result.outcome.value,
        written_rows=result.written_rows,
        rejected_rows=result.rejected_rows,
    )
