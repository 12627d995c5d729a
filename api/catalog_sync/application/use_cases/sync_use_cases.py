"""
Casos de uso para la sincronización Google Sheets -> base de datos.

Flujo de una corrida:
    guard -> validar config -> leer hoja (thread) -> mapear filas
    -> deduplicar por ID -> reemplazar tabla (una transaccion)

Una sola corrida a la vez por proceso: si ya hay una en curso, la nueva
invocacion se descarta (no se encola).
"""
import asyncio
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional

from loguru import logger

from catalog_sync.application.services.product_mapper import ProductRowMapper
from catalog_sync.domain.entities.product import ProductRecord
from catalog_sync.domain.entities.sync_run import (
    SyncOutcome,
    SyncRunResult,
    SyncState,
    SyncTrigger,
)
from catalog_sync.domain.repositories.product_repository import IProductRepository
from catalog_sync.infrastructure.external.google_sheets import GoogleSheetsReader
from catalog_sync.shared.exceptions import SyncException


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyncOrchestrator:
    """
    Orquestador de la sincronizacion del catalogo.

    Todos los triggers (cron, arranque, endpoint manual, CLI) comparten
    la misma instancia para que el guard sea efectivo.
    """

    def __init__(
        self,
        reader: GoogleSheetsReader,
        repository: IProductRepository,
        mapper: Optional[ProductRowMapper] = None,
    ):
        self.reader = reader
        self.repository = repository
        self.mapper = mapper or ProductRowMapper()
        self._guard = asyncio.Lock()
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._guard.locked()

    async def run(self, trigger: SyncTrigger, dry_run: bool = False) -> SyncRunResult:
        """
        Ejecuta una corrida completa.

        Nunca lanza excepciones: los errores se devuelven como resultado `failed`.
        """
        started_at = _utc_now()

        if self._guard.locked():
            logger.warning(f"Sincronización ya en curso; se omite la invocación ({trigger.value})")
            return SyncRunResult(
                outcome=SyncOutcome.SKIPPED_ALREADY_RUNNING,
                trigger=trigger,
                started_at=started_at,
                finished_at=_utc_now(),
                dry_run=dry_run,
            )

        async with self._guard:
            self._state = SyncState.RUNNING
            try:
                result = await self._execute(trigger, started_at, dry_run)
                self._state = SyncState.FAILED if result.outcome is SyncOutcome.FAILED else SyncState.SUCCEEDED
                return result
            finally:
                self._state = SyncState.IDLE

    async def _execute(self, trigger: SyncTrigger, started_at: datetime, dry_run: bool) -> SyncRunResult:
        logger.info(f"Iniciando sincronización del catálogo (trigger={trigger.value}, dry_run={dry_run})")

        rows_read = 0
        rejected: Counter = Counter()
        try:
            self.reader.ensure_configured()
            snapshot = await asyncio.to_thread(self.reader.read_rows)
            rows_read = len(snapshot.rows)
            logger.info(f"Leídas {rows_read} filas de '{snapshot.spreadsheet_title}' / '{snapshot.sheet_title}'")

            records, duplicates = self._collect_records(snapshot.rows, rejected)
            logger.info(
                f"Productos válidos: {len(records)} "
                f"(rechazados: {sum(rejected.values())}, duplicados: {duplicates})"
            )

            common = dict(
                trigger=trigger,
                started_at=started_at,
                rows_read=rows_read,
                valid_records=len(records),
                duplicates=duplicates,
                rejected=self._rejected_dict(rejected),
                dry_run=dry_run,
            )

            if not records:
                logger.warning("No hay productos válidos en la hoja; la tabla no se modifica")
                return SyncRunResult(outcome=SyncOutcome.SKIPPED_EMPTY, finished_at=_utc_now(), **common)

            if dry_run:
                logger.info(f"Dry run: se escribirían {len(records)} productos")
                return SyncRunResult(outcome=SyncOutcome.SUCCEEDED, finished_at=_utc_now(), **common)

            written = await self.repository.replace_all(records)
            logger.success(f"Sincronización completada: {written} productos escritos")
            return SyncRunResult(
                outcome=SyncOutcome.SUCCEEDED,
                finished_at=_utc_now(),
                written_rows=written,
                **common,
            )

        except SyncException as e:
            logger.error(f"Sincronización fallida [{e.error_code}]: {e.message}")
            return self._failed(trigger, started_at, rows_read, rejected, dry_run, e.error_code, e.message)
        except Exception as e:
            logger.exception(f"Error inesperado durante la sincronización: {e}")
            return self._failed(trigger, started_at, rows_read, rejected, dry_run, "INTERNAL_ERROR", str(e))

    def _collect_records(self, rows, rejected: Counter) -> tuple[List[ProductRecord], int]:
        """
        Mapea las filas y deduplica por ID (gana la ultima aparicion).

        Los rechazos se acumulan en `rejected` por motivo.
        """
        by_id: Dict[int, ProductRecord] = {}
        duplicates = 0
        for result in self.mapper.map_rows(rows):
            if result.record is None:
                rejected[result.rejection] += 1
                logger.warning(
                    f"Fila {result.row_number} descartada ({result.rejection.value}): {result.detail}"
                )
                continue

            if result.record.id in by_id:
                duplicates += 1
                logger.warning(f"Fila {result.row_number}: ID {result.record.id} repetido, se usa esta fila")
                del by_id[result.record.id]
            by_id[result.record.id] = result.record

        return list(by_id.values()), duplicates

    @staticmethod
    def _rejected_dict(rejected: Counter) -> Dict[str, int]:
        return {reason.value: count for reason, count in rejected.items()}

    def _failed(
        self,
        trigger: SyncTrigger,
        started_at: datetime,
        rows_read: int,
        rejected: Counter,
        dry_run: bool,
        error_code: str,
        error: str,
    ) -> SyncRunResult:
        return SyncRunResult(
            outcome=SyncOutcome.FAILED,
            trigger=trigger,
            started_at=started_at,
            finished_at=_utc_now(),
            rows_read=rows_read,
            rejected=self._rejected_dict(rejected),
            error_code=error_code,
            error=error,
            dry_run=dry_run,
        )
