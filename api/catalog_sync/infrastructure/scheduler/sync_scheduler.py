"""
Triggers automaticos de la sincronizacion (APScheduler).

- `catalog_sync`: cron recurrente (SYNC_INTERVAL)
- `catalog_sync_startup`: una sola vez, unos segundos despues del arranque

Ambos jobs llaman al mismo orquestador; si una corrida sigue en curso
cuando se dispara el siguiente, el orquestador la descarta.
"""
from datetime import datetime, timedelta, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from loguru import logger

from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator
from catalog_sync.domain.entities.sync_run import SyncOutcome, SyncTrigger


RECURRING_JOB_ID = "catalog_sync"
STARTUP_JOB_ID = "catalog_sync_startup"


async def run_scheduled_sync(orchestrator: SyncOrchestrator, trigger: SyncTrigger) -> None:
    """
    Funcion del job: ejecuta la corrida y loguea el resultado.

    No propaga excepciones para que el scheduler siga vivo.
    """
    try:
        result = await orchestrator.run(trigger)
    except Exception as e:
        logger.exception(f"Job de sincronización ({trigger.value}) terminó con error: {e}")
        return

    if result.outcome is SyncOutcome.FAILED:
        logger.error(f"Sincronización {trigger.value} fallida: {result.error}")
    else:
        logger.info(
            f"Sincronización {trigger.value}: {result.outcome.value} "
            f"({result.written_rows} escritos, {result.rejected_rows} rechazados, "
            f"{result.elapsed_seconds:.2f}s)"
        )


def build_sync_scheduler(
    orchestrator: SyncOrchestrator,
    *,
    cron_expression: str,
    startup_delay_seconds: float,
    timezone_name: str = "UTC",
) -> AsyncIOScheduler:
    """
    Crea el scheduler con los dos jobs registrados (sin iniciarlo).

    Args:
        orchestrator: Orquestador compartido con el endpoint manual
        cron_expression: Expresion cron de 5 campos
        startup_delay_seconds: Espera antes de la corrida de arranque
        timezone_name: Zona horaria del cron
    """
    scheduler = AsyncIOScheduler(timezone=timezone_name)

    scheduler.add_job(
        run_scheduled_sync,
        trigger=CronTrigger.from_crontab(cron_expression, timezone=timezone_name),
        args=[orchestrator, SyncTrigger.SCHEDULE],
        id=RECURRING_JOB_ID,
        name="Sincronización Google Sheets -> base de datos",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )

    run_date = datetime.now(timezone.utc) + timedelta(seconds=startup_delay_seconds)
    scheduler.add_job(
        run_scheduled_sync,
        trigger=DateTrigger(run_date=run_date),
        args=[orchestrator, SyncTrigger.STARTUP],
        id=STARTUP_JOB_ID,
        name="Sincronización inicial",
        replace_existing=True,
    )

    logger.info(
        f"Scheduler configurado: cron '{cron_expression}' ({timezone_name}), "
        f"corrida inicial en {startup_delay_seconds:g}s"
    )
    return scheduler
