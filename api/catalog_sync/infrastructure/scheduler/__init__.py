"""
Jobs programados de la sincronizacion.
"""
from catalog_sync.infrastructure.scheduler.sync_scheduler import (
    RECURRING_JOB_ID,
    STARTUP_JOB_ID,
    build_sync_scheduler,
    run_scheduled_sync,
)

__all__ = ["RECURRING_JOB_ID", "STARTUP_JOB_ID", "build_sync_scheduler", "run_scheduled_sync"]
