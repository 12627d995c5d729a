"""
Tests unitarios para los jobs programados de sincronizacion.
"""
from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from catalog_sync.domain.entities.sync_run import SyncOutcome, SyncRunResult, SyncTrigger
from catalog_sync.infrastructure.scheduler import (
    RECURRING_JOB_ID,
    STARTUP_JOB_ID,
    build_sync_scheduler,
    run_scheduled_sync,
)


def _result(outcome: SyncOutcome) -> SyncRunResult:
    now = datetime.now(timezone.utc)
    return SyncRunResult(outcome=outcome, trigger=SyncTrigger.SCHEDULE, started_at=now, finished_at=now)


def test_scheduler_registers_recurring_and_startup_jobs() -> None:
    orchestrator = AsyncMock()

    scheduler = build_sync_scheduler(
        orchestrator,
        cron_expression="*/5 * * * *",
        startup_delay_seconds=5,
    )

    recurring = scheduler.get_job(RECURRING_JOB_ID)
    startup = scheduler.get_job(STARTUP_JOB_ID)
    assert isinstance(recurring.trigger, CronTrigger)
    assert recurring.max_instances == 1
    assert recurring.coalesce is True
    assert recurring.args == (orchestrator, SyncTrigger.SCHEDULE)
    assert isinstance(startup.trigger, DateTrigger)
    assert startup.args == (orchestrator, SyncTrigger.STARTUP)


def test_invalid_cron_expression_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_sync_scheduler(AsyncMock(), cron_expression="cada cinco minutos", startup_delay_seconds=5)


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", list(SyncOutcome))
async def test_job_logs_every_outcome_without_raising(outcome: SyncOutcome) -> None:
    orchestrator = AsyncMock()
    orchestrator.run = AsyncMock(return_value=_result(outcome))

    await run_scheduled_sync(orchestrator, SyncTrigger.SCHEDULE)

    orchestrator.run.assert_awaited_once_with(SyncTrigger.SCHEDULE)


@pytest.mark.asyncio
async def test_job_swallows_unexpected_errors() -> None:
    orchestrator = AsyncMock()
    orchestrator.run = AsyncMock(side_effect=RuntimeError("boom"))

    await run_scheduled_sync(orchestrator, SyncTrigger.STARTUP)
