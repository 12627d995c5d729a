"""
Estado y resultado de una corrida de sincronizacion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class SyncState(Enum):
    """Estados del orquestador: IDLE -> RUNNING -> (SUCCEEDED | FAILED) -> IDLE."""
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SyncTrigger(Enum):
    """Origen de la invocacion."""
    SCHEDULE = "schedule"
    STARTUP = "startup"
    MANUAL = "manual"
    CLI = "cli"


class SyncOutcome(Enum):
    """Resultado observable por el caller."""
    SUCCEEDED = "succeeded"
    SKIPPED_EMPTY = "skipped_empty"                      # sin registros validos, tabla intacta
    SKIPPED_ALREADY_RUNNING = "skipped_already_running"  # otra corrida en curso
    FAILED = "failed"


class RejectionReason(Enum):
    """Motivo por el cual una fila de la hoja no se convierte en producto."""
    MISSING_OR_INVALID_ID = "missing_or_invalid_id"
    MISSING_NAME = "missing_name"
    INVALID_PRICE = "invalid_price"


@dataclass(frozen=True)
class SyncRunResult:
    """
    Resumen de una invocacion del orquestador.

    Los triggers automaticos solo lo loguean; el endpoint manual y el CLI
    lo traducen a respuesta / exit code.
    """

    outcome: SyncOutcome
    trigger: SyncTrigger
    started_at: datetime
    finished_at: datetime
    rows_read: int = 0
    valid_records: int = 0
    duplicates: int = 0
    written_rows: int = 0
    rejected: Dict[str, int] = field(default_factory=dict)
    error_code: Optional[str] = None
    error: Optional[str] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome is not SyncOutcome.FAILED

    @property
    def rejected_rows(self) -> int:
        return sum(self.rejected.values())

    @property
    def elapsed_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convierte el resultado a diccionario para logs/CLI."""
        return {
            "outcome": self.outcome.value,
            "trigger": self.trigger.value,
            "rows_read": self.rows_read,
            "valid_records": self.valid_records,
            "duplicates": self.duplicates,
            "written_rows": self.written_rows,
            "rejected": dict(self.rejected),
            "error_code": self.error_code,
            "error": self.error,
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
