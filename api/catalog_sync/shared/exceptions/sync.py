"""
Excepciones del pipeline de sincronización Google Sheets -> base de datos.

Ninguna de estas excepciones llega al scheduler: el orquestador las captura
y las convierte en un resultado `failed`. El endpoint manual y el CLI
exponen el mensaje al caller.
"""
from typing import Any, Optional

from catalog_sync.shared.exceptions.base import AppException


class SyncException(AppException):
    """Excepción base para errores de sincronización."""

    def __init__(
        self,
        message: str,
        error_code: str = "SYNC_ERROR",
        details: Optional[dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            error_code=error_code,
            details=details
        )


class SourceConfigInvalidError(SyncException):
    """Falta el ID de la hoja o las credenciales de la cuenta de servicio."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        details = {"missing": missing} if missing else None
        super().__init__(
            message=message,
            error_code="SOURCE_CONFIG_INVALID",
            details=details
        )
        self.missing = missing or []


class SourceUnavailableError(SyncException):
    """Error de autenticación, red o de hoja inexistente al leer Google Sheets."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        details = {"status_code": status_code} if status_code is not None else None
        super().__init__(
            message=message,
            error_code="SOURCE_UNAVAILABLE",
            details=details
        )
        self.source_status_code = status_code


class EmptyResultSetError(SyncException):
    """No hay registros validos; la tabla destino no se toca."""

    def __init__(self, message: str = "No hay productos validos para escribir"):
        super().__init__(message=message, error_code="EMPTY_RESULT_SET")


class WriteFailedError(SyncException):
    """La transaccion de reemplazo fallo y se hizo rollback."""

    def __init__(self, message: str, table: Optional[str] = None):
        details = {"table": table} if table else None
        super().__init__(
            message=message,
            error_code="WRITE_FAILED",
            details=details
        )
