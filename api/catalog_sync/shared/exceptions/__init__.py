"""
Excepciones de la aplicacion.
"""
from catalog_sync.shared.exceptions.base import AppException
from catalog_sync.shared.exceptions.sync import (
    SyncException,
    SourceConfigInvalidError,
    SourceUnavailableError,
    EmptyResultSetError,
    WriteFailedError,
)

__all__ = [
    "AppException",
    "SyncException",
    "SourceConfigInvalidError",
    "SourceUnavailableError",
    "EmptyResultSetError",
    "WriteFailedError",
]
