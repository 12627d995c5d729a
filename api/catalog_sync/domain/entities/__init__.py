"""
Entidades del dominio.
"""
from catalog_sync.domain.entities.product import (
    DEFAULT_LOCALE,
    LOCALIZED_FIELD_NAMES,
    LONG_TEXT_FIELDS,
    LocalizedFields,
    ProductRecord,
    resolve_locale,
    resolve_localized,
)
from catalog_sync.domain.entities.sync_run import (
    RejectionReason,
    SyncOutcome,
    SyncRunResult,
    SyncState,
    SyncTrigger,
)

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALIZED_FIELD_NAMES",
    "LONG_TEXT_FIELDS",
    "LocalizedFields",
    "ProductRecord",
    "resolve_locale",
    "resolve_localized",
    "RejectionReason",
    "SyncOutcome",
    "SyncRunResult",
    "SyncState",
    "SyncTrigger",
]
