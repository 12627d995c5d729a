"""
Integracion con Google Sheets (origen del catalogo).
"""
from catalog_sync.infrastructure.external.google_sheets.sheets_client import (
    GoogleSheetsReader,
    SheetSnapshot,
    SheetSourceConfig,
)

__all__ = ["GoogleSheetsReader", "SheetSnapshot", "SheetSourceConfig"]
