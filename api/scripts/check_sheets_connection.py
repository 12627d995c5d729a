"""
Prueba de conexion con Google Sheets (no toca la base de datos).

Imprime el titulo del spreadsheet, la cantidad de filas de datos y las
primeras tres filas.

Ejecución:
  python scripts/check_sheets_connection.py
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from catalog_sync.core.events import build_sheets_reader
from catalog_sync.shared.exceptions import SyncException


def main() -> int:
    reader = build_sheets_reader()
    try:
        snapshot = reader.read_rows()
    except SyncException as e:
        logger.error(f"No se pudo leer la hoja [{e.error_code}]: {e.message}")
        return 1

    logger.success(f"Conectado a '{snapshot.spreadsheet_title}' (hoja '{snapshot.sheet_title}')")
    logger.info(f"Filas de datos: {len(snapshot.rows)}")
    for number, row in enumerate(snapshot.rows[:3], start=2):
        logger.info(f"Fila {number}: {row}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
