"""
CLI: una corrida de sincronizacion Google Sheets -> base de datos.

Sirve para cron externos o para probar la configuracion sin levantar
el servidor. Usa el mismo orquestador que el scheduler y /sync.

Ejecución:
  python scripts/run_sync_once.py
  python scripts/run_sync_once.py --dry-run   # lee y valida, no escribe

Exit code: 0 si la corrida termina bien o se omite, 1 si falla.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `catalog_sync/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o raiz del repo).
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator
from catalog_sync.core.config import settings
from catalog_sync.core.events import build_row_mapper, build_sheets_reader
from catalog_sync.domain.entities.sync_run import SyncTrigger
from catalog_sync.infrastructure.database.session import build_engine, close_engine
from catalog_sync.infrastructure.repositories.product_repository import ProductRepository


async def _run(dry_run: bool) -> int:
    engine = build_engine()
    try:
        repository = ProductRepository(engine, table_name=settings.PRODUCTS_TABLE, locales=settings.locales)
        orchestrator = SyncOrchestrator(
            reader=build_sheets_reader(),
            repository=repository,
            mapper=build_row_mapper(),
        )
        result = await orchestrator.run(SyncTrigger.CLI, dry_run=dry_run)
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

        if result.ok and not dry_run:
            logger.info(f"Filas en '{repository.table_name}': {await repository.count()}")
        return 0 if result.ok else 1
    finally:
        await close_engine(engine)


def main() -> int:
    parser = argparse.ArgumentParser(description="Sincroniza el catalogo desde Google Sheets una vez.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Lee y valida la hoja sin escribir en la base de datos.",
    )
    args = parser.parse_args()
    return asyncio.run(_run(args.dry_run))


if __name__ == "__main__":
    raise SystemExit(main())
