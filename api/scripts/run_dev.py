"""
Servidor de desarrollo del servicio de catalogo (uvicorn con recarga).

Con recarga activa uvicorn reinicia el proceso en cada cambio, lo que
vuelve a disparar la sincronizacion de arranque. Para trabajar sin
tocar la hoja, exportar SYNC_ENABLED=false.

Uso:
    cd api && python scripts/run_dev.py
"""
import sys
from pathlib import Path

import uvicorn

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from catalog_sync.core.config import settings  # noqa: E402


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
