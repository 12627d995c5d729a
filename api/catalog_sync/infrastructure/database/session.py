"""
Gestión del engine de base de datos.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from catalog_sync.core.config import settings


def _create_engine_args(database_url: str) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL/MySQL usan pool de conexiones, SQLite no lo soporta.
    """
    args = {
        "echo": settings.DEBUG,
        "future": True,
    }

    # Configuracion de pool solo para servidores de base de datos
    if not database_url.startswith("sqlite"):
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
        })

    return args


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Crea el engine async del almacen de productos.

    Args:
        database_url: URL SQLAlchemy; por defecto la de la configuracion.
    """
    url = database_url or settings.effective_database_url
    return create_async_engine(url, **_create_engine_args(url))


async def close_engine(engine: AsyncEngine) -> None:
    """Cierra las conexiones de la base de datos."""
    await engine.dispose()
