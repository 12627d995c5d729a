"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from typing import Callable

from fastapi import FastAPI
from loguru import logger

from catalog_sync.application.services.product_mapper import PricePolicy, ProductRowMapper, SheetLayout
from catalog_sync.application.use_cases.sync_use_cases import SyncOrchestrator
from catalog_sync.core.config import settings
from catalog_sync.infrastructure.database.session import build_engine, close_engine
from catalog_sync.infrastructure.external.google_sheets import GoogleSheetsReader, SheetSourceConfig
from catalog_sync.infrastructure.repositories.product_repository import ProductRepository
from catalog_sync.infrastructure.scheduler.sync_scheduler import build_sync_scheduler


def build_sheets_reader() -> GoogleSheetsReader:
    """Lector de Google Sheets con las credenciales de la configuracion."""
    return GoogleSheetsReader(
        SheetSourceConfig(
            spreadsheet_id=settings.SPREADSHEET_ID,
            client_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            private_key=settings.GOOGLE_PRIVATE_KEY,
            sheet_index=settings.SHEET_INDEX,
        )
    )


def build_row_mapper() -> ProductRowMapper:
    policy = PricePolicy.REQUIRE_NUMERIC if settings.REQUIRE_NUMERIC_PRICE else PricePolicy.ALLOW_INVALID
    return ProductRowMapper(
        SheetLayout.for_locales(settings.locales, default_locale=settings.DEFAULT_LOCALE),
        price_policy=policy,
    )


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Configurar logging adicional
            logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )

            # Validar configuracion critica
            _validate_config()

            engine = build_engine()
            repository = ProductRepository(
                engine,
                table_name=settings.PRODUCTS_TABLE,
                locales=settings.locales,
            )
            orchestrator = SyncOrchestrator(
                reader=build_sheets_reader(),
                repository=repository,
                mapper=build_row_mapper(),
            )

            app.state.engine = engine
            app.state.product_repository = repository
            app.state.sync_orchestrator = orchestrator
            app.state.scheduler = None

            if settings.SYNC_ENABLED:
                scheduler = build_sync_scheduler(
                    orchestrator,
                    cron_expression=settings.SYNC_INTERVAL,
                    startup_delay_seconds=settings.STARTUP_SYNC_DELAY_SECONDS,
                    timezone_name=settings.SCHEDULER_TIMEZONE,
                )
                scheduler.start()
                app.state.scheduler = scheduler
                logger.info("Scheduler de sincronizacion iniciado")
            else:
                logger.warning("SYNC_ENABLED=false: solo sincronizacion manual (/sync)")

            logger.success("Aplicacion iniciada correctamente")

            _print_available_urls()

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.SPREADSHEET_ID:
        warnings.append("SPREADSHEET_ID no configurado - la sincronizacion fallara")
    if not settings.GOOGLE_SERVICE_ACCOUNT_EMAIL or not settings.GOOGLE_PRIVATE_KEY:
        warnings.append("Credenciales de la cuenta de servicio de Google incompletas - la sincronizacion fallara")
    if not settings.DATABASE_URL and settings.DATABASE_PASSWORD == "catalog_pass":
        warnings.append("DATABASE_URL no configurada - usando credenciales por defecto")

    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls() -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    access_host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    base_url = f"http://{access_host}:{settings.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Productos:   {base_url}/api/products?lang=zh</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Sync manual: {base_url}/sync</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None and scheduler.running:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler detenido")

        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await close_engine(engine)
            logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown
