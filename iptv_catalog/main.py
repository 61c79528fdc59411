from contextlib import asynccontextmanager
import asyncio
import logging

from fastapi import FastAPI, Request

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from iptv_catalog.config import CustomSettings, settings, setup_logging
from iptv_catalog.database import close_db, init_db
from iptv_catalog.dependencies import get_service_locator
from iptv_catalog.routers import SERVICE_NAME, SERVICE_VERSION, api_router, main_router
from iptv_catalog.services import (
    CatalogStore,
    CatalogSynchronizer,
    MemoryCatalogStore,
    SqlCatalogStore,
    catalog_scheduler,
)


setup_logging()
logger = logging.getLogger(__name__)


async def build_catalog_store(config: CustomSettings) -> CatalogStore:
    """Create the catalog store selected by configuration"""
    if config.catalog_backend == "sqlite":
        session_factory = await init_db(config.database_path)
        return SqlCatalogStore(session_factory, shared_connection=config.database_path == ":memory:")
    return MemoryCatalogStore()


async def _startup_sync(synchronizer: CatalogSynchronizer) -> None:
    """Populate an empty catalog in the background"""
    if await synchronizer.store.count() > 0:
        logger.info("Catalog already populated, skipping startup sync")
        return
    result = await synchronizer.sync()
    logger.info(f"Startup sync finished: status={result['status']}, count={result['count']}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info(f"Starting {SERVICE_NAME}...")
    startup_task: asyncio.Task | None = None

    try:
        logger.info("Initializing catalog store...")
        store = await build_catalog_store(settings)
        synchronizer = CatalogSynchronizer(store, settings)

        locator = get_service_locator()
        locator.register_singleton(CatalogStore, store)
        locator.register_singleton(CatalogSynchronizer, synchronizer)
        logger.info(f"Catalog store ready ({settings.catalog_backend})")

        if settings.sync_cron:
            logger.info("Starting scheduler...")
            catalog_scheduler.start(synchronizer, settings.sync_cron, settings.sync_misfire_grace_sec)

        if settings.sync_on_startup:
            startup_task = asyncio.create_task(_startup_sync(synchronizer))

        logger.info(f"{SERVICE_NAME} started successfully")
    except Exception as e:
        logger.error(f"Failed to start {SERVICE_NAME}: {e}", exc_info=True)
        raise

    yield

    logger.info(f"Shutting down {SERVICE_NAME}...")

    if startup_task and not startup_task.done():
        startup_task.cancel()

    try:
        catalog_scheduler.shutdown()
    except Exception as e:
        logger.error(f"Error during scheduler shutdown: {e}", exc_info=True)

    await close_db()
    logger.info(f"{SERVICE_NAME} stopped")


app = FastAPI(
    title=SERVICE_NAME,
    version=SERVICE_VERSION,
    lifespan=lifespan
)

app.include_router(main_router)
app.include_router(api_router)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with details"""
    logger.error(f"Validation error for {request.method} {request.url.path}")
    logger.error(f"Validation details: {exc.errors()}")

    errors = []
    for error in exc.errors():
        errors.append({
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": str(error.get("input", ""))[:100]
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": errors
        }
    )
