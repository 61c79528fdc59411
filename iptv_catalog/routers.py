from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
import logging

from iptv_catalog.dependencies import get_catalog_store, get_synchronizer
from iptv_catalog.schemas import CategoryStat, Channel, CountryStat, SyncResponse
from iptv_catalog.services import CatalogStore, CatalogSynchronizer, catalog_scheduler
from iptv_catalog.services.catalog_query_service import (
    InvalidQueryError,
    get_category_stats,
    get_channel,
    get_channel_page,
    get_channels_by_category,
    get_channels_by_country,
    get_country_stats,
    search_catalog,
)


logger = logging.getLogger(__name__)

SERVICE_NAME = "IPTV Catalog Service"
SERVICE_VERSION = "0.1.0"

StoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]
SynchronizerDep = Annotated[CatalogSynchronizer, Depends(get_synchronizer)]

main_router = APIRouter()
api_router = APIRouter(prefix="/api")


@main_router.get("/")
async def root(store: StoreDep) -> dict:
    """Root endpoint with service information"""
    next_run = catalog_scheduler.get_next_run_time()

    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "channels": await store.count(),
        "next_scheduled_sync": next_run.isoformat() if next_run else None,
        "endpoints": {
            "sync": "/api/channels/sync - Manually trigger catalog sync (POST)",
            "channels": "/api/channels - List channels (query params: limit, offset)",
            "search": "/api/channels/search - Search channels (query param: q)",
            "country": "/api/channels/country/{code} - Channels for a country",
            "category": "/api/channels/category/{name} - Channels for a category",
            "stats": "/api/stats/countries, /api/stats/categories - Catalog statistics",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check(synchronizer: SynchronizerDep) -> dict:
    """Health check endpoint"""
    next_run = catalog_scheduler.get_next_run_time()
    last_result = synchronizer.last_result
    return {
        "status": "ok",
        "sync_in_progress": synchronizer.is_syncing(),
        "last_sync_status": last_result["status"] if last_result else None,
        "scheduler_running": catalog_scheduler.is_running(),
        "next_sync": next_run.isoformat() if next_run else None
    }


@api_router.post(
    "/channels/sync",
    response_model=SyncResponse,
    response_model_exclude_none=True,
    responses={500: {"model": SyncResponse}, 409: {"model": SyncResponse}},
)
async def trigger_sync(synchronizer: SynchronizerDep):
    """
    Manually trigger a catalog sync from the playlist source

    This will download, parse, enrich and validate the playlist and replace
    the catalog with the result
    """
    logger.info("Manual catalog sync triggered via API")
    result = await synchronizer.sync()

    if result["status"] == "failed":
        return _sync_error_response(500, result)
    if result["status"] == "skipped":
        return _sync_error_response(409, result)

    return result


def _sync_error_response(status_code: int, result: dict) -> JSONResponse:
    payload = SyncResponse.model_validate(result).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=payload)


@api_router.get("/channels", response_model=list[Channel])
async def list_channels(
    store: StoreDep,
    limit: Annotated[int, Query(ge=1, le=10000, description="Page size")] = 50,
    offset: Annotated[int, Query(ge=0, description="Number of channels to skip")] = 0,
) -> list[Channel]:
    """Get channels with pagination"""
    return await get_channel_page(store, limit, offset)


@api_router.get("/channels/search", response_model=list[Channel])
async def search_channels(
    store: StoreDep,
    q: Annotated[str | None, Query(description="Text matched against name, category and country")] = None,
) -> list[Channel]:
    """Search channels by free text"""
    try:
        return await search_catalog(store, q)
    except InvalidQueryError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@api_router.get("/channels/country/{country_code}", response_model=list[Channel])
async def channels_by_country(country_code: str, store: StoreDep) -> list[Channel]:
    """Get channels for a country code"""
    return await get_channels_by_country(store, country_code)


@api_router.get("/channels/category/{category}", response_model=list[Channel])
async def channels_by_category(category: str, store: StoreDep) -> list[Channel]:
    """Get channels for a category"""
    return await get_channels_by_category(store, category)


@api_router.get("/channels/{channel_id}", response_model=Channel)
async def channel_by_id(channel_id: int, store: StoreDep) -> Channel:
    """Get a single channel"""
    channel = await get_channel(store, channel_id)
    if channel is None:
        raise HTTPException(status_code=404, detail="Channel not found")
    return channel


@api_router.get("/stats/countries", response_model=list[CountryStat])
async def country_stats(store: StoreDep) -> list[CountryStat]:
    """Get channel counts per country"""
    return await get_country_stats(store)


@api_router.get("/stats/categories", response_model=list[CategoryStat])
async def category_stats(store: StoreDep) -> list[CategoryStat]:
    """Get channel counts per category"""
    return await get_category_stats(store)
