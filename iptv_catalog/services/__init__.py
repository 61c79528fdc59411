"""
Services package for the IPTV catalog

This package contains all business logic and service layer components.
"""
from iptv_catalog.services.catalog_store import CatalogStore, MemoryCatalogStore, SqlCatalogStore
from iptv_catalog.services.catalog_sync_service import CatalogSynchronizer
from iptv_catalog.services.enrichment_service import categorize_channel, enrich_record, resolve_country
from iptv_catalog.services.playlist_downloader_service import PlaylistFetchError, fetch_playlist
from iptv_catalog.services.playlist_parser_service import parse_playlist
from iptv_catalog.services.scheduler_service import catalog_scheduler
from iptv_catalog.services.validation_service import validate_record

__all__ = [
    'CatalogStore',
    'MemoryCatalogStore',
    'SqlCatalogStore',
    'CatalogSynchronizer',
    'categorize_channel',
    'enrich_record',
    'resolve_country',
    'PlaylistFetchError',
    'fetch_playlist',
    'parse_playlist',
    'catalog_scheduler',
    'validate_record',
]
