"""
Catalog Query Service

Business logic for read operations on the channel catalog.
"""
import logging

from iptv_catalog.schemas import CategoryStat, Channel, CountryStat
from iptv_catalog.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a query is missing a required term"""
    pass


async def get_channel_page(store: CatalogStore, limit: int = 50, offset: int = 0) -> list[Channel]:
    """
    Get one page of channels in catalog order

    Args:
        store: Catalog store
        limit: Page size
        offset: Number of channels to skip
    """
    channels = await store.list_channels(limit, offset)
    logger.debug(f"Retrieved {len(channels)} channels (limit={limit}, offset={offset})")
    return channels


async def search_catalog(store: CatalogStore, query: str | None) -> list[Channel]:
    """
    Search channels by name, category or country

    Raises:
        InvalidQueryError: If query is missing or blank
    """
    term = (query or "").strip()
    if not term:
        raise InvalidQueryError("Search query is required")

    channels = await store.search(term)
    logger.info(f"Search for {term!r}: {len(channels)} channels")
    return channels


async def get_channels_by_country(store: CatalogStore, country_code: str) -> list[Channel]:
    """Channels for a country code (case-insensitive)"""
    channels = await store.by_country_code(country_code.strip())
    logger.debug(f"Country {country_code}: {len(channels)} channels")
    return channels


async def get_channels_by_category(store: CatalogStore, category: str) -> list[Channel]:
    """Channels for a category name (case-insensitive)"""
    channels = await store.by_category(category.strip())
    logger.debug(f"Category {category}: {len(channels)} channels")
    return channels


async def get_channel(store: CatalogStore, channel_id: int) -> Channel | None:
    """Single channel, None when the id is not in the catalog"""
    channel = await store.get_by_id(channel_id)
    if channel is None:
        logger.debug(f"Channel {channel_id} not found")
    return channel


async def get_country_stats(store: CatalogStore) -> list[CountryStat]:
    """Channel counts per country, largest first"""
    stats = await store.country_stats()
    logger.debug(f"Country stats: {len(stats)} countries")
    return stats


async def get_category_stats(store: CatalogStore) -> list[CategoryStat]:
    """Channel counts per category, largest first"""
    stats = await store.category_stats()
    logger.debug(f"Category stats: {len(stats)} categories")
    return stats
