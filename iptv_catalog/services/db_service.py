"""
Database operations for the channel catalog

This module contains all database CRUD operations for catalog channels.
"""
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from iptv_catalog.models import ChannelRow
from iptv_catalog.schemas import ChannelCreate


logger = logging.getLogger(__name__)

# Columns a caller may change through update_channel
UPDATABLE_COLUMNS = frozenset(ChannelCreate.model_fields)


async def count_channels(db: AsyncSession) -> int:
    """Return the number of channels in the catalog."""
    result = await db.execute(select(func.count(ChannelRow.id)))
    return result.scalar_one_or_none() or 0


async def list_channels(db: AsyncSession, limit: int | None = None, offset: int = 0) -> list[ChannelRow]:
    """
    List channels in insertion order.

    Args:
        db: Database session
        limit: Maximum number of rows, None for all
        offset: Number of rows to skip

    Returns:
        List of channel rows
    """
    stmt = select(ChannelRow).order_by(ChannelRow.id).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_channel(db: AsyncSession, channel_id: int) -> ChannelRow | None:
    """Fetch a single channel row by id."""
    return await db.get(ChannelRow, channel_id)


async def insert_channel(db: AsyncSession, channel: ChannelCreate) -> ChannelRow:
    """Insert one channel and return the row with its assigned id."""
    row = ChannelRow(**channel.model_dump())
    db.add(row)
    await db.flush()
    return row


async def update_channel(
    db: AsyncSession,
    channel_id: int,
    changes: Mapping[str, Any],
) -> ChannelRow | None:
    """
    Apply a partial update to a channel.

    Args:
        db: Database session
        channel_id: Channel to update
        changes: Column -> new value; unknown columns raise ValueError,
            invalid values raise pydantic.ValidationError

    Returns:
        Updated row, or None when the channel does not exist
    """
    unknown = set(changes) - UPDATABLE_COLUMNS
    if unknown:
        raise ValueError(f"Cannot update unknown channel fields: {sorted(unknown)}")

    row = await db.get(ChannelRow, channel_id)
    if row is None:
        return None

    # Validate the merged channel before touching the row
    current = {column: getattr(row, column) for column in UPDATABLE_COLUMNS}
    merged = ChannelCreate.model_validate({**current, **changes})
    for column in changes:
        setattr(row, column, getattr(merged, column))
    await db.flush()
    return row


async def delete_channel(db: AsyncSession, channel_id: int) -> bool:
    """Delete a channel by id. Returns True when a row was removed."""
    row = await db.get(ChannelRow, channel_id)
    if row is None:
        return False
    await db.delete(row)
    await db.flush()
    return True


async def delete_all_channels(db: AsyncSession) -> int:
    """
    Delete every channel in the catalog.

    Returns:
        Number of deleted channels
    """
    deleted_count = await count_channels(db)
    await db.execute(delete(ChannelRow))
    logger.info("Deleted %s channels", deleted_count)
    return deleted_count


async def store_channels(db: AsyncSession, channels: Sequence[ChannelCreate]) -> list[ChannelRow]:
    """
    Insert channels in batches, preserving their order.

    Args:
        db: Database session
        channels: Validated channel payloads

    Returns:
        Inserted rows with ids assigned
    """
    if not channels:
        logger.debug("No channels to store")
        return []

    logger.info("Storing %s channels", len(channels))

    rows: list[ChannelRow] = []
    chunk_size = 500
    for start_index in range(0, len(channels), chunk_size):
        chunk = [ChannelRow(**channel.model_dump()) for channel in channels[start_index:start_index + chunk_size]]
        db.add_all(chunk)
        await db.flush()
        rows.extend(chunk)

    logger.debug("Channel insert complete in batches of %s", chunk_size)
    return rows


async def search_channels(db: AsyncSession, query: str) -> list[ChannelRow]:
    """Case-insensitive substring match over name, category and country."""
    stmt = (
        select(ChannelRow)
        .where(
            ChannelRow.name.icontains(query, autoescape=True)
            | ChannelRow.category.icontains(query, autoescape=True)
            | ChannelRow.country.icontains(query, autoescape=True)
        )
        .order_by(ChannelRow.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def channels_by_country_code(db: AsyncSession, country_code: str) -> list[ChannelRow]:
    """Channels whose country code equals the given code."""
    stmt = (
        select(ChannelRow)
        .where(ChannelRow.country_code == country_code.lower())
        .order_by(ChannelRow.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def channels_by_category(db: AsyncSession, category: str) -> list[ChannelRow]:
    """Channels whose category equals the given name, ignoring case."""
    stmt = (
        select(ChannelRow)
        .where(func.lower(ChannelRow.category) == category.lower())
        .order_by(ChannelRow.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def country_stats(db: AsyncSession) -> list[tuple[str, str, int]]:
    """
    Count channels per country code.

    Returns:
        (code, name, count) tuples, largest first; ties keep first-seen order
    """
    first_id = func.min(ChannelRow.id)
    count = func.count(ChannelRow.id)
    stmt = (
        select(ChannelRow.country_code, func.min(ChannelRow.country), count)
        .group_by(ChannelRow.country_code)
        .order_by(count.desc(), first_id)
    )
    result = await db.execute(stmt)
    return [(code, name, total) for code, name, total in result.all()]


async def category_stats(db: AsyncSession) -> list[tuple[str, int]]:
    """
    Count channels per category.

    Returns:
        (name, count) tuples, largest first; ties keep first-seen order
    """
    first_id = func.min(ChannelRow.id)
    count = func.count(ChannelRow.id)
    stmt = (
        select(ChannelRow.category, count)
        .group_by(ChannelRow.category)
        .order_by(count.desc(), first_id)
    )
    result = await db.execute(stmt)
    return [(name, total) for name, total in result.all()]
