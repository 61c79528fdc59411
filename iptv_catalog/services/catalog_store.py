"""
Catalog Store

Owns the persisted Channel set. The synchronizer and the query endpoints
receive a store instance instead of reaching for module state, so tests can
use an isolated store and deployments can pick a backend.
"""
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from contextlib import asynccontextmanager, nullcontext
from typing import Any
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iptv_catalog.database import session_scope
from iptv_catalog.schemas import Channel, ChannelCreate, CategoryStat, CountryStat
from iptv_catalog.services import db_service


logger = logging.getLogger(__name__)


class CatalogStore(ABC):
    """Interface every catalog backend implements"""

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def list_all(self) -> list[Channel]: ...

    @abstractmethod
    async def list_channels(self, limit: int = 50, offset: int = 0) -> list[Channel]: ...

    @abstractmethod
    async def get_by_id(self, channel_id: int) -> Channel | None: ...

    @abstractmethod
    async def insert(self, channel: ChannelCreate) -> Channel: ...

    @abstractmethod
    async def update(self, channel_id: int, changes: Mapping[str, Any]) -> Channel | None: ...

    @abstractmethod
    async def delete_by_id(self, channel_id: int) -> bool: ...

    @abstractmethod
    async def replace_all(self, channels: Sequence[ChannelCreate]) -> list[Channel]:
        """Swap the whole catalog for channels; readers see either the old or the new set."""

    @abstractmethod
    async def search(self, query: str) -> list[Channel]: ...

    @abstractmethod
    async def by_country_code(self, country_code: str) -> list[Channel]: ...

    @abstractmethod
    async def by_category(self, category: str) -> list[Channel]: ...

    @abstractmethod
    async def country_stats(self) -> list[CountryStat]: ...

    @abstractmethod
    async def category_stats(self) -> list[CategoryStat]: ...


class MemoryCatalogStore(CatalogStore):
    """
    Transient catalog kept in a dict keyed by channel id.

    Ids come from a counter that never rewinds, so an id is not handed out
    twice even after its channel was deleted.
    """

    def __init__(self) -> None:
        self._channels: dict[int, Channel] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        channel_id = self._next_id
        self._next_id += 1
        return channel_id

    def _build(self, channel: ChannelCreate) -> Channel:
        return Channel(id=self._allocate_id(), **channel.model_dump())

    async def count(self) -> int:
        return len(self._channels)

    async def list_all(self) -> list[Channel]:
        return list(self._channels.values())

    async def list_channels(self, limit: int = 50, offset: int = 0) -> list[Channel]:
        return list(self._channels.values())[offset:offset + limit]

    async def get_by_id(self, channel_id: int) -> Channel | None:
        return self._channels.get(channel_id)

    async def insert(self, channel: ChannelCreate) -> Channel:
        stored = self._build(channel)
        self._channels[stored.id] = stored
        return stored

    async def update(self, channel_id: int, changes: Mapping[str, Any]) -> Channel | None:
        unknown = set(changes) - db_service.UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update unknown channel fields: {sorted(unknown)}")

        current = self._channels.get(channel_id)
        if current is None:
            return None

        updated = Channel.model_validate({**current.model_dump(), **changes})
        self._channels[channel_id] = updated
        return updated

    async def delete_by_id(self, channel_id: int) -> bool:
        return self._channels.pop(channel_id, None) is not None

    async def replace_all(self, channels: Sequence[ChannelCreate]) -> list[Channel]:
        # Build the new mapping first, then swap it in with a single assignment
        replacement: dict[int, Channel] = {}
        for channel in channels:
            stored = self._build(channel)
            replacement[stored.id] = stored

        removed = len(self._channels)
        self._channels = replacement
        logger.info("Replaced catalog: %s channels removed, %s added", removed, len(replacement))
        return list(replacement.values())

    async def search(self, query: str) -> list[Channel]:
        term = query.lower()
        return [
            channel for channel in self._channels.values()
            if term in channel.name.lower()
            or term in channel.category.lower()
            or term in channel.country.lower()
        ]

    async def by_country_code(self, country_code: str) -> list[Channel]:
        code = country_code.lower()
        return [channel for channel in self._channels.values() if channel.country_code == code]

    async def by_category(self, category: str) -> list[Channel]:
        wanted = category.lower()
        return [channel for channel in self._channels.values() if channel.category.lower() == wanted]

    async def country_stats(self) -> list[CountryStat]:
        channels = list(self._channels.values())
        counts = Counter(channel.country_code for channel in channels)
        names: dict[str, str] = {}
        for channel in channels:
            names.setdefault(channel.country_code, channel.country)

        # Counter keeps first-seen order and sorted() is stable
        return [
            CountryStat(code=code, name=names[code], channel_count=total)
            for code, total in sorted(counts.items(), key=lambda item: item[1], reverse=True)
        ]

    async def category_stats(self) -> list[CategoryStat]:
        counts = Counter(channel.category for channel in self._channels.values())
        return [
            CategoryStat(name=name, count=total)
            for name, total in sorted(counts.items(), key=lambda item: item[1], reverse=True)
        ]


class SqlCatalogStore(CatalogStore):
    """Catalog persisted through SQLAlchemy (aiosqlite)."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        shared_connection: bool = False,
    ) -> None:
        """
        Args:
            session_factory: Factory bound to the catalog engine
            shared_connection: True when every session uses the same connection
                (in-memory SQLite); store calls then run one at a time
        """
        self._session_factory = session_factory
        self._access = asyncio.Lock() if shared_connection else nullcontext()

    @asynccontextmanager
    async def _session(self):
        async with self._access:
            async with session_scope(self._session_factory) as session:
                yield session

    @staticmethod
    def _to_channels(rows: Iterable) -> list[Channel]:
        return [Channel.model_validate(row) for row in rows]

    async def count(self) -> int:
        async with self._session() as session:
            return await db_service.count_channels(session)

    async def list_all(self) -> list[Channel]:
        async with self._session() as session:
            return self._to_channels(await db_service.list_channels(session))

    async def list_channels(self, limit: int = 50, offset: int = 0) -> list[Channel]:
        async with self._session() as session:
            return self._to_channels(await db_service.list_channels(session, limit, offset))

    async def get_by_id(self, channel_id: int) -> Channel | None:
        async with self._session() as session:
            row = await db_service.get_channel(session, channel_id)
            return Channel.model_validate(row) if row else None

    async def insert(self, channel: ChannelCreate) -> Channel:
        async with self._session() as session:
            row = await db_service.insert_channel(session, channel)
            return Channel.model_validate(row)

    async def update(self, channel_id: int, changes: Mapping[str, Any]) -> Channel | None:
        async with self._session() as session:
            row = await db_service.update_channel(session, channel_id, changes)
            return Channel.model_validate(row) if row else None

    async def delete_by_id(self, channel_id: int) -> bool:
        async with self._session() as session:
            return await db_service.delete_channel(session, channel_id)

    async def replace_all(self, channels: Sequence[ChannelCreate]) -> list[Channel]:
        # Delete and insert share one transaction; readers keep the old snapshot until commit
        async with self._session() as session:
            removed = await db_service.delete_all_channels(session)
            rows = await db_service.store_channels(session, channels)
            stored = self._to_channels(rows)
        logger.info("Replaced catalog: %s channels removed, %s added", removed, len(stored))
        return stored

    async def search(self, query: str) -> list[Channel]:
        async with self._session() as session:
            return self._to_channels(await db_service.search_channels(session, query))

    async def by_country_code(self, country_code: str) -> list[Channel]:
        async with self._session() as session:
            return self._to_channels(await db_service.channels_by_country_code(session, country_code))

    async def by_category(self, category: str) -> list[Channel]:
        async with self._session() as session:
            return self._to_channels(await db_service.channels_by_category(session, category))

    async def country_stats(self) -> list[CountryStat]:
        async with self._session() as session:
            rows = await db_service.country_stats(session)
        return [CountryStat(code=code, name=name, channel_count=total) for code, name, total in rows]

    async def category_stats(self) -> list[CategoryStat]:
        async with self._session() as session:
            rows = await db_service.category_stats(session)
        return [CategoryStat(name=name, count=total) for name, total in rows]
