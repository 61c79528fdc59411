"""
Catalog Sync Service

Coordinates fetching, parsing, enrichment, validation and the catalog swap
for one sync pass.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from iptv_catalog.config import CustomSettings
from iptv_catalog.services.catalog_store import CatalogStore
from iptv_catalog.services.catalog_types import RecordResult
from iptv_catalog.services.enrichment_service import enrich_record
from iptv_catalog.services.playlist_downloader_service import (
    PlaylistFetchError,
    fetch_playlist,
    parse_playlist_async,
    sanitize_url_for_logging,
)
from iptv_catalog.services.sync_coordinator import SyncCoordinator
from iptv_catalog.services.validation_service import validate_record
from iptv_catalog.utils.logging_helpers import (
    log_stage,
    log_sync_end,
    log_sync_start,
    log_sync_summary,
)


logger = logging.getLogger(__name__)

PlaylistFetcher = Callable[[str, float], Awaitable[str]]

SYNC_SUCCESS_MESSAGE = "Channels synchronized successfully"
SYNC_FAILURE_MESSAGE = "Failed to sync channels"


@dataclass(slots=True)
class SyncSummary:
    started_at: datetime
    completed_at: datetime
    channels_parsed: int = 0
    channels_attempted: int = 0
    channels_rejected: int = 0
    channels_added: int = 0
    rejections: list[str] = field(default_factory=list)

    @property
    def channels_dropped(self) -> int:
        return self.channels_parsed - self.channels_attempted

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.completed_at - self.started_at).total_seconds())

    def to_dict(self) -> dict:
        return {
            "status": "success",
            "message": SYNC_SUCCESS_MESSAGE,
            "count": self.channels_added,
            "channels_parsed": self.channels_parsed,
            "channels_attempted": self.channels_attempted,
            "channels_dropped": self.channels_dropped,
            "channels_rejected": self.channels_rejected,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "duration_seconds": self.duration_seconds,
        }


class CatalogSyncPipeline:
    """Runs the fetch, parse, enrich, validate and replace stages of one pass."""

    def __init__(
        self,
        store: CatalogStore,
        source: str,
        *,
        max_channels: int = 1000,
        fetch_timeout: float = 30.0,
        parse_timeout: int | None = None,
        fetcher: PlaylistFetcher = fetch_playlist,
    ) -> None:
        self.store = store
        self.source = source
        self.max_channels = max_channels
        self._fetch_timeout = fetch_timeout
        self._parse_timeout = parse_timeout
        self._fetcher = fetcher

    async def run(self) -> SyncSummary:
        """
        Execute the pass.

        Raises:
            PlaylistFetchError: Source could not be fetched; the catalog is untouched
        """
        started_at = datetime.now(timezone.utc)

        log_stage(logger, "Fetching", sanitize_url_for_logging(self.source))
        content = await self._fetcher(self.source, self._fetch_timeout)

        log_stage(logger, "Parsing", f"{len(content)} characters")
        records = await parse_playlist_async(content, parse_timeout_seconds=self._parse_timeout)

        capped = records[:self.max_channels]
        if len(records) > len(capped):
            logger.info(
                "Playlist has %s entries, keeping the first %s",
                len(records),
                self.max_channels,
            )

        log_stage(logger, "Enriching+Validating", f"{len(capped)} records")
        results = [validate_record(enrich_record(record)) for record in capped]
        payloads = [result.payload for result in results if result.ok]
        rejections = [self._describe_rejection(result) for result in results if not result.ok]

        log_stage(logger, "Replacing", f"{len(payloads)} channels")
        stored = await self.store.replace_all(payloads)

        summary = SyncSummary(
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            channels_parsed=len(records),
            channels_attempted=len(capped),
            channels_rejected=len(rejections),
            channels_added=len(stored),
            rejections=rejections,
        )
        log_sync_summary(
            logger,
            summary.channels_parsed,
            summary.channels_attempted,
            summary.channels_rejected,
            summary.channels_added,
        )
        return summary

    @staticmethod
    def _describe_rejection(result: RecordResult) -> str:
        reason = f"{result.record.name!r}: {result.error}"
        logger.warning("Invalid channel data, skipped - %s", reason)
        return reason


class CatalogSynchronizer:
    """
    Entry point for sync passes against one store.

    Owns the coordinator that keeps passes from overlapping; callers (API,
    scheduler, startup hook) share one instance per store.
    """

    def __init__(
        self,
        store: CatalogStore,
        config: CustomSettings,
        *,
        fetcher: PlaylistFetcher = fetch_playlist,
    ) -> None:
        self.store = store
        self.config = config
        self._fetcher = fetcher
        self._coordinator = SyncCoordinator()
        self.last_result: dict | None = None

    def is_syncing(self) -> bool:
        return self._coordinator.is_syncing()

    async def sync(self) -> dict:
        """
        Run one sync pass with concurrency protection.

        Returns:
            Dictionary with sync statistics, or an error/skip message with count 0.
        """
        return await self._coordinator.execute(self._sync_once)

    async def _sync_once(self) -> dict:
        log_sync_start(logger, sanitize_url_for_logging(self.config.playlist_source))

        pipeline = CatalogSyncPipeline(
            self.store,
            self.config.playlist_source,
            max_channels=self.config.sync_max_channels,
            fetch_timeout=self.config.playlist_fetch_timeout_sec,
            parse_timeout=self.config.playlist_parse_timeout_sec,
            fetcher=self._fetcher,
        )
        try:
            summary = await pipeline.run()
        except PlaylistFetchError as exc:
            logger.error("Catalog sync failed, catalog left unchanged: %s", exc)
            result = _failure(exc)
        except Exception as exc:  # Catch-all to ensure API stability
            logger.error("Unexpected error during catalog sync: %s", exc, exc_info=True)
            result = _failure(exc)
        else:
            log_sync_end(logger)
            result = summary.to_dict()

        self.last_result = result
        return result


def _failure(exc: Exception) -> dict:
    return {
        "status": "failed",
        "message": SYNC_FAILURE_MESSAGE,
        "error": str(exc),
        "count": 0,
    }
