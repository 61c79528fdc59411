"""
Sync Coordination

Keeps catalog sync passes from overlapping, so two passes never interleave
their delete/insert steps against the same store.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable


logger = logging.getLogger(__name__)


class SyncCoordinator:
    """
    Coordinates sync operations to prevent concurrent executions.

    Uses an internal asyncio.Lock; a request arriving while a pass is running
    is answered with a 'skipped' result instead of waiting.
    """

    def __init__(self):
        self._sync_lock = asyncio.Lock()

    async def execute(self, sync_func: Callable[[], Awaitable[dict]]) -> dict:
        """
        Execute a sync operation with concurrency protection.

        Args:
            sync_func: Async function running one sync pass

        Returns:
            Result from sync_func, or a skip response if a pass is already running
        """
        if self._sync_lock.locked():
            logger.warning("Catalog sync already in progress, skipping this request")
            return {
                "status": "skipped",
                "message": "Catalog sync already in progress",
                "count": 0,
            }

        async with self._sync_lock:
            return await sync_func()

    def is_syncing(self) -> bool:
        """Check if a sync operation is currently in progress."""
        return self._sync_lock.locked()
