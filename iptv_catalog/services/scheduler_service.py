import logging
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from iptv_catalog.services.catalog_sync_service import CatalogSynchronizer


logger = logging.getLogger(__name__)

class CatalogScheduler:
    """Scheduler for automatic catalog syncs"""

    def __init__(self):
        self.scheduler: AsyncIOScheduler | None = None
        self._synchronizer: CatalogSynchronizer | None = None

    async def _sync_job(self) -> None:
        """Background job that runs a catalog sync"""
        logger.info("Scheduled catalog sync triggered")
        if self._synchronizer is None:
            logger.error("Scheduled sync fired without a synchronizer")
            return
        try:
            result = await self._synchronizer.sync()
            if "error" in result:
                logger.error(f"Scheduled sync failed: {result['error']}")
        except Exception as e:
            logger.error(f"Exception in scheduled sync: {e}", exc_info=True)

    def start(
        self,
        synchronizer: CatalogSynchronizer,
        cron_expression: str,
        misfire_grace_sec: int = 3600,
    ) -> None:
        """Start the scheduler with the catalog sync job"""
        if self.scheduler and self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        try:
            trigger = CronTrigger.from_crontab(cron_expression)
        except (ValueError, KeyError) as exc:
            logger.error("Invalid cron expression '%s': %s", cron_expression, exc)
            raise

        self._synchronizer = synchronizer
        self.scheduler = AsyncIOScheduler(timezone='UTC')
        self.scheduler.add_job(
            self._sync_job,
            trigger=trigger,
            id='catalog_sync',
            max_instances=1,
            coalesce=True,
            misfire_grace_time=misfire_grace_sec
        )

        self.scheduler.start()
        next_time = self.get_next_run_time()
        logger.info(
            "Scheduler started. Next sync: %s",
            next_time.isoformat() if next_time else "unknown"
        )

    def shutdown(self) -> None:
        """Shutdown the scheduler"""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")
        self.scheduler = None
        self._synchronizer = None

    def is_running(self) -> bool:
        return bool(self.scheduler and self.scheduler.running)

    def get_next_run_time(self) -> datetime | None:
        """Get next scheduled sync time"""
        if not self.scheduler:
            return None
        job = self.scheduler.get_job('catalog_sync')
        return job.next_run_time if job else None


catalog_scheduler = CatalogScheduler()
