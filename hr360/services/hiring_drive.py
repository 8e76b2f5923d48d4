"""
Hiring Drive Mode - periodic refetch of the applicant pipeline.

While enabled, the pipeline snapshot (counts per status plus the newest
applicants) is refreshed every HIRING_DRIVE_INTERVAL_SECONDS so the
dashboard can poll /api/hiring-drive/status instead of the tables.
Stopping the drive (or shutting the app down) cancels the task.
"""
import asyncio
from datetime import datetime
from typing import Optional, Dict, Any

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.services.records_service import ApplicantRepository

logger = get_logger("hr360.hiring_drive")

NEWEST_APPLICANTS = 10


class HiringDrivePoller:
    def __init__(self, interval_seconds: float = 10.0, repository: Optional[ApplicantRepository] = None):
        self.interval_seconds = interval_seconds
        self.repository = repository or ApplicantRepository()
        self.running = False
        self._task: Optional[asyncio.Task] = None
        self.last_refreshed_at: Optional[datetime] = None
        self.refresh_count = 0
        self.snapshot: Optional[Dict[str, Any]] = None

    async def start(self):
        if self.running:
            logger.info("Hiring drive already running")
            return

        self.running = True
        logger.info(f"Starting hiring drive (interval: {self.interval_seconds}s)")
        self._task = asyncio.create_task(self._run_loop())

    async def stop(self):
        if not self.running:
            return

        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Hiring drive stopped")

    async def _run_loop(self):
        while self.running:
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"Hiring drive refresh failed: {e}")

            await asyncio.sleep(self.interval_seconds)

    def _fetch(self) -> Dict[str, Any]:
        return {
            "pipeline": self.repository.pipeline_counts(),
            "newest_applicants": self.repository.list(limit=NEWEST_APPLICANTS),
        }

    async def refresh(self) -> Dict[str, Any]:
        """Fetch the pipeline once (database calls run off the event loop)."""
        snapshot = await asyncio.to_thread(self._fetch)
        self.snapshot = snapshot
        self.refresh_count += 1
        self.last_refreshed_at = datetime.utcnow()
        logger.debug(f"Hiring drive refresh #{self.refresh_count}")
        return snapshot

    def status(self) -> dict:
        return {
            "running": self.running,
            "interval_seconds": self.interval_seconds,
            "refresh_count": self.refresh_count,
            "last_refreshed_at": self.last_refreshed_at,
            "snapshot": self.snapshot,
        }


_poller: Optional[HiringDrivePoller] = None


def get_hiring_drive() -> HiringDrivePoller:
    global _poller
    if _poller is None:
        _poller = HiringDrivePoller(get_settings().hiring_drive_interval_seconds)
    return _poller
