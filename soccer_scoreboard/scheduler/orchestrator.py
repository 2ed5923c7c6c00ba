"""
APScheduler orchestrator for timer-driven refresh cycles.

Handles:
- Scoreboard refresh at a configurable interval
- Manual triggering of a refresh
- Job status tracking
"""

import logging
from datetime import datetime, timezone
from typing import Any

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, JobExecutionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config.constants import CycleStatus

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh_scoreboard"


class SchedulerOrchestrator:
    """
    Manages APScheduler lifecycle and job registration.

    Example:
        >>> scheduler = SchedulerOrchestrator(settings, pipeline)
        >>> scheduler.start()
        >>> # ... application runs ...
        >>> scheduler.stop()
    """

    def __init__(self, settings: Any, pipeline: Any):
        """
        Initialize the scheduler.

        Args:
            settings: Application settings
            pipeline: AggregationPipeline instance
        """
        self.settings = settings
        self.pipeline = pipeline

        self.scheduler = AsyncIOScheduler(
            timezone="UTC",
            job_defaults={
                "coalesce": True,  # Combine missed runs into one
                "max_instances": 1,  # Only one refresh cycle at a time
                "misfire_grace_time": 60,
            },
        )

        # Job state tracking
        self._job_status: dict[str, dict] = {}
        self._is_running = False

        self.scheduler.add_listener(self._on_job_executed, EVENT_JOB_EXECUTED)
        self.scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)

    def start(self, run_immediately: bool = True) -> None:
        """Start the scheduler with all registered jobs."""
        if self._is_running:
            logger.warning("Scheduler already running")
            return

        self._register_jobs(run_immediately)
        self.scheduler.start()
        self._is_running = True

        logger.info("Scheduler started with jobs:")
        for job in self.scheduler.get_jobs():
            next_run = job.next_run_time
            next_str = next_run.strftime("%H:%M:%S") if next_run else "paused"
            logger.info(f"  - {job.id}: next run at {next_str}")

    def stop(self) -> None:
        """Gracefully shutdown the scheduler."""
        if not self._is_running:
            return

        logger.info("Stopping scheduler...")
        self.scheduler.shutdown(wait=False)
        self._is_running = False
        logger.info("Scheduler stopped")

    def _register_jobs(self, run_immediately: bool = True) -> None:
        """Register the refresh job."""
        interval = self.settings.scheduler.refresh_interval_minutes

        # An explicit next_run_time=None would register the job paused
        extra: dict[str, Any] = {}
        if run_immediately:
            extra["next_run_time"] = datetime.now(timezone.utc)

        self.scheduler.add_job(
            self._refresh_job,
            trigger=IntervalTrigger(minutes=interval),
            id=REFRESH_JOB_ID,
            name="Refresh Scoreboard",
            replace_existing=True,
            **extra,
        )

        for job in self.scheduler.get_jobs():
            self._job_status[job.id] = {
                "last_run": None,
                "last_status": "pending",
                "last_error": None,
                "run_count": 0,
            }

    async def _refresh_job(self) -> None:
        """Run one refresh cycle; a failed cycle is reported as a job error."""
        state = await self.pipeline.refresh()

        if state.status == CycleStatus.ERROR:
            raise RuntimeError(state.error)

    def _on_job_executed(self, event: JobExecutionEvent) -> None:
        """Handle successful job execution."""
        job_id = event.job_id
        if job_id in self._job_status:
            self._job_status[job_id]["last_run"] = datetime.now()
            self._job_status[job_id]["last_status"] = "success"
            self._job_status[job_id]["last_error"] = None
            self._job_status[job_id]["run_count"] += 1

    def _on_job_error(self, event: JobExecutionEvent) -> None:
        """Handle job execution error."""
        job_id = event.job_id
        if job_id in self._job_status:
            self._job_status[job_id]["last_run"] = datetime.now()
            self._job_status[job_id]["last_status"] = "error"
            self._job_status[job_id]["last_error"] = str(event.exception)
            self._job_status[job_id]["run_count"] += 1

        logger.error(f"Job {job_id} failed: {event.exception}")

    def get_job_status(self) -> dict[str, dict]:
        """Get status of all jobs."""
        status = {}
        for job in self.scheduler.get_jobs():
            job_info = self._job_status.get(job.id, {})
            status[job.id] = {
                "name": job.name,
                "next_run": job.next_run_time,
                "last_run": job_info.get("last_run"),
                "last_status": job_info.get("last_status", "pending"),
                "last_error": job_info.get("last_error"),
                "run_count": job_info.get("run_count", 0),
            }
        return status

    def trigger_refresh(self) -> bool:
        """
        Manually trigger a refresh to run immediately.

        Returns:
            True if the job was triggered
        """
        job = self.scheduler.get_job(REFRESH_JOB_ID)
        if job:
            self.scheduler.modify_job(REFRESH_JOB_ID, next_run_time=datetime.now(timezone.utc))
            logger.info(f"Triggered job: {REFRESH_JOB_ID}")
            return True
        return False

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._is_running
