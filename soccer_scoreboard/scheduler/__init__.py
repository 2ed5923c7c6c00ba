"""
Job scheduling module.

Provides APScheduler-based timer-driven refresh cycles.

Example:
    >>> from soccer_scoreboard.scheduler import SchedulerOrchestrator
    >>>
    >>> scheduler = SchedulerOrchestrator(settings, pipeline)
    >>> scheduler.start()
    >>> scheduler.trigger_refresh()
    >>> scheduler.stop()
"""

from .orchestrator import REFRESH_JOB_ID, SchedulerOrchestrator

__all__ = [
    "REFRESH_JOB_ID",
    "SchedulerOrchestrator",
]
