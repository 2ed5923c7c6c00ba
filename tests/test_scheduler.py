import asyncio

import pytest

from soccer_scoreboard.config.constants import CycleStatus
from soccer_scoreboard.config.settings import Settings
from soccer_scoreboard.data.models import RefreshState
from soccer_scoreboard.scheduler.orchestrator import REFRESH_JOB_ID, SchedulerOrchestrator


class _Pipeline:
    def __init__(self, status=CycleStatus.READY, error=None):
        self.result = RefreshState(status=status, error=error)
        self.refreshes = 0

    async def refresh(self):
        self.refreshes += 1
        return self.result


@pytest.mark.asyncio
async def test_trigger_refresh_runs_the_pipeline():
    pipeline = _Pipeline()
    scheduler = SchedulerOrchestrator(Settings(), pipeline)
    scheduler.start(run_immediately=False)
    try:
        status = scheduler.get_job_status()
        assert status[REFRESH_JOB_ID]["last_status"] == "pending"
        assert pipeline.refreshes == 0

        assert scheduler.trigger_refresh()
        for _ in range(100):
            if scheduler.get_job_status()[REFRESH_JOB_ID]["run_count"]:
                break
            await asyncio.sleep(0.02)

        assert pipeline.refreshes == 1
        assert scheduler.get_job_status()[REFRESH_JOB_ID]["last_status"] == "success"
    finally:
        scheduler.stop()

    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_failed_cycle_is_reported_as_job_error():
    scheduler = SchedulerOrchestrator(Settings(), _Pipeline(CycleStatus.ERROR, "boom"))

    with pytest.raises(RuntimeError, match="boom"):
        await scheduler._refresh_job()
