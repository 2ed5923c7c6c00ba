"""
Application state management for FastAPI.

Holds shared state across the application:
- Settings
- Aggregation pipeline (owns the published refresh state)
- Render-time event window
- Scheduler orchestrator
"""

import logging
from datetime import datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AppState:
    """
    Centralized application state.

    Initializes and manages lifecycle of the pipeline and scheduler.
    Components can be injected (e.g. in tests); missing ones are built
    from settings.
    """

    def __init__(
        self,
        settings: Any = None,
        pipeline: Any = None,
        window: Any = None,
        enable_scheduler: bool = True,
    ):
        self.settings = settings
        self.pipeline = pipeline
        self.window = window
        self.enable_scheduler = enable_scheduler
        self.scheduler = None
        self._initialized = False
        self._init_error: Optional[str] = None
        self._started_at: Optional[datetime] = None

    async def initialize(self) -> None:
        """Initialize all application components."""
        if self._initialized:
            return

        try:
            # Import here to avoid circular imports
            from soccer_scoreboard.config.settings import get_settings
            from soccer_scoreboard.data.pipeline import AggregationPipeline
            from soccer_scoreboard.data.time_window import TimeWindow
            from soccer_scoreboard.scheduler.orchestrator import SchedulerOrchestrator

            if self.settings is None:
                self.settings = get_settings()
                logger.info("Settings loaded")

            if self.pipeline is None:
                self.pipeline = AggregationPipeline.from_settings(self.settings)
                logger.info("Aggregation pipeline initialized")

            if self.window is None:
                self.window = TimeWindow.from_settings(self.settings)

            if self.enable_scheduler:
                # The first scheduled run doubles as the startup refresh
                self.scheduler = SchedulerOrchestrator(
                    settings=self.settings,
                    pipeline=self.pipeline,
                )
                self.scheduler.start()
                logger.info("Scheduler started")

            self._initialized = True
            self._started_at = datetime.now()
            logger.info("All components initialized successfully")

        except Exception as e:
            self._init_error = f"{type(e).__name__}: {e}"
            logger.exception(f"Failed to initialize components: {self._init_error}")
            # Don't raise - allow API to start and report itself as degraded
            self._initialized = False

    async def shutdown(self) -> None:
        """Gracefully shutdown all components."""
        if self.scheduler:
            self.scheduler.stop()
            logger.info("Scheduler stopped")

        if self.pipeline:
            await self.pipeline.close()

    @property
    def is_initialized(self) -> bool:
        """Check if all components are initialized."""
        return self._initialized

    def get_health_status(self) -> dict:
        """Get health status of all components."""
        state = self.pipeline.state if self.pipeline else None
        view = state.view if state else None

        status = {
            "initialized": self._initialized,
            "settings": self.settings is not None,
            "pipeline": self.pipeline is not None,
            "scheduler": self.scheduler is not None,
            "scheduler_running": self.scheduler.is_running if self.scheduler else False,
            "cycle_status": state.status.value if state else None,
            "cycle_error": state.error if state else None,
            "last_data_refresh": view.refreshed_at.isoformat() if view else None,
            "leagues": len(view.leagues) if view else 0,
            "live_odds": len(view.odds_by_event) if view else 0,
            "started_at": self._started_at.isoformat() if self._started_at else None,
        }
        if self._init_error:
            status["init_error"] = self._init_error
        return status
