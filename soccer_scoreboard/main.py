#!/usr/bin/env python3
"""
Soccer Scoreboard - Main Application Entry Point.

Live soccer scoreboard that:
1. Loads the ESPN league catalog
2. Fetches every league's scoreboard
3. Fetches moneyline odds for in-progress events
4. Shows a time-windowed view with implied win probabilities

Usage:
    soccer-scoreboard                    # Live terminal dashboard
    soccer-scoreboard --once             # Run one refresh cycle and print it
    soccer-scoreboard --mode headless    # Background refreshes, no dashboard
    soccer-scoreboard --no-scheduler     # Single refresh, dashboard only
"""

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from datetime import datetime
from typing import Optional

from loguru import logger as loguru_logger

# Configure logging before other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


class ScoreboardApp:
    """
    Main application orchestrator.

    Initializes all components and manages the application lifecycle:
    - Aggregation pipeline for leagues, scoreboards and odds
    - Scheduler for timer-driven refresh cycles
    - Dashboard for real-time display
    """

    def __init__(
        self,
        dashboard_mode: Optional[str] = None,
        enable_scheduler: bool = True,
        debug: bool = False,
    ):
        """
        Initialize the application.

        Args:
            dashboard_mode: Override dashboard mode (terminal, headless)
            enable_scheduler: Whether to start timer-driven refreshes
            debug: Enable debug logging
        """
        self.dashboard_mode = dashboard_mode
        self.enable_scheduler = enable_scheduler
        self.debug = debug

        # Components (initialized in setup)
        self.settings = None
        self.pipeline = None
        self.window = None
        self.scheduler = None
        self.dashboard = None

        # State
        self._running = False
        self._shutdown_event = asyncio.Event()
        self._initial_refresh: Optional[asyncio.Future] = None

    async def setup(self) -> None:
        """Initialize all application components."""
        from soccer_scoreboard.config.settings import get_settings
        from soccer_scoreboard.data.pipeline import AggregationPipeline
        from soccer_scoreboard.data.sources.base import DataSourceStatus
        from soccer_scoreboard.data.time_window import TimeWindow

        logger.info("=" * 60)
        logger.info("SOCCER SCOREBOARD")
        logger.info("=" * 60)
        logger.info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        self.settings = get_settings()
        self._configure_logging()

        if self.dashboard_mode:
            self.settings.dashboard.dashboard_mode = self.dashboard_mode

        logger.info(f"Dashboard mode: {self.settings.dashboard.dashboard_mode}")

        self.pipeline = AggregationPipeline.from_settings(self.settings)

        # Run health check
        health = await self.pipeline.health_check()
        emoji = "✓" if health.status == DataSourceStatus.HEALTHY else "✗"
        logger.info(f"  {emoji} {health.source_name}: {health.status.value}")

        self.window = TimeWindow.from_settings(self.settings)
        logger.info(
            f"Event window: -{self.window.lookback_days}d / +{self.window.lookahead_days}d"
        )

        if self.enable_scheduler:
            await self._init_scheduler()

    def _configure_logging(self) -> None:
        level = "DEBUG" if self.debug or self.settings.debug else self.settings.log_level.upper()
        logging.getLogger().setLevel(level)

        loguru_logger.remove()
        loguru_logger.add(sys.stderr, level=level)
        logger.debug("Debug logging enabled")

    async def _init_scheduler(self) -> None:
        """Initialize APScheduler with the refresh job."""
        from soccer_scoreboard.scheduler.orchestrator import SchedulerOrchestrator

        self.scheduler = SchedulerOrchestrator(
            settings=self.settings,
            pipeline=self.pipeline,
        )
        self.scheduler.start()
        logger.info("✓ Scheduler started")

    async def run_once(self) -> int:
        """Run a single refresh cycle and print the result."""
        from soccer_scoreboard.config.constants import CycleStatus
        from soccer_scoreboard.dashboard.terminal import TerminalDashboard

        try:
            state = await self.pipeline.refresh()
            TerminalDashboard(self.pipeline, self.window).render_once()
            return 1 if state.status == CycleStatus.ERROR else 0
        finally:
            await self.pipeline.close()

    async def run(self) -> None:
        """Run the main application loop."""
        self._running = True

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._signal_handler)

        if not self.scheduler:
            # Without the scheduler a single cycle is the only refresh
            self._initial_refresh = asyncio.ensure_future(self.pipeline.refresh())

        try:
            if self.settings.dashboard.dashboard_mode == "terminal":
                await self._run_terminal_dashboard()
            else:
                logger.info("Running in headless mode (no dashboard)")
                await self._shutdown_event.wait()

        except Exception as e:
            logger.error(f"Application error: {e}")
            raise
        finally:
            await self.shutdown()

    async def _run_terminal_dashboard(self) -> None:
        """Run the Rich terminal dashboard."""
        from soccer_scoreboard.dashboard.terminal import TerminalDashboard

        self.dashboard = TerminalDashboard(
            pipeline=self.pipeline,
            window=self.window,
            scheduler=self.scheduler,
        )

        await self.dashboard.run(shutdown_event=self._shutdown_event)

    def _signal_handler(self) -> None:
        """Handle shutdown signals."""
        logger.info("Shutdown signal received...")
        self._shutdown_event.set()

    async def shutdown(self) -> None:
        """Gracefully shutdown all components."""
        logger.info("Shutting down...")

        if self.scheduler:
            self.scheduler.stop()
            logger.info("✓ Scheduler stopped")

        if self.dashboard:
            await self.dashboard.stop()
            logger.info("✓ Dashboard stopped")

        if self._initial_refresh and not self._initial_refresh.done():
            self._initial_refresh.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._initial_refresh

        if self.pipeline:
            await self.pipeline.close()

        self._running = False
        logger.info("Shutdown complete")


async def main_async(args: argparse.Namespace) -> int:
    """Async main function."""
    app = ScoreboardApp(
        dashboard_mode=args.mode,
        enable_scheduler=not (args.no_scheduler or args.once),
        debug=args.debug,
    )

    try:
        await app.setup()
        if args.once:
            return await app.run_once()
        await app.run()
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Soccer Scoreboard - live scores with implied win probabilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    soccer-scoreboard                    Live terminal dashboard
    soccer-scoreboard --once             One refresh cycle, printed
    soccer-scoreboard --mode headless    Background refreshes only
    soccer-scoreboard --debug            Enable debug logging
        """,
    )

    parser.add_argument(
        "--mode",
        choices=["terminal", "headless"],
        default=None,
        help="Dashboard mode (overrides config)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single refresh cycle, print the scoreboard and exit",
    )
    parser.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Disable timer-driven refreshes",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main() -> None:
    """Main entry point for CLI."""
    args = build_parser().parse_args()

    exit_code = asyncio.run(main_async(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
