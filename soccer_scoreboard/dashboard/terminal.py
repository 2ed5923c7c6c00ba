"""
Rich-based terminal dashboard for the soccer scoreboard.

Provides a live-updating terminal UI with:
- Header with refresh status and time
- One table per league with in-window events
- Implied win probabilities for live events
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config.constants import CycleStatus
from ..data.time_window import TimeWindow
from .view import LeagueSection, ScoreboardView, build_scoreboard_view

logger = logging.getLogger(__name__)


class TerminalDashboard:
    """
    Rich-based real-time terminal UI.

    Example:
        >>> dashboard = TerminalDashboard(pipeline, TimeWindow())
        >>> await dashboard.run(shutdown_event)
    """

    def __init__(
        self,
        pipeline: Any,
        window: TimeWindow,
        scheduler: Optional[Any] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the terminal dashboard.

        Args:
            pipeline: AggregationPipeline whose published state is rendered
            window: Time window applied to events at render time
            scheduler: Optional SchedulerOrchestrator instance
            console: Optional rich Console (defaults to stdout)
        """
        self.pipeline = pipeline
        self.window = window
        self.scheduler = scheduler

        self.console = console or Console()
        self._running = False

    def _render_header(self, view: ScoreboardView) -> Panel:
        """Render the header panel with status info."""
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        status_parts = [
            "[bold white]SOCCER SCOREBOARD[/bold white]",
            "[dim]|[/dim]",
            f"[cyan]{now}[/cyan]",
            "[dim]|[/dim]",
            self._status_markup(view.status),
        ]

        if view.refreshed_at:
            status_parts.extend([
                "[dim]|[/dim]",
                f"[dim]Updated {view.refreshed_at.astimezone().strftime('%H:%M:%S')}[/dim]",
            ])

        if self.scheduler and not self.scheduler.is_running:
            status_parts.extend(["[dim]|[/dim]", "[red]Scheduler: Stopped[/red]"])

        return Panel(
            Text.from_markup(" ".join(status_parts)),
            style="bold",
            border_style="green",
        )

    @staticmethod
    def _status_markup(status: CycleStatus) -> str:
        if status == CycleStatus.READY:
            return "[green]Ready[/green]"
        elif status == CycleStatus.LOADING:
            return "[yellow]Refreshing...[/yellow]"
        elif status == CycleStatus.ERROR:
            return "[red]Error[/red]"
        return "[dim]Idle[/dim]"

    def _render_league(self, section: LeagueSection) -> Panel:
        """Render one league's events."""
        table = Table(
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
            expand=True,
        )

        table.add_column("Date", style="dim", no_wrap=True)
        table.add_column("Status", no_wrap=True)
        table.add_column("Team", style="white")
        table.add_column("Score", justify="right", style="bold")
        table.add_column("Win %", justify="right", style="green")

        for row in section.events:
            for i, competitor in enumerate(row.competitors):
                table.add_row(
                    f"{row.date} {row.time}" if i == 0 else "",
                    (row.detail or "") if i == 0 else "",
                    competitor.name,
                    competitor.score or "",
                    competitor.probability or "",
                    end_section=i == len(row.competitors) - 1,
                )

        return Panel(table, title=f"[bold]{section.name}[/bold]", border_style="green")

    def render(self, view: Optional[ScoreboardView] = None) -> Group:
        """Render a complete frame for the current pipeline state."""
        if view is None:
            view = build_scoreboard_view(self.pipeline.state, self.window)

        parts: list[Any] = [self._render_header(view)]

        if view.status == CycleStatus.ERROR:
            parts.append(
                Panel(
                    Text(view.error or "Failed to load data", style="red"),
                    title="Error",
                    border_style="red",
                )
            )
        elif not view.sections:
            message = (
                "Loading..." if view.status in (CycleStatus.LOADING, CycleStatus.IDLE)
                else "No events in the current window"
            )
            parts.append(Panel(Text(message, style="dim"), border_style="dim"))
        else:
            parts.extend(self._render_league(section) for section in view.sections)

        return Group(*parts)

    def render_once(self) -> None:
        """Print a single frame."""
        self.console.print(self.render())

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """
        Start the live dashboard with auto-refresh.

        Args:
            shutdown_event: Event to signal shutdown
        """
        self._running = True

        logger.info("Starting terminal dashboard...")

        with Live(
            self.render(),
            console=self.console,
            refresh_per_second=1,
            screen=True,
        ) as live:
            while not shutdown_event.is_set():
                try:
                    live.update(self.render())
                    await asyncio.sleep(1)
                except Exception as e:
                    logger.error(f"Dashboard update error: {e}")
                    await asyncio.sleep(5)

        self._running = False
        logger.info("Terminal dashboard stopped")

    async def stop(self) -> None:
        """Stop the dashboard."""
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if dashboard is running."""
        return self._running
