"""
ESPN API client for soccer leagues, scoreboards and odds.

ESPN provides hidden/undocumented APIs that are free and require no authentication.
These are the same endpoints used by ESPN's website and mobile apps.

Data provided:
- League catalog
- Per-league scoreboards (events with status, competitors and scores)
- Per-event moneyline odds

Note: These are unofficial APIs and may change without notice.
"""
import ssl
from datetime import datetime
from typing import Any, Optional

import aiohttp
import certifi

from .base import (
    BaseDataSource,
    DataSourceError,
    DataSourceHealth,
    DataSourceStatus,
)


class ESPNClient(BaseDataSource):
    """
    Client for accessing ESPN's hidden soccer APIs.

    Every method returns the upstream JSON re-shaped only as far as needed to
    hand the pipeline a list or an object; all failures surface as
    DataSourceError.

    No API key required - these are public endpoints.
    """

    CORE_API = "https://sports.core.api.espn.com/v2"
    SITE_API = "https://site.api.espn.com/apis/site/v2"

    def __init__(
        self,
        sport: str = "soccer",
        core_api_url: Optional[str] = None,
        site_api_url: Optional[str] = None,
        lang: str = "en",
        region: str = "us",
        timeout_seconds: float = 15.0,
        enabled: bool = True,
    ):
        super().__init__(
            source_name="espn",
            enabled=enabled,
            timeout_seconds=timeout_seconds,
        )
        self.sport = sport
        self.core_api_url = (core_api_url or self.CORE_API).rstrip("/")
        self.site_api_url = (site_api_url or self.SITE_API).rstrip("/")
        self.lang = lang
        self.region = region

    @classmethod
    def from_settings(cls, settings) -> "ESPNClient":
        """Create a client from application settings."""
        espn = settings.espn
        return cls(
            sport=espn.sport,
            core_api_url=espn.core_api_url,
            site_api_url=espn.site_api_url,
            lang=espn.lang,
            region=espn.region,
            timeout_seconds=espn.request_timeout_seconds,
        )

    def _session_headers(self) -> dict[str, str]:
        return {"User-Agent": "Mozilla/5.0 (compatible; Soccer-Scoreboard/1.0)"}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session verified against certifi's CA bundle."""
        if self._session is None or self._session.closed:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(ssl=ssl_context),
                headers=self._session_headers(),
            )
        return self._session

    @property
    def leagues_url(self) -> str:
        return f"{self.core_api_url}/sports/{self.sport}/leagues"

    def scoreboard_url(self, slug: str) -> str:
        return f"{self.site_api_url}/sports/{self.sport}/{slug}/scoreboard"

    def odds_url(self, slug: str, event_id: str) -> str:
        return (
            f"{self.core_api_url}/sports/{self.sport}/leagues/{slug}"
            f"/events/{event_id}/competitions/{event_id}/odds"
        )

    async def health_check(self) -> DataSourceHealth:
        """Check if ESPN API is available."""
        if not self.enabled:
            return DataSourceHealth(
                source_name=self.source_name,
                status=DataSourceStatus.DISABLED,
                error_message="ESPN integration disabled",
            )

        try:
            await self.get_leagues()
        except DataSourceError as e:
            return DataSourceHealth(
                source_name=self.source_name,
                status=DataSourceStatus.UNHEALTHY,
                error_message=str(e),
            )

        return DataSourceHealth(
            source_name=self.source_name,
            status=DataSourceStatus.HEALTHY,
            last_success=datetime.now(),
        )

    async def get_leagues(self) -> list[dict[str, Any]]:
        """
        Get the league catalog.

        Returns:
            Raw catalog items in upstream order, each carrying at least
            id, name, abbreviation and slug

        Raises:
            DataSourceError: On transport failure or if `items` is not a list
        """
        data = await self._get_json(
            self.leagues_url,
            params={"lang": self.lang, "region": self.region},
        )

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise DataSourceError("League catalog has no items list", self.source_name)
        return items

    async def get_scoreboard(self, slug: str) -> list[dict[str, Any]]:
        """
        Get the scoreboard events for a league.

        Args:
            slug: League slug (e.g., "eng.1")

        Returns:
            List of upstream event dicts

        Raises:
            DataSourceError: On transport failure or if `events` is not a list
        """
        data = await self._get_json(self.scoreboard_url(slug))

        events = data.get("events") if isinstance(data, dict) else None
        if not isinstance(events, list):
            raise DataSourceError(
                f"Scoreboard for {slug} has no events list",
                self.source_name,
            )
        return events

    async def get_event_odds(self, slug: str, event_id: str) -> dict[str, Any]:
        """
        Get the odds document for one event.

        Args:
            slug: League slug
            event_id: ESPN event ID (also used as the competition ID)

        Returns:
            Raw odds response with an `items` list of provider quotes

        Raises:
            DataSourceError: On transport failure, non-200 status or non-object body
        """
        data = await self._get_json(self.odds_url(slug, event_id))

        if not isinstance(data, dict):
            raise DataSourceError(
                f"Odds for event {event_id} is not an object",
                self.source_name,
            )
        return data
