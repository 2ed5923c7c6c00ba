"""
Abstract base class for all data source clients.

Provides the common HTTP session handling, error normalization, logging and
health tracking that data source implementations share.

No retry logic lives here: a failed request is reported once and the next
refresh cycle is the retry mechanism.
"""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

import aiohttp
from loguru import logger


class DataSourceStatus(str, Enum):
    """Health status of a data source."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    DISABLED = "disabled"


@dataclass
class DataSourceHealth:
    """Health information for a data source."""

    source_name: str
    status: DataSourceStatus
    last_success: Optional[datetime] = None
    last_failure: Optional[datetime] = None
    consecutive_failures: int = 0
    error_message: Optional[str] = None
    latency_ms: Optional[float] = None


class DataSourceError(Exception):
    """Base exception for data source errors (transport, status, parse)."""

    def __init__(
        self,
        message: str,
        source_name: str,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.source_name = source_name
        self.original_error = original_error


class DataNotAvailableError(DataSourceError):
    """Error when the upstream answers with a non-success status."""

    def __init__(self, source_name: str, message: str, status: Optional[int] = None):
        super().__init__(message, source_name)
        self.status = status


class BaseDataSource(ABC):
    """
    Abstract base class for HTTP JSON data sources.

    Provides:
    - Lazily created aiohttp session
    - JSON GET with every failure normalized to DataSourceError
    - Health monitoring
    - Logging
    """

    UNHEALTHY_AFTER_FAILURES = 5

    def __init__(
        self,
        source_name: str,
        enabled: bool = True,
        timeout_seconds: float = 15.0,
    ):
        self.source_name = source_name
        self.enabled = enabled
        self.timeout_seconds = timeout_seconds

        self._session: Optional[aiohttp.ClientSession] = None
        self._health = DataSourceHealth(
            source_name=source_name,
            status=DataSourceStatus.HEALTHY if enabled else DataSourceStatus.DISABLED,
        )

        # Setup logging
        self.logger = logger.bind(source=source_name)

    @abstractmethod
    async def health_check(self) -> DataSourceHealth:
        """
        Perform a health check on the data source.

        Should be a lightweight check (e.g., ping endpoint).
        """

    def _session_headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        return {}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._session_headers())
        return self._session

    async def _get_json(self, url: str, params: Optional[dict[str, str]] = None) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            DataSourceError: On disabled source, connection error, timeout or bad JSON
            DataNotAvailableError: On a non-200 response
        """
        if not self.enabled:
            raise DataSourceError(
                f"Data source {self.source_name} is disabled",
                self.source_name,
            )

        session = await self._get_session()
        start_time = datetime.now()

        try:
            async with session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as response:
                if response.status != 200:
                    raise DataNotAvailableError(
                        self.source_name,
                        f"{self.source_name} returned {response.status} for {url}",
                        status=response.status,
                    )

                # ESPN does not always label JSON bodies correctly
                data = await response.json(content_type=None)

        except DataSourceError as e:
            self._record_failure(str(e))
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._record_failure(str(e) or type(e).__name__)
            raise DataSourceError(
                f"Connection error: {e!r}",
                self.source_name,
                original_error=e,
            )
        except ValueError as e:
            self._record_failure(str(e))
            raise DataSourceError(
                f"Invalid JSON from {url}: {e}",
                self.source_name,
                original_error=e,
            )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
        self._record_success(elapsed_ms)
        return data

    def _record_success(self, latency_ms: float) -> None:
        """Record a successful fetch."""
        self._health.last_success = datetime.now()
        self._health.latency_ms = latency_ms
        self._health.consecutive_failures = 0
        self._health.error_message = None
        self._health.status = DataSourceStatus.HEALTHY

    def _record_failure(self, error_message: str) -> None:
        """Record a failed fetch."""
        self._health.last_failure = datetime.now()
        self._health.consecutive_failures += 1
        self._health.error_message = error_message

        if self._health.consecutive_failures >= self.UNHEALTHY_AFTER_FAILURES:
            self._health.status = DataSourceStatus.UNHEALTHY
        elif self._health.consecutive_failures >= 2:
            self._health.status = DataSourceStatus.DEGRADED

    def get_health(self) -> DataSourceHealth:
        """Get current health status of the data source."""
        return self._health

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
