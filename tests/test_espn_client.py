"""
ESPNClient URL building, response re-shaping and error normalization.
"""

from __future__ import annotations

import asyncio
import json

import aiohttp
import pytest

from soccer_scoreboard.data.sources.base import (
    DataNotAvailableError,
    DataSourceError,
    DataSourceStatus,
)
from soccer_scoreboard.data.sources.espn_client import ESPNClient


class _FakeResponse:
    def __init__(self, payload=None, status: int = 200, body: str | None = None) -> None:
        self.status = status
        self._body = body if body is not None else json.dumps(payload)

    async def json(self, content_type=None):
        return json.loads(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class _FakeSession:
    def __init__(self, responses: list) -> None:
        self._responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True


def _client_with(monkeypatch, responses) -> tuple[ESPNClient, _FakeSession]:
    client = ESPNClient()
    session = _FakeSession(responses)

    async def _get_session():
        return session

    monkeypatch.setattr(client, "_get_session", _get_session)
    return client, session


@pytest.mark.asyncio
async def test_get_leagues_returns_items_and_sends_locale(monkeypatch):
    items = [{"id": "700", "name": "English Premier League", "abbreviation": "EPL", "slug": "eng.1"}]
    client, session = _client_with(monkeypatch, [_FakeResponse({"count": 1, "items": items})])

    assert await client.get_leagues() == items
    assert session.calls[0]["url"] == "https://sports.core.api.espn.com/v2/sports/soccer/leagues"
    assert session.calls[0]["params"] == {"lang": "en", "region": "us"}


@pytest.mark.asyncio
async def test_get_scoreboard_unwraps_events(monkeypatch):
    client, session = _client_with(monkeypatch, [_FakeResponse({"events": [{"id": "1"}]})])

    assert await client.get_scoreboard("eng.1") == [{"id": "1"}]
    assert session.calls[0]["url"] == (
        "https://site.api.espn.com/apis/site/v2/sports/soccer/eng.1/scoreboard"
    )


@pytest.mark.asyncio
async def test_get_event_odds_url(monkeypatch):
    client, session = _client_with(monkeypatch, [_FakeResponse({"items": []})])

    assert await client.get_event_odds("eng.1", "401") == {"items": []}
    assert session.calls[0]["url"] == (
        "https://sports.core.api.espn.com/v2/sports/soccer/leagues/eng.1"
        "/events/401/competitions/401/odds"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"events": None}, {"events": {"id": "1"}}, [], "scoreboard"],
)
async def test_scoreboard_shape_errors(monkeypatch, payload):
    client, _ = _client_with(monkeypatch, [_FakeResponse(payload)])

    with pytest.raises(DataSourceError):
        await client.get_scoreboard("eng.1")


@pytest.mark.asyncio
async def test_leagues_shape_error(monkeypatch):
    client, _ = _client_with(monkeypatch, [_FakeResponse({"items": "x"})])

    with pytest.raises(DataSourceError):
        await client.get_leagues()


@pytest.mark.asyncio
async def test_non_200_is_not_available(monkeypatch):
    client, _ = _client_with(monkeypatch, [_FakeResponse({}, status=404)])

    with pytest.raises(DataNotAvailableError) as excinfo:
        await client.get_event_odds("eng.1", "401")
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_transport_and_json_errors_are_normalized(monkeypatch):
    client, _ = _client_with(
        monkeypatch,
        [
            aiohttp.ClientConnectionError("reset"),
            asyncio.TimeoutError(),
            _FakeResponse(body="<html>oops</html>"),
        ],
    )

    for _ in range(3):
        with pytest.raises(DataSourceError):
            await client.get_scoreboard("eng.1")

    health = client.get_health()
    assert health.consecutive_failures == 3
    assert health.status == DataSourceStatus.DEGRADED


@pytest.mark.asyncio
async def test_success_resets_health(monkeypatch):
    client, _ = _client_with(
        monkeypatch,
        [_FakeResponse({}, status=500), _FakeResponse({"events": []})],
    )

    with pytest.raises(DataSourceError):
        await client.get_scoreboard("eng.1")
    await client.get_scoreboard("eng.1")

    assert client.get_health().status == DataSourceStatus.HEALTHY
    assert client.get_health().consecutive_failures == 0


@pytest.mark.asyncio
async def test_disabled_client_raises():
    client = ESPNClient(enabled=False)

    with pytest.raises(DataSourceError):
        await client.get_leagues()
    assert (await client.health_check()).status == DataSourceStatus.DISABLED


def test_from_settings_uses_espn_section():
    from soccer_scoreboard.config.settings import Settings

    settings = Settings(espn={"sport": "futsal", "site_api_url": "http://local/api/"})
    client = ESPNClient.from_settings(settings)

    assert client.sport == "futsal"
    assert client.scoreboard_url("fifa.world") == "http://local/api/sports/futsal/fifa.world/scoreboard"
