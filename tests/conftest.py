"""Pytest configuration and shared fixtures."""

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from spotify_control.config import ControlSettings

SPOTIFY_PORT = 4371
CSRF_TOKEN = "csrf-token-123"
OAUTH_TOKEN = "abc123"
DEFAULT_TRACK_URI = "spotify:track:4uLU6hMCjMI75M1A2tKUQC"


def make_status(playing: bool = True, track_uri: str = DEFAULT_TRACK_URI) -> dict[str, Any]:
    """Status body in the shape the Spotify client returns."""
    return {
        "version": 9,
        "client_version": "1.0.42.151.g19de0aa6",
        "playing": playing,
        "shuffle": False,
        "repeat": True,
        "confidential": False,
        "play_enabled": True,
        "prev_enabled": True,
        "next_enabled": True,
        "track": {
            "track_resource": {
                "name": "Never Gonna Give You Up",
                "uri": track_uri,
                "location": {"og": "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"},
            },
            "artist_resource": {"name": "Rick Astley", "uri": "spotify:artist:0gxyHStUsqpMadRV0Di1Qt"},
            "album_resource": {"name": "Whenever You Need Somebody", "uri": "spotify:album:6N9PS4QXF1D0OWPk0Sxtb4"},
            "length": 213,
            "track_type": "normal",
        },
        "playing_position": 12.5,
        "server_time": 1500000000,
        "volume": 0.75,
        "online": True,
        "running": True,
    }


class FakeSpotify:
    """In-process stand-in for the token service and the local Spotify client.

    Requests to open.spotify.com are answered with ``oauth_body``. Requests
    to any other host or port fail with a connection error. Pause and
    play commands update the fake's playback state.
    """

    def __init__(
        self,
        port: int | None = SPOTIFY_PORT,
        host: str = "127.0.0.1",
        oauth_body: Any = None,
        csrf_body: Any = None,
        command_body: Any = None,
    ):
        self.host = host
        self.ports = {port} if port is not None else set()
        self.oauth_body = {"t": OAUTH_TOKEN} if oauth_body is None else oauth_body
        self.csrf_body = {"token": CSRF_TOKEN} if csrf_body is None else csrf_body
        self.command_body = command_body
        self.playing = True
        self.track_uri = DEFAULT_TRACK_URI
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "open.spotify.com":
            return httpx.Response(200, json=self.oauth_body)

        if request.url.host != self.host or request.url.port not in self.ports:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path
        params = request.url.params

        if path == "/simplecsrf/token.json":
            return httpx.Response(200, json=self.csrf_body)

        if "csrf" in params and self.command_body is not None:
            return httpx.Response(200, json=self.command_body)

        if path == "/remote/pause.json":
            self.playing = params["pause"] != "true"
        elif path == "/remote/play.json":
            self.playing = True
            self.track_uri = params["uri"]
        elif path != "/remote/status.json":
            return httpx.Response(404, json={"error": {"type": "4001", "message": "Unknown method"}})

        return httpx.Response(200, json=make_status(self.playing, self.track_uri))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]


@pytest.fixture
def mock_settings():
    """ControlSettings with explicit test values."""
    return ControlSettings(
        host="127.0.0.1",
        timeout=0.5,
        port_range_start=4370,
        port_range_end=4400,
        oauth_token_url="https://open.spotify.com/token",
        origin="https://open.spotify.com",
        user_agent="Test Spotify Control",
        log_level="DEBUG",
    )


@pytest.fixture
def fake_spotify():
    """Cooperative fake Spotify listening on port 4371."""
    return FakeSpotify()


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for single-request tests."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def status_payload():
    """Status response with playback running."""
    return make_status()


@pytest.fixture
def spotify_factory():
    """Build a FakeSpotify with custom ports or response bodies."""
    return FakeSpotify


@pytest.fixture
def status_factory():
    """Build status bodies with a given playing flag and track."""
    return make_status
