"""Unit tests for port discovery."""

import asyncio
import time

import httpx
import pytest

from spotify_control.discovery import URL_STATUS, find_port, check_port
from spotify_control.exceptions import NetworkException, PortNotFoundException


@pytest.mark.asyncio
async def test_find_port_single_responder(fake_spotify):
    """Test the only responding port in range is returned."""
    async with fake_spotify.client() as client:
        port = await find_port(client, "127.0.0.1", 4370, 4400)

    assert port == 4371


@pytest.mark.asyncio
async def test_find_port_checks_whole_range(fake_spotify):
    """Test every port in the closed range is checked exactly once."""
    async with fake_spotify.client() as client:
        await find_port(client, "127.0.0.1", 4370, 4400)

    checked = sorted(request.url.port for request in fake_spotify.requests)
    assert checked == list(range(4370, 4401))
    assert all(request.url.path == URL_STATUS for request in fake_spotify.requests)
    assert all(request.url.host == "127.0.0.1" for request in fake_spotify.requests)


@pytest.mark.asyncio
async def test_find_port_none_respond(spotify_factory):
    """Test discovery fails when nothing listens in range."""
    spotify = spotify_factory(port=None)

    async with spotify.client() as client:
        with pytest.raises(PortNotFoundException) as exc_info:
            await find_port(client, "127.0.0.1", 4370, 4400)

    assert "4370-4400" in str(exc_info.value)


@pytest.mark.asyncio
async def test_find_port_ignores_ports_outside_range(spotify_factory):
    """Test responders just outside the range are never selected."""
    spotify = spotify_factory(port=4369)
    spotify.ports.add(4401)

    async with spotify.client() as client:
        with pytest.raises(PortNotFoundException):
            await find_port(client, "127.0.0.1", 4370, 4400)

    assert {request.url.port for request in spotify.requests}.isdisjoint({4369, 4401})


@pytest.mark.asyncio
async def test_find_port_multiple_responders_picks_lowest(spotify_factory):
    spotify = spotify_factory(port=4390)
    spotify.ports.update({4381, 4399})

    async with spotify.client() as client:
        port = await find_port(client, "127.0.0.1", 4370, 4400)

    assert port == 4381


@pytest.mark.asyncio
async def test_find_port_any_http_response_counts():
    """Test an error status still means the player is listening."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.port == 4380:
            return httpx.Response(403, text="Forbidden")
        raise httpx.ConnectError("Connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        port = await find_port(client, "127.0.0.1", 4370, 4400)

    assert port == 4380


@pytest.mark.asyncio
async def test_find_port_scans_concurrently():
    """Test the scan takes about one check duration, not one per port."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.1)
        if request.url.port == 4371:
            return httpx.Response(200, json={})
        raise httpx.ReadTimeout("timed out", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        started = time.monotonic()
        port = await find_port(client, "127.0.0.1", 4370, 4400)
        elapsed = time.monotonic() - started

    assert port == 4371
    # 31 sequential checks would take over 3 seconds
    assert elapsed < 1.5


@pytest.mark.asyncio
async def test_find_port_invalid_range(mock_http_client):
    with pytest.raises(ValueError):
        await find_port(mock_http_client, "127.0.0.1", 4400, 4370)

    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_check_port_timeout_returns_none(mock_http_client):
    """Test a check timing out is treated as no answer."""
    mock_http_client.get.side_effect = httpx.ConnectTimeout("timed out")

    assert await check_port(mock_http_client, "127.0.0.1", 4371) is None


@pytest.mark.asyncio
async def test_check_port_success(mock_http_client):
    mock_http_client.get.return_value = httpx.Response(200, json={})

    assert await check_port(mock_http_client, "127.0.0.1", 4371) == 4371
    call_args = mock_http_client.get.call_args
    assert call_args[0][0] == "http://127.0.0.1:4371/remote/status.json"
    assert call_args.kwargs["timeout"] == httpx.Timeout(0.5, pool=None)


@pytest.mark.asyncio
async def test_find_port_range_wider_than_connection_pool(spotify_factory):
    """Test a responder after more than 100 silent ports is still found."""
    spotify = spotify_factory(port=4520)

    async with spotify.client() as client:
        port = await find_port(client, "127.0.0.1", 4370, 4520, timeout=0.5)

    assert port == 4520
    assert len(spotify.requests) == 151


@pytest.mark.asyncio
async def test_find_port_requests_never_wait_on_pool_timeout(fake_spotify):
    """Test checks carry the scan timeout and no pool timeout."""
    async with fake_spotify.client() as client:
        await find_port(client, "127.0.0.1", 4370, 4400, timeout=0.25)

    for request in fake_spotify.requests:
        timeouts = request.extensions["timeout"]
        assert timeouts["pool"] is None
        assert timeouts["connect"] == 0.25
        assert timeouts["read"] == 0.25


@pytest.mark.asyncio
async def test_find_port_invalid_host(mock_http_client):
    """Test a host that cannot form a URL is a NetworkException, not a raw httpx error."""
    with pytest.raises(NetworkException) as exc_info:
        await find_port(mock_http_client, "127.0.0.1\n", 4370, 4400)

    assert exc_info.value.details["error_type"] == "invalid_url"
    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_check_port_invalid_url_returns_none(mock_http_client):
    mock_http_client.get.side_effect = httpx.InvalidURL("Invalid URL")

    assert await check_port(mock_http_client, "127.0.0.1", 4371) is None
