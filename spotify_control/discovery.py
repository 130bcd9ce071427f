"""Discovery of the port the Spotify desktop client listens on."""

import asyncio

import httpx

from spotify_control.config import DEFAULT_TIMEOUT_SECONDS, END_PORT, START_PORT
from spotify_control.exceptions import NetworkException, PortNotFoundException
from spotify_control.logging_config import get_logger, log_with_context
from spotify_control.models import build_base_url

URL_STATUS = "/remote/status.json"

logger = get_logger(__name__)


def scan_timeout(timeout: float) -> httpx.Timeout:
    """Timeout for one check.

    Waiting for a free pool connection is unbounded: a scan can hold more
    checks than the client's connection limit, and a check that is only
    queued behind silent ports must not be mistaken for a silent port.
    """
    return httpx.Timeout(timeout, pool=None)


async def check_port(
    client: httpx.AsyncClient,
    host: str,
    port: int,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> int | None:
    """Send one status request to host:port.

    Any HTTP response counts as the player answering, whatever its status
    code; connection errors and timeouts mean nobody is listening.

    Returns:
        The port if it answered, otherwise None
    """
    url = f"{build_base_url(host, port)}{URL_STATUS}"
    try:
        response = await client.get(url, timeout=scan_timeout(timeout))
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log_with_context(
            logger,
            "debug",
            "Port check failed",
            host=host,
            port=port,
            error=str(e),
            event_type="port_check_failed",
        )
        return None

    log_with_context(
        logger,
        "debug",
        "Port check answered",
        host=host,
        port=port,
        status_code=response.status_code,
        event_type="port_check_answered",
    )
    return port


async def find_port(
    client: httpx.AsyncClient,
    host: str,
    start_port: int = START_PORT,
    end_port: int = END_PORT,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> int:
    """Find the port serving the player's status endpoint.

    Every port in the closed range is checked concurrently and all checks
    are awaited before deciding. When several ports answer, the lowest
    one wins.

    Args:
        client: HTTP client used for the checks
        host: Host to scan
        start_port: First port of the range
        end_port: Last port of the range (inclusive)
        timeout: Per-port timeout in seconds

    Returns:
        The responding port

    Raises:
        ValueError: If start_port is greater than end_port
        NetworkException: If host cannot be used in a URL
        PortNotFoundException: If no port in range answered
    """
    if start_port > end_port:
        raise ValueError(f"Invalid port range {start_port}-{end_port}")

    try:
        httpx.URL(build_base_url(host, start_port))
    except httpx.InvalidURL as e:
        raise NetworkException(f"Invalid host {host!r}: {e}", details={"error_type": "invalid_url"}) from e

    results = await asyncio.gather(
        *(check_port(client, host, port, timeout) for port in range(start_port, end_port + 1))
    )
    answered = sorted(port for port in results if port is not None)

    if not answered:
        log_with_context(
            logger,
            "warning",
            "Spotify port not found",
            host=host,
            start_port=start_port,
            end_port=end_port,
            event_type="port_not_found",
        )
        raise PortNotFoundException(start_port, end_port, details={"host": host})

    port = answered[0]
    log_with_context(
        logger,
        "info",
        "Spotify port found",
        host=host,
        port=port,
        candidates=answered,
        event_type="port_found",
    )
    return port
