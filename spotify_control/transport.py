"""Low-level JSON request primitive shared by token fetches and commands."""

from typing import Any

import httpx

from spotify_control.decoding import parse_response
from spotify_control.exceptions import NetworkException
from spotify_control.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    params: dict[str, str] | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """GET ``url`` and decode the body as a JSON object.

    The HTTP status code is not checked: both endpoints report failures
    through the body, which callers inspect for an error envelope.

    Args:
        client: HTTP client
        url: Absolute URL to request
        headers: Request headers
        params: Query parameters
        timeout: Per-request timeout in seconds (defaults to the client timeout)

    Returns:
        Decoded JSON object

    Raises:
        NetworkException: On connection failure, timeout or an unusable URL
        ParseException: If the body is not a JSON object
    """
    request_timeout = httpx.Timeout(timeout) if timeout is not None else httpx.USE_CLIENT_DEFAULT
    try:
        response = await client.get(url, headers=headers, params=params, timeout=request_timeout)
    except httpx.InvalidURL as e:
        raise NetworkException(f"Invalid URL {url!r}: {e}", details={"error_type": "invalid_url"}) from e
    except httpx.TimeoutException as e:
        log_with_context(logger, "warning", "Request timed out", url=url, event_type="request_timeout")
        raise NetworkException(f"Request to {url} timed out", details={"error_type": "timeout"}) from e
    except httpx.HTTPError as e:
        log_with_context(
            logger,
            "warning",
            "Request failed",
            url=url,
            error=str(e),
            event_type="request_failed",
        )
        raise NetworkException(f"Request to {url} failed: {e}", details={"error_type": "network_error"}) from e

    log_with_context(
        logger,
        "debug",
        "Response received",
        url=url,
        status_code=response.status_code,
        event_type="response_received",
    )
    return parse_response(response)
