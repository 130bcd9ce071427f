"""Token acquisition: the remote OAuth token and the local CSRF token."""

import httpx

from spotify_control.config import ControlSettings, get_settings
from spotify_control.decoding import raise_for_api_error, require_string
from spotify_control.logging_config import get_logger, log_with_context
from spotify_control.transport import fetch_json

URL_CSRF_TOKEN = "/simplecsrf/token.json"

logger = get_logger(__name__)


async def get_oauth_token(
    client: httpx.AsyncClient,
    settings: ControlSettings | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch an OAuth token from the open.spotify.com token endpoint.

    Args:
        client: HTTP client
        settings: Settings instance (defaults to singleton)
        timeout: Request timeout in seconds (defaults to settings.timeout)

    Returns:
        The ``t`` field of the response

    Raises:
        NetworkException: If the request fails or times out
        ParseException: If the body is not a JSON object
        ProtocolException: If ``t`` is missing, not a string or empty
    """
    if settings is None:
        settings = get_settings()
    if timeout is None:
        timeout = settings.timeout

    data = await fetch_json(client, settings.oauth_token_url, settings.request_headers, timeout=timeout)
    token = require_string(data, "t", "OAuth token")

    log_with_context(logger, "debug", "OAuth token acquired", event_type="oauth_token_acquired")
    return token


async def get_csrf_token(
    client: httpx.AsyncClient,
    base_url: str,
    settings: ControlSettings | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch the session CSRF token from the local player.

    Args:
        client: HTTP client
        base_url: Root URL of the player, e.g. ``http://127.0.0.1:4371``
        settings: Settings instance (defaults to singleton)
        timeout: Request timeout in seconds (defaults to settings.timeout)

    Returns:
        The ``token`` field of the response

    Raises:
        NetworkException: If the request fails or times out
        ParseException: If the body is not a JSON object
        SpotifyAPIException: If the player answered with an error envelope
        ProtocolException: If ``token`` is missing, not a string or empty
    """
    if settings is None:
        settings = get_settings()
    if timeout is None:
        timeout = settings.timeout

    data = await fetch_json(client, f"{base_url}{URL_CSRF_TOKEN}", settings.request_headers, timeout=timeout)
    raise_for_api_error(data)
    token = require_string(data, "token", "CSRF token")

    log_with_context(logger, "debug", "CSRF token acquired", base_url=base_url, event_type="csrf_token_acquired")
    return token
