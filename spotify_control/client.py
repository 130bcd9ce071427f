"""Control of a running Spotify desktop client through its local HTTP API."""

from typing import Any

import httpx
from pydantic import ValidationError

from spotify_control.auth import get_csrf_token, get_oauth_token
from spotify_control.config import ControlSettings, get_settings
from spotify_control.decoding import raise_for_api_error
from spotify_control.discovery import URL_STATUS, find_port
from spotify_control.exceptions import ProtocolException
from spotify_control.logging_config import get_logger, log_with_context
from spotify_control.models import ClientSession, PlaybackStatus, build_base_url
from spotify_control.transport import fetch_json
from spotify_control.uris import normalize_track_uri

URL_PAUSE = "/remote/pause.json"
URL_PLAY = "/remote/play.json"

logger = get_logger(__name__)


class LocalPlayerControl:
    """Authenticated handle on the local Spotify client.

    Build one with :meth:`connect`, which discovers the port and fetches
    both tokens before returning. The tokens are never refreshed; connect
    again to re-authenticate.

    Example:
        async with await LocalPlayerControl.connect() as spotify:
            status = await spotify.pause()
    """

    def __init__(
        self,
        session: ClientSession,
        client: httpx.AsyncClient,
        settings: ControlSettings,
        owns_client: bool = False,
    ):
        self._session = session
        self._client = client
        self._settings = settings
        self._owns_client = owns_client

    @classmethod
    async def connect(
        cls,
        host: str | None = None,
        timeout: float | None = None,
        settings: ControlSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "LocalPlayerControl":
        """Discover the player and authenticate against it.

        Steps run in order and the first failure aborts: port discovery,
        OAuth token, CSRF token.

        Args:
            host: Host running Spotify (defaults to settings.host)
            timeout: Per-request timeout in seconds (defaults to settings.timeout)
            settings: Settings instance (defaults to singleton)
            client: HTTP client to use instead of creating one; left open on close.
                Requests still use ``timeout``, not the client's own timeout.

        Returns:
            A connected LocalPlayerControl

        Raises:
            PortNotFoundException: If no port in range answered
            NetworkException: If a token request fails or times out
            ParseException: If a token response is not a JSON object
            ProtocolException: If a token is missing or invalid
            SpotifyAPIException: If the player refused to issue a CSRF token
        """
        if settings is None:
            settings = get_settings()
        host = host or settings.host
        timeout = timeout if timeout is not None else settings.timeout
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        owns_client = client is None
        if client is None:
            # One connection per scanned port must be able to open at once
            client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), limits=httpx.Limits(max_connections=None))

        try:
            port = await find_port(client, host, settings.port_range_start, settings.port_range_end, timeout)
            oauth_token = await get_oauth_token(client, settings, timeout)
            csrf_token = await get_csrf_token(client, build_base_url(host, port), settings, timeout)
        except BaseException:
            if owns_client:
                await client.aclose()
            raise

        session = ClientSession(host=host, port=port, oauth_token=oauth_token, csrf_token=csrf_token, timeout=timeout)
        log_with_context(
            logger,
            "info",
            "Connected to Spotify",
            host=host,
            port=port,
            event_type="spotify_connected",
        )
        return cls(session, client, settings, owns_client=owns_client)

    @property
    def session(self) -> ClientSession:
        return self._session

    async def pause(self) -> PlaybackStatus:
        """Pause playback."""
        return await self.set_pause_state(True)

    async def unpause(self) -> PlaybackStatus:
        """Resume playback."""
        return await self.set_pause_state(False)

    async def set_pause_state(self, paused: bool) -> PlaybackStatus:
        """Pause or resume playback.

        Args:
            paused: True to pause, False to resume

        Returns:
            Player status after the command
        """
        params = {**self._session.auth_params, "pause": "true" if paused else "false"}
        return await self._status_request(URL_PAUSE, params)

    async def get_status(self) -> PlaybackStatus:
        """Get the current player status."""
        return await self._status_request(URL_STATUS, self._session.auth_params)

    async def play(self, uri: str) -> PlaybackStatus:
        """Start playing a track.

        Args:
            uri: ``spotify:track:<id>`` or ``https://open.spotify.com/track/<id>``

        Returns:
            Player status after the command

        Raises:
            InvalidURIException: If uri is not a supported track reference
        """
        native_uri = normalize_track_uri(uri)
        params = {**self._session.auth_params, "uri": native_uri}
        return await self._status_request(URL_PLAY, params)

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "LocalPlayerControl":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request_json(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        data = await fetch_json(
            self._client,
            f"{self._session.base_url}{path}",
            self._settings.request_headers,
            params=params,
            timeout=self._session.timeout,
        )
        raise_for_api_error(data)
        return data

    async def _status_request(self, path: str, params: dict[str, str]) -> PlaybackStatus:
        data = await self._request_json(path, params)
        try:
            return PlaybackStatus.model_validate(data)
        except ValidationError as e:
            raise ProtocolException(
                f"Invalid status in Spotify API response from {path}",
                details={"errors": e.errors(include_url=False)},
            ) from e
