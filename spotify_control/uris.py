"""Normalization of track references to native ``spotify:`` URIs."""

import re
from urllib.parse import urlsplit

from spotify_control.exceptions import InvalidURIException

OPEN_SPOTIFY_HOST = "open.spotify.com"

# Spotify IDs are 22 characters of base62
_TRACK_ID = r"[0-9A-Za-z]{22}"

_NATIVE_TRACK_URI = re.compile(rf"^spotify:track:({_TRACK_ID})$")
_WEB_TRACK_PATH = re.compile(rf"^/(?:intl-[a-z]{{2}}(?:-[a-z]{{2}})?/)?track/({_TRACK_ID})/?$", re.IGNORECASE)


def normalize_track_uri(uri: str) -> str:
    """Convert a track reference into the form the local player accepts.

    Accepts ``spotify:track:<id>`` unchanged and
    ``https://open.spotify.com/track/<id>`` (query string and fragment are
    dropped). Other resource types are not supported.

    Args:
        uri: Native URI or open.spotify.com web URL

    Returns:
        Native URI, e.g. ``spotify:track:4uLU6hMCjMI75M1A2tKUQC``

    Raises:
        InvalidURIException: If uri is not a supported track reference
    """
    candidate = uri.strip()

    native = _NATIVE_TRACK_URI.match(candidate)
    if native:
        return candidate

    parts = urlsplit(candidate)
    if parts.scheme.lower() != "https" or (parts.hostname or "").lower() != OPEN_SPOTIFY_HOST:
        raise InvalidURIException(uri)

    web = _WEB_TRACK_PATH.match(parts.path)
    if not web:
        raise InvalidURIException(uri, details={"path": parts.path})

    return f"spotify:track:{web.group(1)}"
