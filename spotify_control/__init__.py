"""Spotify local control client"""

from importlib.metadata import PackageNotFoundError, version

from spotify_control.client import LocalPlayerControl
from spotify_control.exceptions import (
    ErrorCode,
    InvalidURIException,
    NetworkException,
    ParseException,
    PortNotFoundException,
    ProtocolException,
    SpotifyAPIException,
    SpotifyControlException,
)
from spotify_control.models import ClientSession, MediaResource, PlaybackStatus, TrackInfo

try:
    __version__ = version("spotify-local-control")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "ClientSession",
    "ErrorCode",
    "InvalidURIException",
    "LocalPlayerControl",
    "MediaResource",
    "NetworkException",
    "ParseException",
    "PlaybackStatus",
    "PortNotFoundException",
    "ProtocolException",
    "SpotifyAPIException",
    "SpotifyControlException",
    "TrackInfo",
]
