"""Spotify control models"""

from spotify_control.models.session import ClientSession, build_base_url
from spotify_control.models.status import MediaResource, PlaybackStatus, TrackInfo

__all__ = [
    "ClientSession",
    "MediaResource",
    "PlaybackStatus",
    "TrackInfo",
    "build_base_url",
]
