"""Pydantic models for the player status returned by the local control API."""

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr


class MediaResource(BaseModel):
    """A named Spotify resource (track, artist or album)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: StrictStr = ""
    uri: StrictStr = ""


class TrackInfo(BaseModel):
    """Currently loaded track."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    length: StrictInt = 0
    track_type: StrictStr = ""
    track_resource: MediaResource = MediaResource()
    artist_resource: MediaResource = MediaResource()
    album_resource: MediaResource = MediaResource()


class PlaybackStatus(BaseModel):
    """Snapshot of player state decoded from a single command response.

    Fields missing from the response keep their zero value; unknown keys
    are ignored. Present fields must already have the right JSON type,
    so ``"playing": "yes"`` or ``"version": "9"`` fail validation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: StrictInt = 0
    client_version: StrictStr = ""
    playing: StrictBool = False
    shuffle: StrictBool = False
    repeat: StrictBool = False
    play_enabled: StrictBool = False
    prev_enabled: StrictBool = False
    next_enabled: StrictBool = False
    track: TrackInfo = TrackInfo()
