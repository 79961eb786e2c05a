"""Media domain models: platform tags and embedded media items.

A MediaItem's ``id`` holds the normalized embeddable reference and
``raw_url`` keeps whatever the user pasted.  Both are only ever written
together by :func:`folio.media.services.apply_media_edit`, which keeps
``type`` consistent with the shape of ``id``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PlatformTag(StrEnum):
    """Source service of a media embed."""

    YOUTUBE = "youtube"
    SOUNDCLOUD = "soundcloud"
    SOUNDCLOUD_PLAYLIST = "soundcloud-playlist"
    SPOTIFY = "spotify"
    SPOTIFY_PLAYLIST = "spotify-playlist"
    APPLE_MUSIC_ALBUM = "apple-music-album"
    APPLE_MUSIC_PLAYLIST = "apple-music-playlist"
    APPLE_MUSIC_STATION = "apple-music-station"
    MIXCLOUD = "mixcloud"
    INSTAGRAM_REEL = "instagram-reel"
    TIKTOK = "tiktok"
    UNKNOWN = "unknown"


class MediaItem(BaseModel):
    """An embedded audio/video item in the media gallery."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    type: PlatformTag = PlatformTag.YOUTUBE
    raw_url: str = Field(default="", alias="rawUrl")
    title: str | None = None
