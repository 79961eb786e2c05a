"""Rewrite pasted media URLs into canonical embeddable references.

One rule per platform tag.  Every rule is pure and total: input that does
not match the expected shape comes back unchanged, so a bad paste never
destroys data.

Renderer contract for ``MediaItem.id``:

=====================  ==================================================
tag                    stored reference
=====================  ==================================================
youtube                bare 11-character video id
soundcloud(-playlist)  ``https://w.soundcloud.com/player/?url=...``
spotify(-playlist)     ``https://open.spotify.com/embed/<kind>/<id>``
apple-music-*          ``https://embed.music.apple.com/<cc>/<kind>/<id>``
mixcloud               ``https://player-widget.mixcloud.com/widget/iframe/?...``
instagram-reel         ``https://www.instagram.com/p/<code>/embed``
tiktok                 ``https://www.tiktok.com/embed/v2/<id>``
=====================  ==================================================
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from urllib.parse import quote, urlsplit

from folio.media.classifier import clean_url, extract_iframe_src, is_iframe
from folio.media.models import PlatformTag

logger = logging.getLogger(__name__)

YOUTUBE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
_YOUTUBE_RE = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])",
    re.IGNORECASE,
)
_SOUNDCLOUD_RE = re.compile(r"soundcloud\.com/([^/?#\s]+/(?:sets/)?[^/?#\s]+)", re.IGNORECASE)
_SPOTIFY_RE = re.compile(
    r"(?:spotify\.com/(?:intl-[a-z]{2}/)?(?:embed/)?(track|playlist)/|spotify:(track|playlist):)"
    r"([A-Za-z0-9]+)",
    re.IGNORECASE,
)
_APPLE_STATION_RE = re.compile(
    r"music\.apple\.com/([^/\s]+)/station/[^/\s]+/([^/?#\s]+)", re.IGNORECASE
)
_APPLE_COLLECTION_RE = re.compile(
    r"music\.apple\.com/([^/\s]+)/(album|playlist)/[^/\s]+/([^/?#\s]+)", re.IGNORECASE
)
_INSTAGRAM_RE = re.compile(r"instagram\.com/(?:reels?|p)/([A-Za-z0-9_-]+)", re.IGNORECASE)
_TIKTOK_RE = re.compile(r"tiktok\.com/@[^/\s]+/video/(\d+)", re.IGNORECASE)

SOUNDCLOUD_WIDGET = "https://w.soundcloud.com/player/"
SOUNDCLOUD_OPTIONS = (
    "color=%23ff5500&auto_play=false&hide_related=false&show_comments=true"
    "&show_user=true&show_reposts=false&show_teaser=true&visual=true"
)
MIXCLOUD_WIDGET = "https://player-widget.mixcloud.com/widget/iframe/"


def _embedded_src(raw: str) -> str:
    """Return the iframe ``src`` for embed snippets, the cleaned text otherwise."""
    if is_iframe(raw):
        return extract_iframe_src(raw) or raw
    return clean_url(raw)


def _path_segments(url: str) -> list[str]:
    if "://" not in url:
        url = "https://" + url
    try:
        path = urlsplit(url).path
    except ValueError:
        return []
    return [segment for segment in path.split("/") if segment]


def _miss(tag: PlatformTag, raw: str) -> str:
    logger.debug("No %s pattern matched %r, keeping original", tag.value, raw[:80])
    return raw


def normalize_youtube(raw: str) -> str:
    """Extract the 11-character video id from any YouTube URL form."""
    target = _embedded_src(raw)
    if YOUTUBE_ID_RE.match(target):
        return target
    match = _YOUTUBE_RE.search(target)
    if match:
        return match.group(1)
    return _miss(PlatformTag.YOUTUBE, raw)


def normalize_soundcloud(raw: str) -> str:
    """Build the SoundCloud widget URL; embed snippets yield their ``src``."""
    if is_iframe(raw):
        src = extract_iframe_src(raw)
        return src if src else _miss(PlatformTag.SOUNDCLOUD, raw)
    target = clean_url(raw)
    if "w.soundcloud.com/player" in target.lower():
        return target
    match = _SOUNDCLOUD_RE.search(target.split("?", 1)[0])
    if match:
        return f"{SOUNDCLOUD_WIDGET}?url=https://soundcloud.com/{match.group(1)}&{SOUNDCLOUD_OPTIONS}"
    return _miss(PlatformTag.SOUNDCLOUD, raw)


def normalize_spotify(raw: str) -> str:
    """Rewrite track/playlist URLs and URIs to the Spotify embed URL."""
    match = _SPOTIFY_RE.search(_embedded_src(raw))
    if match:
        kind = (match.group(1) or match.group(2)).lower()
        return f"https://open.spotify.com/embed/{kind}/{match.group(3)}"
    return _miss(PlatformTag.SPOTIFY, raw)


def normalize_apple_music(raw: str) -> str:
    """Rewrite album, playlist and station URLs to ``embed.music.apple.com``."""
    target = _embedded_src(raw)
    if "embed.music.apple.com" in target.lower():
        return target
    station = _APPLE_STATION_RE.search(target)
    if station:
        country, station_id = station.groups()
        return f"https://embed.music.apple.com/{country.lower()}/station/{station_id}"
    collection = _APPLE_COLLECTION_RE.search(target)
    if collection:
        country, kind, collection_id = collection.groups()
        return f"https://embed.music.apple.com/{country.lower()}/{kind.lower()}/{collection_id}"
    return _miss(PlatformTag.APPLE_MUSIC_ALBUM, raw)


def normalize_mixcloud(raw: str) -> str:
    """Build the Mixcloud player widget URL for a show."""
    if is_iframe(raw):
        src = extract_iframe_src(raw)
        return src if src else _miss(PlatformTag.MIXCLOUD, raw)
    target = clean_url(raw)
    if "player-widget.mixcloud.com" in target.lower():
        return target
    segments = _path_segments(target)
    if "mixcloud.com" in target.lower() and len(segments) >= 2:
        feed = quote(f"/{segments[0]}/{segments[1]}/", safe="")
        return f"{MIXCLOUD_WIDGET}?hide_cover=1&feed={feed}"
    return _miss(PlatformTag.MIXCLOUD, raw)


def normalize_instagram(raw: str) -> str:
    """Rewrite reel and post URLs to the Instagram embed URL."""
    target = _embedded_src(raw)
    if "/embed" in target.lower():
        return target
    match = _INSTAGRAM_RE.search(target)
    if match:
        return f"https://www.instagram.com/p/{match.group(1)}/embed"
    return _miss(PlatformTag.INSTAGRAM_REEL, raw)


def normalize_tiktok(raw: str) -> str:
    """Rewrite video URLs to the TikTok v2 embed URL."""
    target = _embedded_src(raw)
    if "tiktok.com/embed/" in target.lower():
        return target
    match = _TIKTOK_RE.search(target)
    if match:
        return f"https://www.tiktok.com/embed/v2/{match.group(1)}"
    return _miss(PlatformTag.TIKTOK, raw)


NORMALIZERS: dict[PlatformTag, Callable[[str], str]] = {
    PlatformTag.YOUTUBE: normalize_youtube,
    PlatformTag.SOUNDCLOUD: normalize_soundcloud,
    PlatformTag.SOUNDCLOUD_PLAYLIST: normalize_soundcloud,
    PlatformTag.SPOTIFY: normalize_spotify,
    PlatformTag.SPOTIFY_PLAYLIST: normalize_spotify,
    PlatformTag.APPLE_MUSIC_ALBUM: normalize_apple_music,
    PlatformTag.APPLE_MUSIC_PLAYLIST: normalize_apple_music,
    PlatformTag.APPLE_MUSIC_STATION: normalize_apple_music,
    PlatformTag.MIXCLOUD: normalize_mixcloud,
    PlatformTag.INSTAGRAM_REEL: normalize_instagram,
    PlatformTag.TIKTOK: normalize_tiktok,
}


def normalize(raw: str, tag: PlatformTag | str) -> str:
    """Return the canonical embeddable reference for *raw* under *tag*.

    Unknown tags and unmatched input return *raw* unchanged.
    """
    try:
        rule = NORMALIZERS.get(PlatformTag(tag))
    except ValueError:
        rule = None
    if rule is None:
        return raw
    return rule(raw)
