"""Platform classification for pasted media URLs and embed snippets.

Classification is purely syntactic: case-insensitive substring matching
against ordered domain tables.  The same table-driven matcher also infers
shop storefront platforms from store URLs.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from urllib.parse import urlsplit

from folio.media.models import PlatformTag

logger = logging.getLogger(__name__)

_IFRAME_RE = re.compile(r"<iframe\b", re.IGNORECASE)
_SRC_RE = re.compile(r"""\bsrc\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)
_SCHEME_ARTIFACT_RE = re.compile(r"^h+ttp(s?)://", re.IGNORECASE)

# A rule is (domain needles, resolver).  The resolver receives the lowercased
# text and returns a tag, or None to fall through to the next rule.
Rule = tuple[Sequence[str], Callable[[str], str | None]]


def _instagram(text: str) -> PlatformTag | None:
    if "/reel/" in text or "/p/" in text or "utm_source=ig_web_copy_link" in text:
        return PlatformTag.INSTAGRAM_REEL
    return None


def _soundcloud(text: str) -> PlatformTag:
    if "/sets/" in text:
        return PlatformTag.SOUNDCLOUD_PLAYLIST
    return PlatformTag.SOUNDCLOUD


def _spotify(text: str) -> PlatformTag:
    if "/playlist/" in text or ":playlist:" in text:
        return PlatformTag.SPOTIFY_PLAYLIST
    return PlatformTag.SPOTIFY


def _apple_music(text: str) -> PlatformTag:
    if "/album/" in text:
        return PlatformTag.APPLE_MUSIC_ALBUM
    if "/playlist/" in text:
        return PlatformTag.APPLE_MUSIC_PLAYLIST
    return PlatformTag.APPLE_MUSIC_STATION


def _const(tag: str) -> Callable[[str], str]:
    return lambda _text: tag


MEDIA_RULES: list[Rule] = [
    (("instagram.com",), _instagram),
    (("mixcloud.com",), _const(PlatformTag.MIXCLOUD)),
    (("youtube.com", "youtu.be", "youtube-nocookie.com"), _const(PlatformTag.YOUTUBE)),
    (("soundcloud.com",), _soundcloud),
    (("spotify.com", "spotify:"), _spotify),
    (("music.apple.com",), _apple_music),
    (("tiktok.com",), _const(PlatformTag.TIKTOK)),
]

SHOP_RULES: list[Rule] = [
    (("shopify.com", "myshopify.com"), _const("shopify")),
    (("etsy.com",), _const("etsy")),
    (("gumroad.com",), _const("gumroad")),
    (("bigcartel.com",), _const("bigcartel")),
]

DISPLAY_NAMES: list[tuple[Sequence[str], str]] = [
    (("youtube.com", "youtu.be"), "YouTube"),
    (("spotify.com",), "Spotify"),
    (("soundcloud.com",), "SoundCloud"),
    (("apple.com",), "Apple Music"),
    (("mixcloud.com",), "Mixcloud"),
    (("tidal.com",), "Tidal"),
    (("bandcamp.com",), "Bandcamp"),
]


def clean_url(text: str) -> str:
    """Strip paste artifacts: whitespace, a leading ``@``, duplicated scheme letters."""
    cleaned = text.strip()
    if cleaned.startswith("@"):
        cleaned = cleaned[1:].lstrip()
    return _SCHEME_ARTIFACT_RE.sub(lambda m: f"http{m.group(1).lower()}://", cleaned)


def is_iframe(text: str) -> bool:
    return bool(_IFRAME_RE.search(text))


def extract_iframe_src(text: str) -> str | None:
    """Return the ``src`` attribute of the first iframe in *text*, if any."""
    match = _IFRAME_RE.search(text)
    if match is None:
        return None
    src = _SRC_RE.search(text, match.end())
    if src is None:
        return None
    return src.group(1) if src.group(1) is not None else src.group(2)


def match_domain(text: str, rules: Sequence[Rule], default: str) -> str:
    """Return the first rule result whose domain needle occurs in *text*."""
    lowered = text.lower()
    for needles, resolve in rules:
        if any(needle in lowered for needle in needles):
            result = resolve(lowered)
            if result is not None:
                return result
    return default


def classify(text: str) -> PlatformTag:
    """Classify pasted text into a platform tag.

    Iframe snippets are classified by their ``src`` attribute.  Always
    returns a tag; ``PlatformTag.UNKNOWN`` when nothing matches.
    """
    if not text or not text.strip():
        return PlatformTag.UNKNOWN
    target = text
    if is_iframe(text):
        src = extract_iframe_src(text)
        if src is None:
            logger.debug("Iframe snippet without src attribute")
            return PlatformTag.UNKNOWN
        target = src
    tag = PlatformTag(match_domain(clean_url(target), MEDIA_RULES, PlatformTag.UNKNOWN))
    if tag is PlatformTag.UNKNOWN:
        logger.debug("No platform matched for %r", target[:80])
    return tag


def shop_platform(store_url: str) -> str:
    """Infer the storefront platform of a shop item from its URL."""
    return match_domain(store_url or "", SHOP_RULES, "other")


def display_name(url: str) -> str:
    """Human-readable service name for a link, e.g. ``"Spotify"``."""
    try:
        hostname = urlsplit(clean_url(url)).hostname or ""
    except ValueError:
        hostname = ""
    if not hostname:
        return "Link"
    for needles, name in DISPLAY_NAMES:
        if any(needle in hostname for needle in needles):
            return name
    return hostname.removeprefix("www.").split(".")[0]
