"""Media domain: classify pasted media input and normalize it for embedding."""

from folio.media.classifier import (
    classify,
    clean_url,
    display_name,
    extract_iframe_src,
    shop_platform,
)
from folio.media.models import MediaItem, PlatformTag
from folio.media.normalizer import normalize
from folio.media.services import apply_media_edit, new_media_item, resolve_media

__all__ = [
    "MediaItem",
    "PlatformTag",
    "apply_media_edit",
    "classify",
    "clean_url",
    "display_name",
    "extract_iframe_src",
    "new_media_item",
    "normalize",
    "resolve_media",
    "shop_platform",
]
