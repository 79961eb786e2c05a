"""Apply pasted media input to MediaItems.

Combines classification and normalization so that ``type`` and ``id``
are always written together.
"""

from __future__ import annotations

import logging

from folio.media.classifier import classify
from folio.media.models import MediaItem, PlatformTag
from folio.media.normalizer import normalize

logger = logging.getLogger(__name__)


def resolve_media(text: str) -> tuple[PlatformTag, str]:
    """Classify *text* and return ``(tag, reference)``.

    For unknown input the reference is the original text.
    """
    tag = classify(text)
    if tag is PlatformTag.UNKNOWN:
        return tag, text
    return tag, normalize(text, tag)


def apply_media_edit(item: MediaItem, raw: str) -> MediaItem:
    """Return *item* updated for a newly pasted URL or embed snippet.

    Unrecognized input leaves the item untouched rather than overwriting
    a working embed with garbage.
    """
    tag = classify(raw)
    if tag is PlatformTag.UNKNOWN:
        logger.info("Unrecognized media input, keeping existing item %r", item.id)
        return item
    return item.model_copy(update={"type": tag, "id": normalize(raw, tag), "raw_url": raw})


def new_media_item(raw: str, title: str | None = None) -> MediaItem | None:
    """Build a MediaItem from pasted input, or None when it is unrecognized."""
    tag, reference = resolve_media(raw)
    if tag is PlatformTag.UNKNOWN:
        return None
    return MediaItem(id=reference, type=tag, raw_url=raw, title=title)
