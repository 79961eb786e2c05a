"""Decide whether each collection shows example content or the user's own.

Every collection starts in PLACEHOLDER unless the loaded document already
holds items for it.  The first add flips it to LIVE for the rest of the
session, discarding the examples.  Nothing flips it back: an emptied
LIVE collection renders as empty with a prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from folio.content.examples import (
    EXAMPLE_MEDIA_ITEMS,
    EXAMPLE_SHOP_ITEMS,
    EXAMPLE_SPOTLIGHT_ITEMS,
)
from folio.content.models import ContentDocument

logger = logging.getLogger(__name__)


class Collection(StrEnum):
    SPOTLIGHT = "spotlight"
    MEDIA = "media"
    SHOP = "shop"


class CollectionState(StrEnum):
    PLACEHOLDER = "placeholder"
    LIVE = "live"


EXAMPLES: dict[Collection, Sequence[Any]] = {
    Collection.SPOTLIGHT: EXAMPLE_SPOTLIGHT_ITEMS,
    Collection.MEDIA: EXAMPLE_MEDIA_ITEMS,
    Collection.SHOP: EXAMPLE_SHOP_ITEMS,
}


def collection_items(document: ContentDocument, collection: Collection) -> list[Any]:
    """Return the document's list for *collection*."""
    if collection == Collection.SPOTLIGHT:
        return document.spotlight_items
    if collection == Collection.MEDIA:
        return document.media_items
    return document.shop_items


class ExampleReconciler:
    """Per-collection PLACEHOLDER/LIVE state owned by one editing session."""

    def __init__(self, states: dict[Collection, CollectionState] | None = None) -> None:
        self._states = {c: CollectionState.PLACEHOLDER for c in Collection}
        if states:
            self._states.update(states)

    @classmethod
    def from_document(cls, document: ContentDocument | None) -> ExampleReconciler:
        """Initial states: LIVE where the loaded collection is non-empty."""
        if document is None:
            return cls()
        return cls(
            {
                c: CollectionState.LIVE if collection_items(document, c) else CollectionState.PLACEHOLDER
                for c in Collection
            }
        )

    def state(self, collection: Collection) -> CollectionState:
        return self._states[collection]

    def is_live(self, collection: Collection) -> bool:
        return self._states[collection] is CollectionState.LIVE

    @property
    def states(self) -> dict[Collection, CollectionState]:
        return dict(self._states)

    def visible_items(self, collection: Collection, items: Sequence[Any]) -> list[Any]:
        """What the view should render for *collection*."""
        if self.is_live(collection):
            return list(items)
        return [item.model_copy() for item in EXAMPLES[collection]]

    def is_empty_live(self, collection: Collection, items: Sequence[Any]) -> bool:
        """True when the view should show an empty collection plus an add prompt."""
        return self.is_live(collection) and not items

    def on_add(self, collection: Collection, items: Sequence[Any], new_item: Any) -> list[Any]:
        """Return the collection after adding *new_item*.

        The first add in PLACEHOLDER starts a fresh collection containing
        only *new_item* and switches to LIVE.
        """
        if not self.is_live(collection):
            logger.debug("%s collection going live", collection.value)
            self._states[collection] = CollectionState.LIVE
            return [new_item]
        return [*items, new_item]
