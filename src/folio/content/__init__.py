"""Content domain: profile content models, persistence and reconciliation.

Provides the ContentDocument aggregate, a JSON-backed ContentStore keyed
by identity, the example-content reconciler and the debounced autosave
controller that writes the editor's working copy back to the store.
"""

from folio.content.autosave import AutosaveController
from folio.content.models import (
    ContentDocument,
    Profile,
    SectionVisibility,
    ShopItem,
    ShopPlatform,
    SocialLink,
    SpotlightItem,
    Sticker,
)
from folio.content.reconciler import Collection, CollectionState, ExampleReconciler
from folio.content.store import ANONYMOUS_KEY, ContentStore, storage_key

__all__ = [
    "ANONYMOUS_KEY",
    "AutosaveController",
    "Collection",
    "CollectionState",
    "ContentDocument",
    "ContentStore",
    "ExampleReconciler",
    "Profile",
    "SectionVisibility",
    "ShopItem",
    "ShopPlatform",
    "SocialLink",
    "SpotlightItem",
    "Sticker",
    "storage_key",
]
