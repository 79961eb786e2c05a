"""Editing session: the in-memory working copy of one user's content.

The session loads the stored document, decides per collection whether
example or user content is shown, applies edits, and schedules debounced
writes back to the store.  Each edit replaces only its own field or
collection on the working document, and the autosave snapshot is taken
synchronously at schedule time.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from folio.auth import AuthProvider, key_for
from folio.content.autosave import DEFAULT_INTERVAL, AutosaveController
from folio.content.examples import default_profile
from folio.content.models import (
    ContentDocument,
    SectionVisibility,
    ShopItem,
    SocialLink,
    SpotlightItem,
)
from folio.content.reconciler import Collection, ExampleReconciler, collection_items
from folio.content.store import ContentStore
from folio.content.validation import (
    ValidationResult,
    validate_bio,
    validate_name,
    validate_shop_field,
    validate_social_url,
    validate_spotlight_field,
    validate_title,
)
from folio.media.models import MediaItem
from folio.media.services import apply_media_edit
from folio.shared.errors import CropError, ImageUploadError, StorageWriteError
from folio.shared.images import (
    DEFAULT_QUALITY,
    CropArea,
    ImageSource,
    crop_to_data_url,
    file_to_data_url,
)

logger = logging.getLogger(__name__)

_FIELDS = {
    Collection.SPOTLIGHT: "spotlight_items",
    Collection.MEDIA: "media_items",
    Collection.SHOP: "shop_items",
}

# Media and shop sections hold at most this many items; spotlight is open-ended.
MAX_COLLECTION_ITEMS = 3
_CAPPED = (Collection.MEDIA, Collection.SHOP)

FieldCheck = Callable[[str, str], ValidationResult]

_PROFILE_CHECKS = {"name": validate_name, "title": validate_title, "bio": validate_bio}
_ITEM_CHECKS: dict[Collection, FieldCheck] = {
    Collection.SPOTLIGHT: validate_spotlight_field,
    Collection.SHOP: validate_shop_field,
}


def _check_profile_field(field: str, value: str) -> ValidationResult:
    check = _PROFILE_CHECKS.get(field)
    return check(value) if check else ValidationResult.ok()


def _check_index(collection: Collection, index: int, items: list[Any]) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"{collection.value} index {index} out of range")


def new_document() -> ContentDocument:
    """A document for a user with no stored content."""
    return ContentDocument(profile=default_profile())


def _updated(item: BaseModel, fields: dict[str, Any]) -> Any:
    unknown = set(fields) - set(type(item).model_fields)
    if unknown:
        raise ValueError(f"Cannot set {', '.join(sorted(unknown))} on {type(item).__name__}")
    return type(item).model_validate({**item.model_dump(), **fields})


class EditingSession:
    """Working copy of a ContentDocument bound to one store key."""

    def __init__(
        self,
        store: ContentStore,
        key: str,
        *,
        autosave_interval: float = DEFAULT_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
        jpeg_quality: float = DEFAULT_QUALITY,
        max_upload_bytes: int | None = None,
    ) -> None:
        self.store = store
        self.key = key
        self.jpeg_quality = jpeg_quality
        self.max_upload_bytes = max_upload_bytes
        self.document = new_document()
        self.reconciler = ExampleReconciler()
        self.errors: dict[str, str] = {}
        self.notices: list[str] = []
        self.autosave = AutosaveController(
            self._write,
            interval=autosave_interval,
            loop=loop,
            on_error=self._on_write_error,
        )

    @classmethod
    def open(cls, store: ContentStore, key: str, **kwargs: Any) -> EditingSession:
        """Create a session and load the stored document for *key*."""
        session = cls(store, key, **kwargs)
        session.load()
        return session

    @classmethod
    def for_provider(
        cls, store: ContentStore, provider: AuthProvider, **kwargs: Any
    ) -> EditingSession:
        """Open the session for the provider's current identity."""
        return cls.open(store, key_for(provider), **kwargs)

    # ── Lifecycle ────────────────────────────────────────────────

    def load(self) -> None:
        """Replace the working copy with the stored document, if any."""
        stored = self.store.load(self.key)
        self.document = stored if stored is not None else new_document()
        self.reconciler = ExampleReconciler.from_document(stored)
        logger.debug("Opened %s with states %s", self.key, self.reconciler.states)

    def save(self) -> bool:
        """Write the working copy now, superseding any pending autosave."""
        self.autosave.schedule(self.document)
        return self.autosave.flush()

    def close(self, *, discard: bool = False) -> None:
        """Flush (or discard) pending changes; no timer outlives the session."""
        if discard:
            self.autosave.cancel()
        else:
            self.autosave.flush()

    async def disconnect(self, provider: AuthProvider) -> None:
        """Flush pending changes, then sign the provider out."""
        self.close()
        await provider.disconnect_wallet()

    def reset(self) -> None:
        """Delete stored content and start over with example content."""
        self.autosave.cancel()
        try:
            self.store.delete(self.key)
        except StorageWriteError as exc:
            self._on_write_error(exc)
        self.document = new_document()
        self.reconciler = ExampleReconciler()
        self.errors.clear()
        logger.info("Reset content for %s", self.key)

    # ── View ─────────────────────────────────────────────────────

    def items(self, collection: Collection) -> list[Any]:
        """The user's own items for *collection*."""
        return collection_items(self.document, collection)

    def visible_items(self, collection: Collection) -> list[Any]:
        """Items the view renders: examples in PLACEHOLDER, user items in LIVE."""
        return self.reconciler.visible_items(collection, self.items(collection))

    def shows_add_prompt(self, collection: Collection) -> bool:
        return self.reconciler.is_empty_live(collection, self.items(collection))

    # ── Profile, sticker ─────────────────────────────────────────

    def update_profile(self, **fields: Any) -> bool:
        """Apply profile fields that pass validation.

        Rejected fields keep their stored value and record an error under
        ``profile.<field>``.  Returns False if any field was rejected.
        """
        links = fields.pop("social_links", None)
        accepted = self._accept("profile", fields, _check_profile_field)
        if accepted:
            self._replace(profile=_updated(self.document.profile, accepted))
        ok = len(accepted) == len(fields)
        if links is not None:
            ok = self.set_social_links([SocialLink.model_validate(link) for link in links]) and ok
        return ok

    def set_social_links(self, links: list[SocialLink]) -> bool:
        """Replace the social links if every URL suits its platform.

        Any invalid link leaves the stored list untouched and records an
        error under ``social_links.<index>``.
        """
        for key in [k for k in self.errors if k.startswith("social_links.")]:
            del self.errors[key]
        invalid: dict[str, str] = {}
        for i, link in enumerate(links):
            result = validate_social_url(link.platform, link.url)
            if not result.is_valid:
                invalid[f"social_links.{i}"] = result.message
        if invalid:
            self.errors.update(invalid)
            return False
        dumped = [link.model_dump() for link in links]
        self._replace(profile=_updated(self.document.profile, {"social_links": dumped}))
        return True

    def set_section_visibility(self, **flags: bool) -> None:
        visibility: SectionVisibility = _updated(self.document.profile.section_visibility, flags)
        self.update_profile(section_visibility=visibility.model_dump())

    def set_sticker(self, *, enabled: bool | None = None, image: str | None = None) -> None:
        fields: dict[str, Any] = {}
        if enabled is not None:
            fields["enabled"] = enabled
        if image is not None:
            fields["image"] = image
        self._replace(sticker=_updated(self.document.sticker, fields))

    # ── Collections ──────────────────────────────────────────────

    def add_spotlight_item(self, **fields: Any) -> SpotlightItem:
        item = SpotlightItem(id=self._new_id(Collection.SPOTLIGHT), **fields)
        self._add(Collection.SPOTLIGHT, item)
        return item

    def add_shop_item(self, **fields: Any) -> ShopItem | None:
        if self._is_full(Collection.SHOP):
            return None
        item = ShopItem(id=self._new_id(Collection.SHOP), **fields)
        self._add(Collection.SHOP, item)
        return item

    def add_media_item(self, raw: str = "", title: str | None = None) -> MediaItem | None:
        """Add a media item, resolving *raw* when it is recognized.

        Returns None when the section already holds MAX_COLLECTION_ITEMS.
        """
        if self._is_full(Collection.MEDIA):
            return None
        blank = MediaItem(id="", raw_url="", title=title)
        item = apply_media_edit(blank, raw) if raw else blank
        self._add(Collection.MEDIA, item)
        if raw and item is blank:
            self.errors[f"media.{len(self.items(Collection.MEDIA)) - 1}"] = "Unrecognized media link"
        return item

    def update_item(self, collection: Collection, index: int, **fields: Any) -> Any:
        """Mutate the item at *index* in place and return the new value.

        Media items only accept ``title`` here; their link goes through
        :meth:`edit_media_url` so ``type`` and ``id`` stay consistent.
        Spotlight and shop text fields that fail validation are left as
        they were, with the error under ``<collection>.<index>.<field>``.
        """
        collection = Collection(collection)
        if collection == Collection.MEDIA and set(fields) - {"title"}:
            raise ValueError("Media links must be changed with edit_media_url")
        items = list(self.items(collection))
        _check_index(collection, index, items)
        check = _ITEM_CHECKS.get(collection)
        if check is not None:
            fields = self._accept(f"{collection.value}.{index}", fields, check)
        if not fields:
            return items[index]
        items[index] = _updated(items[index], fields)
        self._replace(**{_FIELDS[collection]: items})
        return items[index]

    def remove_item(self, collection: Collection, index: int) -> None:
        collection = Collection(collection)
        items = self.items(collection)
        _check_index(collection, index, items)
        self.errors.pop(collection.value, None)
        self._replace(**{_FIELDS[collection]: [it for i, it in enumerate(items) if i != index]})

    def edit_media_url(self, index: int, raw: str) -> MediaItem:
        """Apply a pasted URL or embed snippet to the media item at *index*.

        Unrecognized input leaves the item as it was and records an inline
        error instead.
        """
        items = list(self.items(Collection.MEDIA))
        _check_index(Collection.MEDIA, index, items)
        current = items[index]
        updated = apply_media_edit(current, raw)
        error_key = f"media.{index}"
        if updated is current:
            self.errors[error_key] = "Unrecognized media link"
            return current
        self.errors.pop(error_key, None)
        items[index] = updated
        self._replace(media_items=items)
        return updated

    # ── Images ───────────────────────────────────────────────────

    def apply_cropped_image(
        self,
        target: str,
        source: ImageSource,
        crop: CropArea,
        *,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        index: int | None = None,
    ) -> bool:
        """Crop *source* into the image of *target* (``profile``, ``sticker``,
        ``spotlight`` or ``shop`` with *index*).

        On failure the error is recorded under the target and the previous
        image is kept.
        """
        error_key = target if index is None else f"{target}.{index}"
        try:
            data_url = crop_to_data_url(
                source, crop, scale_x=scale_x, scale_y=scale_y, quality=self.jpeg_quality
            )
        except CropError as exc:
            logger.warning("Crop failed for %s: %s", error_key, exc)
            self.errors[error_key] = str(exc)
            return False
        self.errors.pop(error_key, None)
        self._set_image(target, data_url, index)
        return True

    def upload_image(self, target: str, source: Path | bytes, *, index: int | None = None) -> bool:
        """Store an uploaded file as the image of *target*."""
        error_key = target if index is None else f"{target}.{index}"
        try:
            data_url = file_to_data_url(source, max_bytes=self.max_upload_bytes)
        except ImageUploadError as exc:
            self.errors[error_key] = str(exc)
            return False
        self.errors.pop(error_key, None)
        self._set_image(target, data_url, index)
        return True

    # ── Private helpers ──────────────────────────────────────────

    def _set_image(self, target: str, data_url: str, index: int | None) -> None:
        if target == "profile":
            self.update_profile(image=data_url)
        elif target == "sticker":
            self.set_sticker(image=data_url)
        elif target in (Collection.SPOTLIGHT, Collection.SHOP) and index is not None:
            self.update_item(Collection(target), index, image=data_url)
        else:
            raise ValueError(f"Unknown image target: {target}")

    def _accept(self, prefix: str, fields: dict[str, Any], check: FieldCheck) -> dict[str, Any]:
        """Return the subset of *fields* whose text values pass *check*."""
        accepted: dict[str, Any] = {}
        for field, value in fields.items():
            key = f"{prefix}.{field}"
            if isinstance(value, str):
                result = check(field, value)
                if not result.is_valid:
                    self.errors[key] = result.message
                    continue
            self.errors.pop(key, None)
            accepted[field] = value
        return accepted

    def _is_full(self, collection: Collection) -> bool:
        if collection in _CAPPED and len(self.items(collection)) >= MAX_COLLECTION_ITEMS:
            self.errors[collection.value] = f"You can add up to {MAX_COLLECTION_ITEMS} items"
            return True
        return False

    def _add(self, collection: Collection, item: Any) -> None:
        items = self.reconciler.on_add(collection, self.items(collection), item)
        self._replace(**{_FIELDS[collection]: items})

    def _replace(self, **fields: Any) -> None:
        self.document = self.document.model_copy(update=fields)
        self.autosave.schedule(self.document)

    def _new_id(self, collection: Collection) -> int:
        taken = {item.id for item in self.items(collection)}
        candidate = int(time.time() * 1000)
        while candidate in taken:
            candidate += 1
        return candidate

    def _write(self, document: ContentDocument) -> None:
        self.store.save(self.key, document)

    def _on_write_error(self, exc: StorageWriteError) -> None:
        self.notices.append(f"Changes could not be saved: {exc.reason}")
