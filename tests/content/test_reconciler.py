"""Tests for the example/user content reconciler."""

from folio.content.examples import EXAMPLE_MEDIA_ITEMS, EXAMPLE_SHOP_ITEMS, EXAMPLE_SPOTLIGHT_ITEMS
from folio.content.models import ContentDocument, ShopItem, SpotlightItem
from folio.content.reconciler import (
    Collection,
    CollectionState,
    ExampleReconciler,
    collection_items,
)
from folio.media.models import MediaItem, PlatformTag


def _spotlight(item_id: int) -> SpotlightItem:
    return SpotlightItem(id=item_id, title=f"Item {item_id}")


class TestInitialState:
    def test_no_document_is_placeholder_everywhere(self):
        reconciler = ExampleReconciler.from_document(None)
        assert all(s is CollectionState.PLACEHOLDER for s in reconciler.states.values())

    def test_empty_collections_are_placeholder(self):
        reconciler = ExampleReconciler.from_document(ContentDocument())
        for collection in Collection:
            assert reconciler.state(collection) is CollectionState.PLACEHOLDER

    def test_persisted_spotlight_arrays(self):
        empty = ContentDocument.model_validate({"spotlightItems": []})
        one = ContentDocument.model_validate({"spotlightItems": [{"id": 1, "title": "Show"}]})

        assert ExampleReconciler.from_document(empty).state(Collection.SPOTLIGHT) is (
            CollectionState.PLACEHOLDER
        )
        assert ExampleReconciler.from_document(one).state(Collection.SPOTLIGHT) is (
            CollectionState.LIVE
        )

    def test_stored_items_make_collection_live(self):
        doc = ContentDocument(shop_items=[ShopItem(id=1, title="Tee")])
        reconciler = ExampleReconciler.from_document(doc)

        assert reconciler.is_live(Collection.SHOP)
        assert not reconciler.is_live(Collection.SPOTLIGHT)
        assert not reconciler.is_live(Collection.MEDIA)


class TestVisibleItems:
    def test_placeholder_shows_examples(self):
        reconciler = ExampleReconciler()
        visible = reconciler.visible_items(Collection.SPOTLIGHT, [])
        assert visible == list(EXAMPLE_SPOTLIGHT_ITEMS)

    def test_placeholder_returns_copies(self):
        reconciler = ExampleReconciler()
        visible = reconciler.visible_items(Collection.MEDIA, [])
        assert visible[0] == EXAMPLE_MEDIA_ITEMS[0]
        assert visible[0] is not EXAMPLE_MEDIA_ITEMS[0]

    def test_live_shows_user_items(self):
        items = [_spotlight(1)]
        reconciler = ExampleReconciler({Collection.SPOTLIGHT: CollectionState.LIVE})
        assert reconciler.visible_items(Collection.SPOTLIGHT, items) == items

    def test_user_and_example_items_never_mix(self):
        reconciler = ExampleReconciler()
        items = reconciler.on_add(Collection.SHOP, [], ShopItem(id=1, title="Mine"))
        visible = reconciler.visible_items(Collection.SHOP, items)
        assert [item.title for item in visible] == ["Mine"]
        assert not any(item in visible for item in EXAMPLE_SHOP_ITEMS)


class TestOnAdd:
    def test_first_add_replaces_examples(self):
        reconciler = ExampleReconciler()
        new = _spotlight(10)

        items = reconciler.on_add(Collection.SPOTLIGHT, [], new)

        assert items == [new]
        assert reconciler.state(Collection.SPOTLIGHT) is CollectionState.LIVE

    def test_first_add_ignores_stale_items(self):
        reconciler = ExampleReconciler()
        new = _spotlight(10)
        items = reconciler.on_add(Collection.SPOTLIGHT, list(EXAMPLE_SPOTLIGHT_ITEMS), new)
        assert items == [new]

    def test_live_add_appends(self):
        reconciler = ExampleReconciler({Collection.SPOTLIGHT: CollectionState.LIVE})
        first, second = _spotlight(1), _spotlight(2)

        items = reconciler.on_add(Collection.SPOTLIGHT, [first], second)

        assert items == [first, second]

    def test_add_affects_only_its_collection(self):
        reconciler = ExampleReconciler()
        media = MediaItem(id="abc", type=PlatformTag.MIXCLOUD, raw_url="r")
        reconciler.on_add(Collection.MEDIA, [], media)

        assert reconciler.is_live(Collection.MEDIA)
        assert not reconciler.is_live(Collection.SPOTLIGHT)
        assert not reconciler.is_live(Collection.SHOP)


class TestEmptyLive:
    def test_removing_last_item_stays_live(self):
        reconciler = ExampleReconciler()
        reconciler.on_add(Collection.SPOTLIGHT, [], _spotlight(1))

        # The caller removes the only item; nothing flips the state back.
        assert reconciler.is_live(Collection.SPOTLIGHT)
        assert reconciler.visible_items(Collection.SPOTLIGHT, []) == []
        assert reconciler.is_empty_live(Collection.SPOTLIGHT, [])

    def test_placeholder_is_not_empty_live(self):
        assert not ExampleReconciler().is_empty_live(Collection.SHOP, [])

    def test_live_with_items_is_not_empty(self):
        reconciler = ExampleReconciler({Collection.SHOP: CollectionState.LIVE})
        assert not reconciler.is_empty_live(Collection.SHOP, [ShopItem(id=1)])


class TestCollectionItems:
    def test_maps_to_document_lists(self):
        doc = ContentDocument(spotlight_items=[_spotlight(1)])
        assert collection_items(doc, Collection.SPOTLIGHT) is doc.spotlight_items
        assert collection_items(doc, Collection.MEDIA) is doc.media_items
        assert collection_items(doc, Collection.SHOP) is doc.shop_items

    def test_accepts_plain_strings(self):
        doc = ContentDocument(spotlight_items=[_spotlight(1)])
        assert collection_items(doc, "spotlight") is doc.spotlight_items
