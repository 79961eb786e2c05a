"""Tests for applying pasted input to media items."""

from folio.media.models import MediaItem, PlatformTag
from folio.media.services import apply_media_edit, new_media_item, resolve_media


class TestResolveMedia:
    def test_youtube_end_to_end(self):
        assert resolve_media("https://youtu.be/dQw4w9WgXcQ") == (PlatformTag.YOUTUBE, "dQw4w9WgXcQ")

    def test_apple_music_end_to_end(self):
        tag, reference = resolve_media("https://music.apple.com/us/album/name/1234567890")
        assert tag == PlatformTag.APPLE_MUSIC_ALBUM
        assert reference == "https://embed.music.apple.com/us/album/1234567890"

    def test_mixed_case_host_end_to_end(self):
        tag, reference = resolve_media("https://Open.Spotify.com/Playlist/37i9dQZEVXbMDoHDwVN2tF")
        assert tag == PlatformTag.SPOTIFY_PLAYLIST
        assert reference == "https://open.spotify.com/embed/playlist/37i9dQZEVXbMDoHDwVN2tF"

    def test_unknown_keeps_text(self):
        assert resolve_media("garbage not a url") == (PlatformTag.UNKNOWN, "garbage not a url")


class TestApplyMediaEdit:
    def test_updates_type_id_and_raw_url_together(self):
        item = MediaItem(id="", type=PlatformTag.YOUTUBE, raw_url="", title="My mix")
        raw = "https://open.spotify.com/playlist/37i9dQZEVXbMDoHDwVN2tF?si=1"

        updated = apply_media_edit(item, raw)

        assert updated.type == PlatformTag.SPOTIFY_PLAYLIST
        assert updated.id == "https://open.spotify.com/embed/playlist/37i9dQZEVXbMDoHDwVN2tF"
        assert updated.raw_url == raw
        assert updated.title == "My mix"

    def test_does_not_mutate_original(self):
        item = MediaItem(id="", raw_url="")
        apply_media_edit(item, "https://youtu.be/dQw4w9WgXcQ")
        assert item.id == ""

    def test_unknown_leaves_item_unchanged(self):
        item = MediaItem(
            id="dQw4w9WgXcQ", type=PlatformTag.YOUTUBE, raw_url="https://youtu.be/dQw4w9WgXcQ"
        )

        updated = apply_media_edit(item, "garbage not a url")

        assert updated is item
        assert updated.id == "dQw4w9WgXcQ"
        assert updated.type == PlatformTag.YOUTUBE
        assert updated.raw_url == "https://youtu.be/dQw4w9WgXcQ"

    def test_unknown_skips_normalization(self, monkeypatch):
        def fail(raw, tag):
            raise AssertionError("normalize should not run for unknown input")

        monkeypatch.setattr("folio.media.services.normalize", fail)
        item = MediaItem(id="abc", type=PlatformTag.MIXCLOUD, raw_url="r")
        assert apply_media_edit(item, "garbage not a url") is item
        assert resolve_media("garbage not a url") == (PlatformTag.UNKNOWN, "garbage not a url")

    def test_iframe_snippet_keeps_snippet_as_raw_url(self):
        snippet = '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>'
        updated = apply_media_edit(MediaItem(), snippet)
        assert updated.id == "dQw4w9WgXcQ"
        assert updated.raw_url == snippet


class TestNewMediaItem:
    def test_recognized(self):
        item = new_media_item("https://www.tiktok.com/@a/video/123", title="Clip")
        assert item is not None
        assert item.type == PlatformTag.TIKTOK
        assert item.title == "Clip"

    def test_unrecognized(self):
        assert new_media_item("nope") is None


class TestMediaItemSerialization:
    def test_dumps_raw_url_alias(self):
        data = MediaItem(id="x", raw_url="y").model_dump(by_alias=True)
        assert data["rawUrl"] == "y"
        assert "raw_url" not in data

    def test_accepts_alias_on_input(self):
        item = MediaItem.model_validate({"id": "x", "type": "mixcloud", "rawUrl": "y"})
        assert item.raw_url == "y"
        assert item.type == PlatformTag.MIXCLOUD
