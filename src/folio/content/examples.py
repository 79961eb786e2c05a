"""Built-in example content shown before a user adds their own items."""

from __future__ import annotations

from folio.content.models import Profile, ShopItem, SocialLink, SpotlightItem
from folio.media.models import MediaItem, PlatformTag

EXAMPLE_SPOTLIGHT_ITEMS: tuple[SpotlightItem, ...] = (
    SpotlightItem(
        id="example-1",
        title="Latest Release",
        description="Check out my new track available on all platforms",
        image="/images/featured-artist-placeholder.jpg",
        link="https://example.com/latest-release",
    ),
    SpotlightItem(
        id="example-2",
        title="Upcoming Shows",
        description="See where I'm performing next and get tickets",
        image="/images/next-event-placeholder.jpg",
        link="https://example.com/tour-dates",
    ),
    SpotlightItem(
        id="example-3",
        title="New Collaboration",
        description="A special project with amazing artists",
        image="/images/latest-project-placeholder.jpg",
        link="https://example.com/collaboration",
    ),
)

EXAMPLE_MEDIA_ITEMS: tuple[MediaItem, ...] = (
    MediaItem(
        id="coh2TB6B2EA",
        type=PlatformTag.YOUTUBE,
        raw_url="https://youtu.be/coh2TB6B2EA",
    ),
    MediaItem(
        id="https://open.spotify.com/embed/playlist/37i9dQZEVXbMDoHDwVN2tF",
        type=PlatformTag.SPOTIFY_PLAYLIST,
        raw_url="https://open.spotify.com/playlist/37i9dQZEVXbMDoHDwVN2tF?si=3Puyx2VJSxSoKu6tNk5KkA",
    ),
)

EXAMPLE_SHOP_ITEMS: tuple[ShopItem, ...] = (
    ShopItem(
        id="example-1",
        title="Limited Edition Merch",
        description="Exclusive merchandise from the latest tour",
        image="/images/shop-placeholder.jpg",
        store_url="https://example.com/merch/limited-edition",
    ),
    ShopItem(
        id="example-2",
        title="Digital Album",
        description="Download my latest album in high quality",
        image="/images/digital-album-placeholder.jpg",
        store_url="https://example.gumroad.com/l/digital-album",
    ),
)


def default_profile() -> Profile:
    """A fresh profile with placeholder text and sample social links."""
    return Profile(
        social_links=[
            SocialLink(platform="twitter", url="https://twitter.com/example"),
            SocialLink(platform="instagram", url="https://instagram.com/example"),
        ]
    )
