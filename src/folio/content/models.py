"""Content domain models: pure Pydantic v2 data types.

The ContentDocument is the unit of persistence: one document per
identity holding the profile, the three item collections and the
sticker.  Field aliases match the persisted camelCase JSON layout; every
field has a default so documents written by older layouts still load.
"""

from __future__ import annotations

import uuid
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field

from folio.media.classifier import shop_platform
from folio.media.models import MediaItem


def generated_id() -> str:
    """Id for an item stored without one."""
    return f"item-{uuid.uuid4().hex[:12]}"


def _fill_missing_id(value: Any) -> Any:
    if value is None or value == "":
        return generated_id()
    return value


ItemId = Annotated[int | str, BeforeValidator(_fill_missing_id)]


class ShopPlatform(StrEnum):
    """Storefront platform of a shop item, inferred from its URL."""

    SHOPIFY = "shopify"
    ETSY = "etsy"
    GUMROAD = "gumroad"
    BIGCARTEL = "bigcartel"
    OTHER = "other"


class SocialLink(BaseModel):
    """A link to one of the user's social profiles."""

    platform: str = ""
    url: str = ""


class SectionVisibility(BaseModel):
    """Which optional sections are displayed on the profile page."""

    projects: bool = True
    media: bool = True
    shop: bool = True


class Profile(BaseModel):
    """The user's personal information and page settings."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "Your Name"
    title: str = "Artist / Producer / DJ"
    bio: str = (
        "Tell your story here! Share what makes you unique as an artist. "
        "This is where fans can learn more about your journey, inspirations, "
        "and creative process."
    )
    image: str = "/images/placeholder.png"
    social_links: list[SocialLink] = Field(default_factory=list, alias="socialLinks")
    section_visibility: SectionVisibility = Field(
        default_factory=SectionVisibility, alias="sectionVisibility"
    )
    spotlight_description: str = Field(default="", alias="spotlightDescription")


class SpotlightItem(BaseModel):
    """A featured entry in the spotlight gallery."""

    id: ItemId = Field(default_factory=generated_id)
    title: str = ""
    description: str = ""
    image: str = ""
    link: str = ""


class ShopItem(BaseModel):
    """A product linking out to an external storefront.

    ``platform`` is computed from ``store_url`` and cannot be set.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: ItemId = Field(default_factory=generated_id)
    title: str = ""
    store_url: str = Field(default="", alias="storeUrl")
    image: str = ""
    description: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def platform(self) -> ShopPlatform:
        return ShopPlatform(shop_platform(self.store_url))


class Sticker(BaseModel):
    """Decorative sticker shown on the profile."""

    enabled: bool = False
    image: str = ""


class ContentDocument(BaseModel):
    """Everything a user can edit, persisted as one unit."""

    model_config = ConfigDict(populate_by_name=True)

    profile: Profile = Field(default_factory=Profile)
    media_items: list[MediaItem] = Field(default_factory=list, alias="mediaItems")
    spotlight_items: list[SpotlightItem] = Field(default_factory=list, alias="spotlightItems")
    shop_items: list[ShopItem] = Field(default_factory=list, alias="shopItems")
    sticker: Sticker = Field(default_factory=Sticker)
