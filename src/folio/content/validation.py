"""Field validation for profile content.

Validators return a ValidationResult instead of raising so the editor can
show the message inline next to the field.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
ITEM_TITLE_MAX_LENGTH = 80
ITEM_DESCRIPTION_MAX_LENGTH = 180
MAX_IMAGE_BYTES = 5 * 1024 * 1024
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})

SOCIAL_DOMAINS: dict[str, tuple[tuple[str, ...], str]] = {
    "youtube": (("youtube.com", "youtu.be"), "YouTube"),
    "spotify": (("spotify.com",), "Spotify"),
    "soundcloud": (("soundcloud.com",), "SoundCloud"),
    "twitter": (("twitter.com", "x.com"), "Twitter/X"),
    "instagram": (("instagram.com",), "Instagram"),
    "linkedin": (("linkedin.com",), "LinkedIn"),
    "tiktok": (("tiktok.com",), "TikTok"),
}


class ValidationResult(BaseModel):
    """Outcome of validating one field."""

    is_valid: bool = True
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> ValidationResult:
        return cls(is_valid=True, message=message)

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        return cls(is_valid=False, message=message)


def is_valid_url(value: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _check_length(label: str, value: str, *, required: bool, maximum: int) -> ValidationResult:
    if required and not value.strip():
        return ValidationResult.fail(f"{label} is required")
    if len(value) > maximum:
        return ValidationResult.fail(f"{label} must be no more than {maximum} characters long")
    return ValidationResult.ok()


# ── Profile ──────────────────────────────────────────────────────


def validate_name(name: str) -> ValidationResult:
    if not name.strip():
        return ValidationResult.fail("Name is required")
    if len(name) < NAME_MIN_LENGTH:
        return ValidationResult.fail(
            f"Name must be at least {NAME_MIN_LENGTH} characters long"
        )
    return _check_length("Name", name, required=True, maximum=NAME_MAX_LENGTH)


def validate_title(title: str) -> ValidationResult:
    return _check_length("Title", title, required=True, maximum=TITLE_MAX_LENGTH)


def validate_bio(bio: str) -> ValidationResult:
    return _check_length("Bio", bio, required=True, maximum=BIO_MAX_LENGTH)


def validate_profile_fields(name: str, title: str, bio: str) -> dict[str, ValidationResult]:
    """Validate the three free-text profile fields at once."""
    return {
        "name": validate_name(name),
        "title": validate_title(title),
        "bio": validate_bio(bio),
    }


def validate_social_url(platform: str, url: str) -> ValidationResult:
    """Check a social link URL, including its domain for known platforms."""
    if not url.strip():
        return ValidationResult.fail("URL is required")
    if not is_valid_url(url):
        return ValidationResult.fail("Please enter a valid URL")
    known = SOCIAL_DOMAINS.get(platform.lower())
    if known is not None:
        domains, label = known
        if not any(domain in url.lower() for domain in domains):
            return ValidationResult.fail(f"Please enter a valid {label} URL")
    return ValidationResult.ok()


# ── Gallery items ────────────────────────────────────────────────


def validate_spotlight_field(field: str, value: str) -> ValidationResult:
    if field == "title":
        return _check_length("Title", value, required=True, maximum=ITEM_TITLE_MAX_LENGTH)
    if field == "description":
        return _check_length(
            "Description", value, required=True, maximum=ITEM_DESCRIPTION_MAX_LENGTH
        )
    if field == "link" and value.strip() and not is_valid_url(value):
        return ValidationResult.fail("Please enter a valid URL")
    return ValidationResult.ok()


def validate_shop_field(field: str, value: str) -> ValidationResult:
    if field == "title":
        return _check_length("Title", value, required=False, maximum=ITEM_TITLE_MAX_LENGTH)
    if field == "description":
        return _check_length(
            "Description", value, required=False, maximum=ITEM_DESCRIPTION_MAX_LENGTH
        )
    if field in ("store_url", "storeUrl") and value.strip():
        if is_valid_url(value):
            return ValidationResult.ok()
        if "://" not in value and is_valid_url(f"https://{value.strip()}"):
            return ValidationResult.ok("Consider adding https:// for proper URL format")
        return ValidationResult.fail("Please enter a valid URL (e.g., https://example.com)")
    return ValidationResult.ok()


# ── Uploads ──────────────────────────────────────────────────────


def _megabytes(size: int) -> str:
    return f"{size / (1024 * 1024):g}"


def validate_image_upload(
    mime_type: str, size: int, max_bytes: int | None = None
) -> ValidationResult:
    """Accept JPEG, PNG, GIF and WebP images up to *max_bytes* (5 MB by default)."""
    limit = MAX_IMAGE_BYTES if max_bytes is None else max_bytes
    if mime_type not in IMAGE_MIME_TYPES:
        return ValidationResult.fail("Please upload a valid image (JPEG, PNG, GIF, or WebP)")
    if size > limit:
        return ValidationResult.fail(f"Image must be less than {_megabytes(limit)}MB")
    return ValidationResult.ok()
