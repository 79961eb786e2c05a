"""Image helpers for profile, gallery and sticker pictures.

Uses Pillow to crop a user-selected region into a JPEG data URL and to
turn uploaded files into data URLs that can be stored inline in the
content document.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

from PIL import Image
from pydantic import BaseModel

from folio.content.validation import validate_image_upload
from folio.shared.errors import CropError, ImageUploadError

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 0.9
DATA_URL_PREFIX = "data:"

ImageSource = str | bytes | Path | Image.Image


class CropArea(BaseModel):
    """Crop rectangle in on-screen (displayed) pixels."""

    x: float
    y: float
    width: float
    height: float


def decode_data_url(data_url: str) -> bytes:
    """Return the payload bytes of a base64 ``data:`` URL."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith(DATA_URL_PREFIX) or ";base64" not in header:
        raise ValueError("not a base64 data URL")
    return base64.b64decode(payload, validate=True)


def encode_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def open_image(source: ImageSource) -> Image.Image:
    """Open a data URL, raw bytes, file path or PIL image.

    Raises CropError when the source cannot be decoded.
    """
    if isinstance(source, Image.Image):
        return source
    try:
        if isinstance(source, str) and source.startswith(DATA_URL_PREFIX):
            source = decode_data_url(source)
        if isinstance(source, bytes):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(Path(source))
        image.load()
    except (OSError, ValueError, binascii.Error) as exc:
        raise CropError(f"Could not decode image: {exc}") from exc
    return image


def crop_to_data_url(
    source: ImageSource,
    crop: CropArea,
    *,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
    quality: float = DEFAULT_QUALITY,
) -> str:
    """Crop *source* to *crop* and return a JPEG data URL.

    ``scale_x``/``scale_y`` are the natural-to-displayed size ratios of the
    image; the crop rectangle is scaled by them before sampling and the
    result has the on-screen crop size.

    Raises CropError if the image cannot be decoded or the crop is empty.
    """
    if crop.width <= 0 or crop.height <= 0:
        raise CropError("Crop area must have a positive width and height")
    if scale_x <= 0 or scale_y <= 0:
        raise CropError("Scale factors must be positive")

    image = open_image(source)
    left = max(0.0, crop.x * scale_x)
    top = max(0.0, crop.y * scale_y)
    right = min(float(image.width), (crop.x + crop.width) * scale_x)
    bottom = min(float(image.height), (crop.y + crop.height) * scale_y)
    if right <= left or bottom <= top:
        raise CropError("Crop area lies outside the image")

    box = (round(left), round(top), round(right), round(bottom))
    size = (max(1, round(crop.width)), max(1, round(crop.height)))
    region = image.crop(box)
    if region.size != size:
        region = region.resize(size, Image.Resampling.LANCZOS)
    if region.mode != "RGB":
        region = region.convert("RGB")

    buffer = io.BytesIO()
    try:
        region.save(buffer, format="JPEG", quality=round(quality * 100))
    except (OSError, ValueError) as exc:
        raise CropError(f"Could not encode cropped image: {exc}") from exc
    logger.debug("Cropped %s from %sx%s image to %sx%s", box, image.width, image.height, *size)
    return encode_data_url(buffer.getvalue(), "image/jpeg")


def file_to_data_url(source: Path | bytes, *, max_bytes: int | None = None) -> str:
    """Convert an uploaded image file to a data URL.

    Raises ImageUploadError for unsupported types or files larger than
    *max_bytes* (5 MB when not given).
    """
    data = source if isinstance(source, bytes) else Path(source).read_bytes()
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format or ""
    except OSError as exc:
        raise ImageUploadError("Please upload an image file") from exc
    mime_type = Image.MIME.get(image_format, "")
    result = validate_image_upload(mime_type, len(data), max_bytes)
    if not result.is_valid:
        raise ImageUploadError(result.message)
    return encode_data_url(data, mime_type)
