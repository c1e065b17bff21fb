"""Staff photo normalization.

Photos arrive from the front-end as base64 (optionally as a data URL) and are
stored as 240x320 JPEG thumbnails, the same 3:4 shape the print layouts reserve.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..core.constants import (
    IMAGE_ACCEPTED_FORMATS,
    IMAGE_JPEG_QUALITY,
    IMAGE_MAX_BYTES,
    IMAGE_OUTPUT_SIZE,
)
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def strip_data_url(data: str) -> str:
    data = data.strip()
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data


def decode_photo(data: Optional[str]) -> Optional[bytes]:
    """Decode stored base64 photo data; invalid data yields None."""
    if not data:
        return None
    try:
        return base64.b64decode(strip_data_url(data), validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Ignoring undecodable photo data")
        return None


def _crop_to_aspect(img: Image.Image, width: int, height: int) -> Image.Image:
    target = width / height
    src_w, src_h = img.size
    if src_w / src_h > target:
        new_w = int(round(src_h * target))
        left = (src_w - new_w) // 2
        return img.crop((left, 0, left + new_w, src_h))
    new_h = int(round(src_w / target))
    top = (src_h - new_h) // 2
    return img.crop((0, top, src_w, top + new_h))


def normalize_photo(data: Optional[str]) -> Optional[str]:
    """Validate, centre-crop to 3:4 and resize a base64 photo.

    Returns base64 JPEG data (without a data URL prefix), or None when no
    photo was supplied.
    """
    if data is None or not str(data).strip():
        return None

    try:
        raw = base64.b64decode(strip_data_url(str(data)), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo is not valid base64 data")

    if len(raw) > IMAGE_MAX_BYTES:
        raise ValidationError("Photo must be smaller than 5MB")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            if img.format not in IMAGE_ACCEPTED_FORMATS:
                raise ValidationError("Photo must be a JPEG, PNG or WebP image")
            # Stored photos come back on every update; re-encoding would degrade them.
            if img.format == "JPEG" and img.mode == "RGB" and img.size == IMAGE_OUTPUT_SIZE:
                return base64.b64encode(raw).decode("ascii")
            width, height = IMAGE_OUTPUT_SIZE
            out = _crop_to_aspect(img.convert("RGB"), width, height)
            out = out.resize(IMAGE_OUTPUT_SIZE, Image.LANCZOS)
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Photo could not be read as an image")

    buf = io.BytesIO()
    out.save(buf, format="JPEG", quality=IMAGE_JPEG_QUALITY)
    return base64.b64encode(buf.getvalue()).decode("ascii")
