#!/usr/bin/env python3
import base64
import io
import logging
from typing import Tuple

from PIL import Image

logger = logging.getLogger(__name__)

JPEG_QUALITY = 80


def downscale(image: Image.Image, max_dimension: int) -> Image.Image:
    if image.width <= max_dimension and image.height <= max_dimension:
        return image

    scale = max_dimension / max(image.width, image.height)
    new_size = (int(image.width * scale), int(image.height * scale))
    logger.debug("Downscaling page image %sx%s -> %sx%s", image.width, image.height, *new_size)
    return image.resize(new_size, Image.Resampling.LANCZOS)


def encode_jpeg_base64(image: Image.Image, max_dimension: int = 2048) -> Tuple[str, str]:
    """Encode a page image as base64 JPEG.

    Returns:
        (media_type, base64_data) without a data URI prefix
    """
    image = downscale(image, max_dimension)
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffered = io.BytesIO()
    image.save(buffered, format="JPEG", quality=JPEG_QUALITY)
    img_bytes = buffered.getvalue()
    img_b64 = base64.b64encode(img_bytes).decode('utf-8')

    logger.debug("Encoded page image: %d bytes, base64 length %d", len(img_bytes), len(img_b64))
    return "image/jpeg", img_b64


def to_data_url(media_type: str, data: str) -> str:
    return f"data:{media_type};base64,{data}"
