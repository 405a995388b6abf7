"""
Image loading for photos and logos.

Turns a URL, file path, data URL, raw bytes or PIL image into a decoded,
EXIF-upright bitmap. Fetching and decoding live here so the compositing
pipeline itself never touches the network or the filesystem.
"""
import base64
import binascii
import io
import logging
import os
from pathlib import Path
from typing import Union

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.config import get_settings
from ..errors import ImageLoadError

LOGGER = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray, Image.Image]


def _describe(source) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    text = str(source)
    if text.startswith('data:'):
        return text[:32] + '...'
    return text


def decode_image(data: bytes, source: str = None) -> Image.Image:
    """Decode image bytes fully and apply EXIF orientation."""
    # loading settings applies the configured pixel ceiling
    get_settings()
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        LOGGER.warning("could not decode image %s: %s", source or '<bytes>', exc)
        raise ImageLoadError(f"Cannot decode image: {exc}", source=source) from exc
    return ImageOps.exif_transpose(img)


def fetch_image_bytes(url: str, timeout: float = None) -> bytes:
    """Download an image, raising ImageLoadError on HTTP or network failure."""
    timeout = timeout or get_settings().REQUEST_TIMEOUT
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        LOGGER.warning("failed to fetch image %s: %s", url, exc)
        raise ImageLoadError(f"Cannot fetch image: {exc}", source=url) from exc
    return response.content


def load_image(image_source: ImageSource) -> Image.Image:
    """
    Load an image from various sources.

    Args:
        image_source: URL, file path, bytes, base64 data URL, or PIL Image

    Returns:
        PIL Image object
    """
    if isinstance(image_source, Image.Image):
        return image_source.copy()

    if isinstance(image_source, (bytes, bytearray)):
        return decode_image(bytes(image_source))

    if isinstance(image_source, Path):
        image_source = str(image_source)

    if isinstance(image_source, str):
        # base64 data URL
        if image_source.startswith('data:image'):
            try:
                base64_data = image_source.split(',', 1)[1]
                image_bytes = base64.b64decode(base64_data, validate=True)
            except (IndexError, binascii.Error) as exc:
                raise ImageLoadError(f"Malformed data URL: {exc}", source=_describe(image_source)) from exc
            return decode_image(image_bytes, source=_describe(image_source))

        if image_source.startswith(('http://', 'https://')):
            return decode_image(fetch_image_bytes(image_source), source=image_source)

        if os.path.exists(image_source):
            with open(image_source, 'rb') as f:
                return decode_image(f.read(), source=image_source)

    raise ImageLoadError(f"Cannot load image from: {_describe(image_source)}", source=_describe(image_source))
