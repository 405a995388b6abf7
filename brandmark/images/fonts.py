"""
Bold font lookup for watermark text.
"""
import logging
import os
import sys
from functools import lru_cache
from typing import Optional, Union

from PIL import ImageFont

from ..core.config import get_settings

LOGGER = logging.getLogger(__name__)

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def _system_bold_candidates() -> list:
    if sys.platform == "win32":
        return ["C:/Windows/Fonts/arialbd.ttf", "C:/Windows/Fonts/segoeuib.ttf"]
    if sys.platform == "darwin":
        return [
            "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
            "/Library/Fonts/Arial Bold.ttf",
            "/System/Library/Fonts/Helvetica.ttc",
        ]
    return [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf",
    ]


def find_bold_font() -> Optional[str]:
    """Configured font if it exists, else the first system bold font found."""
    configured = get_settings().FONT_PATH
    if configured is not None:
        if configured.exists():
            return str(configured)
        LOGGER.warning("configured font %s not found, falling back to system fonts", configured)
    for path in _system_bold_candidates():
        if os.path.exists(path):
            return path
    return None


@lru_cache(maxsize=64)
def _load_font(path: Optional[str], size: float) -> FontType:
    if path:
        return ImageFont.truetype(path, size)
    return ImageFont.load_default(size)


def get_bold_font(size: float) -> FontType:
    """Load (cached) the bold watermark font at a pixel size."""
    return _load_font(find_bold_font(), float(size))
