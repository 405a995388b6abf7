"""
Pillow-backed raster surface.

All drawing goes through RasterSurface. Every call takes its own
parameters (opacity, rotation, font, color); the surface keeps no
drawing state between calls.
"""
import io
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageDraw, features

from ..core.config import get_settings
from ..errors import RasterBackendUnavailable
from ..models.options import OutputFormat
from .geometry import clamp, round_half_up


MODE = 'RGBA'
TRANSPARENT = (0, 0, 0, 0)

# Pillow features each output format needs
_FORMAT_FEATURES = {
    OutputFormat.JPEG: ('jpg',),
    OutputFormat.PNG: ('zlib',),
    OutputFormat.WEBP: ('webp',),
}


def require_backend(output_format: OutputFormat) -> None:
    """Fail fast if this Pillow build cannot draw and encode the format."""
    missing = [name for name in _FORMAT_FEATURES[output_format] if not features.check(name)]
    if missing:
        raise RasterBackendUnavailable(
            f"Pillow is missing {', '.join(missing)} support required for {output_format.value} output"
        )


def resampling_filter() -> Image.Resampling:
    return Image.Resampling[get_settings().RESAMPLING]


def normalize_mode(img: Image.Image) -> Image.Image:
    """Bring any decoded mode (P, L, LA, 1, CMYK, I;16...) to RGBA."""
    if img.mode == MODE:
        return img
    if img.mode in ('CMYK', 'I', 'I;16', 'F'):
        img = img.convert('RGB')
    return img.convert(MODE)


def fade(img: Image.Image, opacity: float) -> Image.Image:
    """Copy of an RGBA image with its alpha channel multiplied by opacity."""
    opacity = clamp(opacity, 0.0, 1.0)
    if opacity >= 1.0:
        return img
    faded = img.copy()
    alpha = faded.getchannel('A').point(lambda p: round_half_up(p * opacity))
    faded.putalpha(alpha)
    return faded


@dataclass(frozen=True)
class Stamp:
    """
    An overlay prepared for repeated placement: already faded and rotated.

    box_width/box_height are the unrotated overlay size. Placing the stamp
    for a box at (x, y) centers the rotated image on the box center, so
    rotation never moves an instance's centroid.
    """
    image: Image.Image
    box_width: int
    box_height: int

    def origin_for(self, x: float, y: float) -> Tuple[int, int]:
        cx = x + self.box_width / 2
        cy = y + self.box_height / 2
        return (
            round_half_up(cx - self.image.width / 2),
            round_half_up(cy - self.image.height / 2),
        )


class RasterSurface:
    """An RGBA drawing surface of fixed size."""

    def __init__(self, image: Image.Image):
        if image.mode != MODE:
            image = image.convert(MODE)
        self._image = image

    @classmethod
    def allocate(cls, width: int, height: int, color: tuple = TRANSPARENT) -> "RasterSurface":
        return cls(Image.new(MODE, (max(1, int(width)), max(1, int(height))), color))

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    def draw_bitmap(
        self,
        bitmap: Image.Image,
        x: int = 0,
        y: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        """Draw a bitmap scaled to width x height at full opacity."""
        bitmap = normalize_mode(bitmap)
        target = (width or bitmap.width, height or bitmap.height)
        if bitmap.size != target:
            bitmap = bitmap.resize(target, resampling_filter())
        self._composite(bitmap, x, y)

    def fill_text(self, text: str, x: int, y: int, font, color: tuple) -> None:
        """Draw one line of text, left-aligned, ascender line at y."""
        draw = ImageDraw.Draw(self._image)
        draw.text((x, y), text, font=font, fill=color)

    def make_stamp(self, opacity: float = 1.0, rotation_deg: float = 0.0) -> Stamp:
        """Freeze this surface into a faded, rotated Stamp."""
        layer = fade(self._image, opacity)
        if not math.isfinite(rotation_deg):
            rotation_deg = 0.0
        if rotation_deg % 360:
            # Pillow rotates counter-clockwise, screen rotation is clockwise
            layer = layer.rotate(
                -rotation_deg,
                resample=Image.Resampling.BICUBIC,
                expand=True,
                fillcolor=TRANSPARENT,
            )
        return Stamp(layer, self.width, self.height)

    def draw_stamp(self, stamp: Stamp, x: float, y: float) -> Tuple[int, int]:
        """Place stamp for a box whose unrotated top-left is (x, y).

        Returns the integer origin the rotated image was drawn at.
        """
        origin = stamp.origin_for(x, y)
        self._composite(stamp.image, *origin)
        return origin

    def encode(self, format_name: str, background: Optional[tuple] = None, **params) -> bytes:
        """Save to bytes. With a background the image is flattened to RGB first."""
        img = self._image
        if background is not None:
            img = Image.new('RGB', img.size, background)
            img.paste(self._image, mask=self._image.getchannel('A'))
        output = io.BytesIO()
        img.save(output, format=format_name, **params)
        return output.getvalue()

    def _composite(self, layer: Image.Image, x: int, y: int) -> bool:
        """Alpha-composite layer at (x, y), clipped to the surface bounds."""
        left = max(0, x)
        top = max(0, y)
        right = min(self.width, x + layer.width)
        bottom = min(self.height, y + layer.height)
        if right <= left or bottom <= top:
            return False
        if (left, top, right, bottom) != (x, y, x + layer.width, y + layer.height):
            layer = layer.crop((left - x, top - y, right - x, bottom - y))
        self._image.alpha_composite(layer, dest=(left, top))
        return True
