"""
Watermark Option Models
"""
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from enum import Enum
from typing import Any, Dict, Optional, Union

from PIL import Image


class WatermarkMode(Enum):
    """Which content the overlay carries"""
    LOGO = "logo"
    TEXT = "text"
    BOTH = "both"


class WatermarkPosition(Enum):
    """Anchor used for a single (non-tiled) placement"""
    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    MIDDLE_CENTER = "middle_center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


class OutputFormat(Enum):
    """Encoded output formats"""
    JPEG = "JPEG"
    PNG = "PNG"
    WEBP = "WEBP"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value.lower()}"

    @property
    def extension(self) -> str:
        return "jpg" if self is OutputFormat.JPEG else self.value.lower()

    @classmethod
    def parse(cls, value: Union[str, "OutputFormat"]) -> "OutputFormat":
        """Accept an enum, its name ('jpeg', 'JPG') or a MIME type ('image/webp')."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        if name.startswith("IMAGE/"):
            name = name[len("IMAGE/"):]
        if name == "JPG":
            name = "JPEG"
        return cls(name)


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    try:
        return enum_cls(text.lower())
    except ValueError:
        return enum_cls[text.upper()]


@dataclass(frozen=True)
class NoLogo:
    """No logo was supplied"""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Logo:
    """A decoded logo bitmap"""
    bitmap: Image.Image

    @property
    def width(self) -> int:
        return self.bitmap.width

    @property
    def height(self) -> int:
        return self.bitmap.height


LogoSource = Union[NoLogo, Logo]

NO_LOGO = NoLogo()


def as_logo_source(logo: Union[None, Image.Image, LogoSource]) -> LogoSource:
    """Lift None or a bare PIL image into the NoLogo/Logo variant."""
    if logo is None:
        return NO_LOGO
    if isinstance(logo, (NoLogo, Logo)):
        return logo
    if isinstance(logo, Image.Image):
        return Logo(logo)
    raise TypeError(f"expected a PIL image or None for the logo, got {type(logo)}")


@dataclass(frozen=True)
class WatermarkOptions:
    """
    Complete watermark configuration.

    Numeric fields are taken as given and clamped where they are used,
    so out-of-range values never raise. Defaults match the subtle
    bottom-right logo used for listing photos.
    """
    mode: WatermarkMode = WatermarkMode.LOGO
    position: WatermarkPosition = WatermarkPosition.BOTTOM_RIGHT
    padding_px: int = 24
    opacity: float = 0.25
    rotation_deg: float = 0.0
    scale_pct: float = 14.0             # logo width as % of the shortest edge
    text: str = ""
    text_size_px: float = 44.0
    text_color: str = "#ffffff"
    tile: bool = False
    tile_gap_pct: float = 22.0          # % of the shortest edge
    max_long_edge_px: Optional[int] = None  # None keeps the original size
    output_format: OutputFormat = OutputFormat.JPEG
    jpeg_quality: float = 0.9           # 0..1, JPEG only

    def replace(self, **changes) -> "WatermarkOptions":
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['mode'] = self.mode.value
        data['position'] = self.position.value
        data['output_format'] = self.output_format.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatermarkOptions":
        """Build options from a plain dict (JSON payloads, form data).

        Unknown keys are ignored and missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if 'mode' in values:
            values['mode'] = _parse_enum(WatermarkMode, values['mode'])
        if 'position' in values:
            values['position'] = _parse_enum(WatermarkPosition, values['position'])
        if 'output_format' in values:
            values['output_format'] = OutputFormat.parse(values['output_format'])
        if values.get('max_long_edge_px') is not None:
            values['max_long_edge_px'] = int(values['max_long_edge_px'])
        if 'tile' in values:
            values['tile'] = bool(values['tile'])
        return cls(**values)
