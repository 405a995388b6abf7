"""
Overlay builder: renders the logo and/or text block into a tightly
bounded transparent buffer, independent of the photo it will go on.
"""
import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from ..models.options import Logo, LogoSource, WatermarkMode, WatermarkOptions
from .fonts import FontType, get_bold_font
from .geometry import clamp, round_half_up
from .surface import RasterSurface

LOGGER = logging.getLogger(__name__)

MIN_TEXT_SIZE = 8
MAX_TEXT_SIZE = 220
LINE_HEIGHT_RATIO = 1.25
LOGO_TEXT_GAP_RATIO = 0.6

_HEX_COLOR = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_FALLBACK_COLOR = (255, 255, 255)


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """'#fff' / 'ffffff' -> (r, g, b). Unparsable input falls back to white."""
    normalized = (value or "").strip().lstrip('#')
    if not _HEX_COLOR.match(normalized):
        LOGGER.debug("unparsable text color %r, using white", value)
        return _FALLBACK_COLOR
    if len(normalized) == 3:
        normalized = ''.join(ch * 2 for ch in normalized)
    return tuple(int(normalized[i:i + 2], 16) for i in (0, 2, 4))


def split_text_lines(text: str) -> List[str]:
    """Trimmed, non-blank lines."""
    if not text or not text.strip():
        return []
    lines = (line.strip() for line in text.replace('\r\n', '\n').split('\n'))
    return [line for line in lines if line]


def clamp_text_size(size: float) -> float:
    return clamp(size, MIN_TEXT_SIZE, MAX_TEXT_SIZE)


@dataclass
class TextBlock:
    lines: List[str] = field(default_factory=list)
    width: int = 0
    height: int = 0
    line_height: int = 0
    font: FontType = None


def measure_text_block(lines: List[str], text_size_px: float) -> TextBlock:
    """Measure lines at the bold watermark font."""
    size = clamp_text_size(text_size_px)
    font = get_bold_font(size)
    line_height = round_half_up(size * LINE_HEIGHT_RATIO)
    widest = max((font.getlength(line) for line in lines), default=0)
    return TextBlock(
        lines=list(lines),
        width=math.ceil(widest),
        height=line_height * len(lines),
        line_height=line_height,
        font=font,
    )


@dataclass
class Overlay:
    """Rendered branding plus the layout it was built from."""
    surface: RasterSurface
    logo_width: int = 0
    logo_height: int = 0
    gap: int = 0
    text: TextBlock = field(default_factory=TextBlock)

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height


def logo_size(logo: LogoSource, scale_pct: float, shortest_edge: int) -> Tuple[int, int]:
    """Rendered logo size: width is scale_pct % of the photo's shortest edge."""
    if not isinstance(logo, Logo):
        return 0, 0
    target_width = (clamp(scale_pct, 1, 200) / 100) * shortest_edge
    scale = target_width / logo.width
    return (
        max(1, round_half_up(logo.width * scale)),
        max(1, round_half_up(logo.height * scale)),
    )


def build_overlay(
    options: WatermarkOptions,
    logo: LogoSource,
    canvas_width: int,
    canvas_height: int,
) -> Overlay:
    """
    Render the overlay for a canvas of the given size.

    Args:
        options: Watermark options (mode, scale, text settings)
        logo: NoLogo or Logo(bitmap)
        canvas_width: Width of the (resized) photo
        canvas_height: Height of the (resized) photo

    Returns:
        Overlay at least 1x1 pixels, drawn at full opacity
    """
    shortest = min(canvas_width, canvas_height)
    mode = options.mode
    has_logo = isinstance(logo, Logo)
    draws_logo = has_logo and mode in (WatermarkMode.LOGO, WatermarkMode.BOTH)
    draws_text = mode in (WatermarkMode.TEXT, WatermarkMode.BOTH)

    logo_w, logo_h = logo_size(logo, options.scale_pct, shortest)

    if draws_text:
        text = measure_text_block(split_text_lines(options.text), options.text_size_px)
    else:
        text = TextBlock()

    gap = 0
    if mode is WatermarkMode.BOTH and has_logo:
        gap = round_half_up(clamp_text_size(options.text_size_px) * LOGO_TEXT_GAP_RATIO)

    if mode is WatermarkMode.LOGO:
        box_w, box_h = logo_w, logo_h
    elif mode is WatermarkMode.TEXT:
        box_w, box_h = text.width, text.height
    else:
        box_w, box_h = logo_w + gap + text.width, max(logo_h, text.height)

    surface = RasterSurface.allocate(max(1, math.ceil(box_w)), max(1, math.ceil(box_h)))

    if draws_logo:
        surface.draw_bitmap(logo.bitmap, 0, 0, logo_w, logo_h)

    if draws_text and text.lines:
        color = parse_hex_color(options.text_color) + (255,)
        start_x = logo_w + gap if mode is WatermarkMode.BOTH and has_logo else 0
        start_y = 0
        if mode is WatermarkMode.BOTH and has_logo:
            start_y = max(0, round_half_up((surface.height - text.height) / 2))
        y = start_y
        for line in text.lines:
            surface.fill_text(line, start_x, y, text.font, color)
            y += text.line_height

    LOGGER.debug(
        "built %s overlay %dx%d (logo %dx%d, %d text lines)",
        mode.value, surface.width, surface.height, logo_w, logo_h, len(text.lines),
    )
    return Overlay(surface=surface, logo_width=logo_w, logo_height=logo_h, gap=gap, text=text)
