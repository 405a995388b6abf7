"""
Geometry helpers: output sizing, anchor placement and tile grids.
"""
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..models.options import WatermarkPosition


# Anchor -> (horizontal, vertical)
ANCHORS = {
    WatermarkPosition.TOP_LEFT: ('left', 'top'),
    WatermarkPosition.TOP_CENTER: ('center', 'top'),
    WatermarkPosition.TOP_RIGHT: ('right', 'top'),
    WatermarkPosition.MIDDLE_LEFT: ('left', 'center'),
    WatermarkPosition.MIDDLE_CENTER: ('center', 'center'),
    WatermarkPosition.MIDDLE_RIGHT: ('right', 'center'),
    WatermarkPosition.BOTTOM_LEFT: ('left', 'bottom'),
    WatermarkPosition.BOTTOM_CENTER: ('center', 'bottom'),
    WatermarkPosition.BOTTOM_RIGHT: ('right', 'bottom'),
}


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into [low, high]. NaN clamps to low."""
    if math.isnan(value):
        return low
    return min(max(value, low), high)


def round_half_up(value: float) -> int:
    """Round .5 away from negative infinity (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class FitSize:
    """Output canvas size and the factor applied to the source"""
    width: int
    height: int
    scale: float = 1.0

    @property
    def shortest_edge(self) -> int:
        return min(self.width, self.height)


def compute_fit_size(width: int, height: int, max_long_edge: Optional[int] = None) -> FitSize:
    """
    Scale (width, height) down so the longer edge fits max_long_edge.

    Never upscales. A missing or non-positive limit keeps the original size.
    """
    if not max_long_edge or not math.isfinite(max_long_edge) or max_long_edge <= 0:
        return FitSize(width, height, 1.0)
    long_edge = max(width, height)
    if long_edge <= max_long_edge:
        return FitSize(width, height, 1.0)
    scale = max_long_edge / long_edge
    return FitSize(
        max(1, round_half_up(width * scale)),
        max(1, round_half_up(height * scale)),
        scale,
    )


def resolve_anchor(
    position: WatermarkPosition,
    canvas_w: int,
    canvas_h: int,
    box_w: int,
    box_h: int,
    padding: int,
) -> Tuple[int, int]:
    """
    Top-left corner of a box_w x box_h box placed at an anchor.

    No clamping: an oversized box or padding can yield negative or
    off-canvas coordinates, which the surface simply clips.
    """
    pos_x, pos_y = ANCHORS[WatermarkPosition(position)]

    if pos_x == 'left':
        x = padding
    elif pos_x == 'right':
        x = canvas_w - padding - box_w
    else:  # center
        x = round_half_up((canvas_w - box_w) / 2)

    if pos_y == 'top':
        y = padding
    elif pos_y == 'bottom':
        y = canvas_h - padding - box_h
    else:  # center
        y = round_half_up((canvas_h - box_h) / 2)

    return x, y


def tile_gap(shortest_edge: int, gap_pct: float) -> float:
    return (clamp(gap_pct, 1, 200) / 100) * shortest_edge


def tile_origins(
    canvas_w: int,
    canvas_h: int,
    box_w: int,
    box_h: int,
    gap: float,
) -> Iterator[Tuple[float, float]]:
    """
    Top-left corners of a tile grid, row by row.

    The grid starts one step before the origin and runs one step past the
    far edges so rotated tiles leave no uncovered band along the borders.
    """
    step_x = box_w + gap
    step_y = box_h + gap
    row = 0
    while True:
        y = -step_y + row * step_y
        if y >= canvas_h + step_y:
            break
        col = 0
        while True:
            x = -step_x + col * step_x
            if x >= canvas_w + step_x:
                break
            yield x, y
            col += 1
        row += 1


def box_center(x: float, y: float, box_w: int, box_h: int) -> Tuple[float, float]:
    return x + box_w / 2, y + box_h / 2
