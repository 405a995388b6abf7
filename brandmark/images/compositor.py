"""
Compositor: resizes the photo and stamps the overlay onto it, either once
at an anchor or repeatedly across a tile grid.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from PIL import Image

from ..models.options import LogoSource, WatermarkOptions, as_logo_source
from .geometry import (
    FitSize,
    box_center,
    clamp,
    compute_fit_size,
    resolve_anchor,
    tile_gap,
    tile_origins,
)
from .overlay import Overlay, build_overlay
from .surface import RasterSurface, require_backend

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """One overlay instance: unrotated top-left, center, and where the
    rotated image actually landed."""
    x: float
    y: float
    center: Tuple[float, float]
    origin: Tuple[int, int]


@dataclass
class CompositeResult:
    surface: RasterSurface
    overlay: Overlay
    fit: FitSize
    placements: List[Placement] = field(default_factory=list)
    opacity: float = 1.0


def overlay_positions(options: WatermarkOptions, fit: FitSize, overlay_w: int, overlay_h: int) -> List[Tuple[float, float]]:
    """Unrotated top-left corner of every overlay instance to draw."""
    if options.tile:
        gap = tile_gap(fit.shortest_edge, options.tile_gap_pct)
        return list(tile_origins(fit.width, fit.height, overlay_w, overlay_h, gap))
    return [resolve_anchor(
        options.position, fit.width, fit.height, overlay_w, overlay_h, options.padding_px,
    )]


def composite(photo: Image.Image, logo, options: WatermarkOptions) -> CompositeResult:
    """
    Run geometry, overlay and compositing for one photo.

    Args:
        photo: Decoded photo
        logo: None, a PIL image, or a NoLogo/Logo variant
        options: Watermark options

    Returns:
        CompositeResult with the finished surface and every placement
    """
    require_backend(options.output_format)
    logo: LogoSource = as_logo_source(logo)

    fit = compute_fit_size(photo.width, photo.height, options.max_long_edge_px)
    surface = RasterSurface.allocate(fit.width, fit.height)
    surface.draw_bitmap(photo, 0, 0, fit.width, fit.height)

    overlay = build_overlay(options, logo, fit.width, fit.height)

    opacity = clamp(options.opacity, 0.0, 1.0)
    stamp = overlay.surface.make_stamp(opacity=opacity, rotation_deg=options.rotation_deg)

    placements = []
    for x, y in overlay_positions(options, fit, overlay.width, overlay.height):
        origin = surface.draw_stamp(stamp, x, y)
        placements.append(Placement(x, y, box_center(x, y, overlay.width, overlay.height), origin))

    LOGGER.debug(
        "composited %dx%d (scale %.4f), %d overlay instance(s) at opacity %.2f",
        fit.width, fit.height, fit.scale, len(placements), opacity,
    )
    return CompositeResult(
        surface=surface,
        overlay=overlay,
        fit=fit,
        placements=placements,
        opacity=opacity,
    )
