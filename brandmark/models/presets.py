"""
Ready-made watermark settings for real-estate marketing.

Presets only touch placement and strength; content (mode, text, colors)
and output settings are left as the caller configured them.
"""
import re
from enum import Enum
from typing import Union

from .options import OutputFormat, WatermarkOptions, WatermarkPosition


class WatermarkPreset(Enum):
    """Named presets"""
    SUBTLE_CORNER = "subtle_corner"
    VISIBLE_CORNER = "visible_corner"
    DIAGONAL_PROTECTION = "diagonal_protection"


class PhotoUsage(Enum):
    """Where the photo is going"""
    MARKETING = "marketing"
    MLS = "mls"


PRESETS = {
    WatermarkPreset.SUBTLE_CORNER: {
        'tile': False,
        'rotation_deg': 0.0,
        'position': WatermarkPosition.BOTTOM_RIGHT,
        'padding_px': 28,
        'opacity': 0.22,
        'scale_pct': 18.0,
    },
    WatermarkPreset.VISIBLE_CORNER: {
        'tile': False,
        'rotation_deg': 0.0,
        'position': WatermarkPosition.BOTTOM_RIGHT,
        'padding_px': 28,
        'opacity': 0.32,
        'scale_pct': 26.0,
    },
    WatermarkPreset.DIAGONAL_PROTECTION: {
        'tile': True,
        'rotation_deg': -25.0,
        'opacity': 0.14,
        'scale_pct': 14.0,
        'tile_gap_pct': 22.0,
    },
}

# Many MLS feeds forbid branding on listing photos, so MLS output is
# rendered with an invisible watermark.
MLS_OVERRIDES = {
    'opacity': 0.0,
    'tile': False,
    'rotation_deg': 0.0,
    'position': WatermarkPosition.BOTTOM_RIGHT,
}

PREVIEW_MAX_LONG_EDGE = 1600
PREVIEW_JPEG_QUALITY = 0.85

_MAX_BASENAME = 80


def apply_preset(
    options: WatermarkOptions,
    preset: Union[str, WatermarkPreset] = WatermarkPreset.SUBTLE_CORNER,
    usage: Union[str, PhotoUsage] = PhotoUsage.MARKETING,
) -> WatermarkOptions:
    """
    Return a copy of options with a preset (or the MLS profile) applied.

    Args:
        options: Base options
        preset: Preset to apply for marketing usage
        usage: MARKETING applies the preset, MLS ignores it and disables branding

    Returns:
        New WatermarkOptions
    """
    usage = PhotoUsage(usage) if not isinstance(usage, PhotoUsage) else usage
    if usage is PhotoUsage.MLS:
        return options.replace(**MLS_OVERRIDES)
    preset = WatermarkPreset(preset) if not isinstance(preset, WatermarkPreset) else preset
    return options.replace(**PRESETS[preset])


def preview_options(options: WatermarkOptions) -> WatermarkOptions:
    """Options for a quick, memory-friendly preview render."""
    return options.replace(
        max_long_edge_px=options.max_long_edge_px or PREVIEW_MAX_LONG_EDGE,
        output_format=OutputFormat.JPEG,
        jpeg_quality=PREVIEW_JPEG_QUALITY,
    )


def safe_base_name(name: str) -> str:
    stem = re.sub(r"\.[^/.]+$", "", name or "")
    stem = re.sub(r"[^a-zA-Z0-9\-_]+", "_", stem)[:_MAX_BASENAME]
    return stem or "image"


def output_filename(source_name: str, output_format: Union[str, OutputFormat]) -> str:
    """Download/storage name for a watermarked photo, e.g. 'villa_1-watermarked.jpg'."""
    fmt = OutputFormat.parse(output_format)
    return f"{safe_base_name(source_name)}-watermarked.{fmt.extension}"
