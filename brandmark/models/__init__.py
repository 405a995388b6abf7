"""
Watermark Models Package
"""
from .options import (
    WatermarkMode,
    WatermarkPosition,
    OutputFormat,
    WatermarkOptions,
    NoLogo,
    Logo,
    LogoSource,
    NO_LOGO,
    as_logo_source,
)
from .presets import (
    WatermarkPreset,
    PhotoUsage,
    apply_preset,
    preview_options,
    output_filename,
)

__all__ = [
    'WatermarkMode',
    'WatermarkPosition',
    'OutputFormat',
    'WatermarkOptions',
    'NoLogo',
    'Logo',
    'LogoSource',
    'NO_LOGO',
    'as_logo_source',
    'WatermarkPreset',
    'PhotoUsage',
    'apply_preset',
    'preview_options',
    'output_filename',
]
