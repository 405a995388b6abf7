"""
brandmark - logo and text watermarking for real-estate photos
"""
from .errors import WatermarkError, RasterBackendUnavailable, EncodeError, ImageLoadError
from .models import (
    WatermarkMode, WatermarkPosition, OutputFormat, WatermarkOptions,
    NoLogo, Logo, NO_LOGO, WatermarkPreset, PhotoUsage,
    apply_preset, preview_options, output_filename
)
from .images import (
    WatermarkProcessor, EncodedImage, apply_watermark, apply_watermark_async,
    compute_fit_size, resolve_anchor, composite
)

__version__ = '1.0.0'
__all__ = [
    # Errors
    'WatermarkError',
    'RasterBackendUnavailable',
    'EncodeError',
    'ImageLoadError',
    # Models
    'WatermarkMode',
    'WatermarkPosition',
    'OutputFormat',
    'WatermarkOptions',
    'NoLogo',
    'Logo',
    'NO_LOGO',
    'WatermarkPreset',
    'PhotoUsage',
    'apply_preset',
    'preview_options',
    'output_filename',
    # Engine
    'WatermarkProcessor',
    'EncodedImage',
    'apply_watermark',
    'apply_watermark_async',
    'compute_fit_size',
    'resolve_anchor',
    'composite',
]
