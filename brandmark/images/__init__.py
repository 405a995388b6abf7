"""
Image watermarking for listing photos.
Handles output sizing, logo/text overlays, anchored or tiled placement, and encoding.
"""

from .compositor import CompositeResult, Placement, composite
from .encoder import EncodedImage, encode_surface
from .geometry import FitSize, compute_fit_size, resolve_anchor
from .loader import load_image
from .overlay import Overlay, build_overlay
from .processor import WatermarkProcessor, apply_watermark, apply_watermark_async
from .surface import RasterSurface

__all__ = [
    'CompositeResult',
    'Placement',
    'composite',
    'EncodedImage',
    'encode_surface',
    'FitSize',
    'compute_fit_size',
    'resolve_anchor',
    'load_image',
    'Overlay',
    'build_overlay',
    'WatermarkProcessor',
    'apply_watermark',
    'apply_watermark_async',
    'RasterSurface',
]
