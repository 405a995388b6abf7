"""
Watermark processor for listing photos.
Ties loading, compositing and encoding together.
"""
import asyncio
import logging
from typing import Optional, Union

from PIL import Image

from ..models.options import LogoSource, WatermarkOptions
from ..models.presets import PhotoUsage, WatermarkPreset, apply_preset, preview_options
from .compositor import composite
from .encoder import EncodedImage, encode_surface
from .loader import ImageSource, load_image

LOGGER = logging.getLogger(__name__)

LogoInput = Union[None, Image.Image, LogoSource]


def apply_watermark(
    photo: Image.Image,
    logo: LogoInput = None,
    options: Optional[WatermarkOptions] = None,
) -> EncodedImage:
    """
    Burn a watermark into a decoded photo and encode the result.

    Pure and deterministic: identical inputs give byte-identical output.

    Args:
        photo: Decoded photo
        logo: Decoded logo, NoLogo/Logo variant, or None
        options: Watermark options (defaults when None)

    Returns:
        EncodedImage with bytes and MIME type

    Raises:
        RasterBackendUnavailable: Pillow lacks support for the output format
        EncodeError: serialization failed
    """
    options = options or WatermarkOptions()
    result = composite(photo, logo, options)
    return encode_surface(result.surface, options.output_format, options.jpeg_quality)


async def apply_watermark_async(
    photo: Image.Image,
    logo: LogoInput = None,
    options: Optional[WatermarkOptions] = None,
) -> EncodedImage:
    """apply_watermark in a worker thread. No timeout or cancellation is applied."""
    return await asyncio.to_thread(apply_watermark, photo, logo, options)


class WatermarkProcessor:
    """Watermark photos from any supported source."""

    def __init__(self, options: Optional[WatermarkOptions] = None):
        """
        Initialize the processor.

        Args:
            options: Default options used when process() gets none
        """
        self.options = options or WatermarkOptions()

    def with_preset(
        self,
        preset: Union[str, WatermarkPreset] = WatermarkPreset.SUBTLE_CORNER,
        usage: Union[str, PhotoUsage] = PhotoUsage.MARKETING,
    ) -> "WatermarkProcessor":
        """New processor whose default options have a preset applied."""
        return WatermarkProcessor(apply_preset(self.options, preset, usage))

    def process(
        self,
        photo_source: ImageSource,
        logo_source: Optional[ImageSource] = None,
        options: Optional[WatermarkOptions] = None,
    ) -> EncodedImage:
        """
        Load a photo (and logo) and watermark it.

        Args:
            photo_source: URL, path, bytes, data URL or PIL Image
            logo_source: Same kinds of source, or None for no logo
            options: Overrides the processor's default options

        Returns:
            EncodedImage
        """
        options = options or self.options
        photo = load_image(photo_source)
        logo = load_image(logo_source) if logo_source is not None else None
        encoded = apply_watermark(photo, logo, options)
        LOGGER.info(
            "watermarked %dx%d photo -> %dx%d %s (%d bytes)",
            photo.width, photo.height, encoded.width, encoded.height, encoded.mime_type, len(encoded),
        )
        return encoded

    def preview(
        self,
        photo_source: ImageSource,
        logo_source: Optional[ImageSource] = None,
        options: Optional[WatermarkOptions] = None,
    ) -> EncodedImage:
        """Downscaled JPEG render for quick previews."""
        return self.process(photo_source, logo_source, preview_options(options or self.options))
