"""
Encoder: serializes a finished surface to JPEG, PNG or WEBP bytes.
"""
import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..errors import EncodeError
from ..models.options import OutputFormat
from .geometry import clamp, round_half_up
from .surface import RasterSurface

LOGGER = logging.getLogger(__name__)

JPEG_BACKGROUND = (255, 255, 255)


@dataclass(frozen=True)
class EncodedImage:
    """Encoded output tagged with its MIME type"""
    data: bytes
    format: OutputFormat
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    @property
    def extension(self) -> str:
        return self.format.extension

    def __len__(self) -> int:
        return len(self.data)

    def to_data_url(self) -> str:
        """Encode as a base64 data URL."""
        b64 = base64.b64encode(self.data).decode('utf-8')
        return f"data:{self.mime_type};base64,{b64}"


def jpeg_quality(quality: float) -> int:
    """0.1..1 float quality -> Pillow's 10..100 scale."""
    return round_half_up(clamp(quality, 0.1, 1.0) * 100)


def encode_surface(
    surface: RasterSurface,
    output_format: OutputFormat = OutputFormat.JPEG,
    quality: float = 0.9,
) -> EncodedImage:
    """
    Serialize a surface.

    JPEG has no alpha, so the surface is flattened onto white first.
    PNG is lossless; WEBP uses Pillow's default quality. quality only
    applies to JPEG.
    """
    output_format = OutputFormat.parse(output_format)
    save_kwargs: Dict[str, Any] = {}
    if output_format is OutputFormat.JPEG:
        save_kwargs['background'] = JPEG_BACKGROUND
        save_kwargs['quality'] = jpeg_quality(quality)

    try:
        data = surface.encode(output_format.value, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(
            f"Could not encode image as {output_format.value}: {exc}",
            output_format=output_format.value,
        ) from exc

    LOGGER.debug("encoded %s %dx%d, %d bytes", output_format.value, surface.width, surface.height, len(data))
    return EncodedImage(data=data, format=output_format, width=surface.width, height=surface.height)
