"""
Exceptions raised by the watermarking engine.
"""


class WatermarkError(Exception):
    """Base exception for watermarking failures"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class RasterBackendUnavailable(WatermarkError):
    """The Pillow build cannot provide the drawing/encoding support we need.

    This is an environment defect, retrying will not help.
    """


class EncodeError(WatermarkError):
    """Serializing the composited image failed"""
    def __init__(self, message: str, output_format: str = None):
        self.output_format = output_format
        super().__init__(message)


class ImageLoadError(WatermarkError):
    """A photo or logo source could not be fetched or decoded"""
    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message)
