"""
Engine Configuration

Uses Pydantic Settings for environment variable management.
Every value can be set with a BRANDMARK_ prefixed variable or in a .env file.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import Image
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


RESAMPLING_FILTERS = ("NEAREST", "BOX", "BILINEAR", "HAMMING", "BICUBIC", "LANCZOS")


class Settings(BaseSettings):
    """Engine settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="BRANDMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # TEXT RENDERING
    # ===========================================
    # Bold TrueType font used for watermark text. When unset (or missing on
    # disk) a system bold font is looked up, then Pillow's bundled font.
    FONT_PATH: Optional[Path] = None

    # ===========================================
    # SOURCE LOADING
    # ===========================================
    REQUEST_TIMEOUT: float = Field(default=30.0, gt=0)
    # None keeps Pillow's own decompression bomb limit
    MAX_IMAGE_PIXELS: Optional[int] = Field(default=None, gt=0)

    # ===========================================
    # RASTER
    # ===========================================
    RESAMPLING: str = "LANCZOS"

    @field_validator("RESAMPLING")
    @classmethod
    def _check_resampling(cls, value: str) -> str:
        name = value.strip().upper()
        if name not in RESAMPLING_FILTERS:
            raise ValueError(f"unknown resampling filter {value!r}")
        return name


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once per process.

    A configured MAX_IMAGE_PIXELS is applied to Pillow here, when the
    settings are first loaded, rather than on every decode.
    """
    settings = Settings()
    if settings.MAX_IMAGE_PIXELS:
        Image.MAX_IMAGE_PIXELS = settings.MAX_IMAGE_PIXELS
    return settings
