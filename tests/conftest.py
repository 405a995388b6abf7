import io

import pytest
from PIL import Image

PHOTO_COLOR = (0, 0, 255, 255)
LOGO_COLOR = (255, 0, 0, 255)


@pytest.fixture
def photo():
    """1920x1080 solid blue listing photo"""
    return Image.new('RGB', (1920, 1080), PHOTO_COLOR[:3])


@pytest.fixture
def logo():
    """400x200 opaque red logo"""
    return Image.new('RGBA', (400, 200), LOGO_COLOR)


def encode_png(img: Image.Image) -> bytes:
    output = io.BytesIO()
    img.save(output, format='PNG')
    return output.getvalue()


@pytest.fixture
def png_bytes():
    return encode_png(Image.new('RGB', (64, 48), (10, 200, 30)))
