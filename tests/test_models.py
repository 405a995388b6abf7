import pytest
from PIL import Image

from brandmark.models import (
    NO_LOGO,
    Logo,
    NoLogo,
    OutputFormat,
    PhotoUsage,
    WatermarkMode,
    WatermarkOptions,
    WatermarkPosition,
    WatermarkPreset,
    apply_preset,
    as_logo_source,
    output_filename,
    preview_options,
)


def test_default_options():
    options = WatermarkOptions()
    assert options.mode is WatermarkMode.LOGO
    assert options.position is WatermarkPosition.BOTTOM_RIGHT
    assert options.max_long_edge_px is None
    assert options.output_format is OutputFormat.JPEG


def test_options_from_payload():
    options = WatermarkOptions.from_dict({
        'mode': 'both',
        'position': 'TOP_LEFT',
        'output_format': 'image/webp',
        'max_long_edge_px': '1200',
        'opacity': 0.4,
        'unknown_field': 'ignored',
    })
    assert options.mode is WatermarkMode.BOTH
    assert options.position is WatermarkPosition.TOP_LEFT
    assert options.output_format is OutputFormat.WEBP
    assert options.max_long_edge_px == 1200
    assert options.opacity == 0.4
    assert options.padding_px == 24


def test_options_to_dict_uses_plain_values():
    data = WatermarkOptions(mode=WatermarkMode.TEXT).to_dict()
    assert data['mode'] == 'text'
    assert data['position'] == 'bottom_right'
    assert data['output_format'] == 'JPEG'
    assert WatermarkOptions.from_dict(data) == WatermarkOptions(mode=WatermarkMode.TEXT)


@pytest.mark.parametrize('value,expected', [
    ('jpeg', OutputFormat.JPEG),
    ('JPG', OutputFormat.JPEG),
    ('image/jpeg', OutputFormat.JPEG),
    ('png', OutputFormat.PNG),
    (OutputFormat.WEBP, OutputFormat.WEBP),
])
def test_output_format_parse(value, expected):
    assert OutputFormat.parse(value) is expected


def test_output_format_mime_and_extension():
    assert OutputFormat.JPEG.mime_type == 'image/jpeg'
    assert OutputFormat.JPEG.extension == 'jpg'
    assert OutputFormat.WEBP.mime_type == 'image/webp'


def test_logo_variant():
    img = Image.new('RGBA', (10, 5))
    assert as_logo_source(None) is NO_LOGO
    assert isinstance(as_logo_source(img), Logo)
    assert as_logo_source(img).width == 10
    assert as_logo_source(NO_LOGO) is NO_LOGO
    assert not NoLogo()
    with pytest.raises(TypeError):
        as_logo_source('logo.png')


def test_diagonal_protection_preset():
    options = apply_preset(WatermarkOptions(text='Acme'), WatermarkPreset.DIAGONAL_PROTECTION)
    assert options.tile is True
    assert options.rotation_deg == -25
    assert options.opacity == 0.14
    assert options.tile_gap_pct == 22
    assert options.text == 'Acme'


def test_corner_presets():
    subtle = apply_preset(WatermarkOptions(tile=True), 'subtle_corner')
    visible = apply_preset(WatermarkOptions(tile=True), 'visible_corner')
    assert subtle.tile is False and visible.tile is False
    assert subtle.opacity < visible.opacity
    assert subtle.scale_pct < visible.scale_pct
    assert subtle.padding_px == visible.padding_px == 28


def test_mls_usage_disables_branding():
    options = apply_preset(
        WatermarkOptions(tile=True, rotation_deg=30, position=WatermarkPosition.TOP_LEFT),
        WatermarkPreset.VISIBLE_CORNER,
        PhotoUsage.MLS,
    )
    assert options.opacity == 0.0
    assert options.tile is False
    assert options.rotation_deg == 0.0
    assert options.position is WatermarkPosition.BOTTOM_RIGHT


def test_preview_options():
    preview = preview_options(WatermarkOptions(output_format=OutputFormat.PNG, jpeg_quality=0.3))
    assert preview.max_long_edge_px == 1600
    assert preview.output_format is OutputFormat.JPEG
    assert preview.jpeg_quality == 0.85
    assert preview_options(WatermarkOptions(max_long_edge_px=800)).max_long_edge_px == 800


@pytest.mark.parametrize('name,fmt,expected', [
    ('villa.jpeg', OutputFormat.JPEG, 'villa-watermarked.jpg'),
    ('My Villa (1).PNG', 'png', 'My_Villa_1_-watermarked.png'),
    ('.jpg', 'image/webp', 'image-watermarked.webp'),
    ('', OutputFormat.JPEG, 'image-watermarked.jpg'),
])
def test_output_filename(name, fmt, expected):
    assert output_filename(name, fmt) == expected


def test_output_filename_is_truncated():
    name = output_filename('a' * 200 + '.jpg', OutputFormat.JPEG)
    assert name == 'a' * 80 + '-watermarked.jpg'
