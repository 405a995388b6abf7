import math

import pytest
from PIL import Image

from brandmark.images.fonts import get_bold_font
from brandmark.images.overlay import (
    build_overlay,
    logo_size,
    measure_text_block,
    parse_hex_color,
    split_text_lines,
)
from brandmark.models import NO_LOGO, Logo, WatermarkMode, WatermarkOptions


@pytest.mark.parametrize('value,expected', [
    ('#fff', (255, 255, 255)),
    ('#000000', (0, 0, 0)),
    ('1a2b3c', (26, 43, 60)),
    ('  #AbC ', (170, 187, 204)),
    ('not-a-color', (255, 255, 255)),
    ('', (255, 255, 255)),
])
def test_parse_hex_color(value, expected):
    assert parse_hex_color(value) == expected


def test_split_text_lines_drops_blank_lines():
    assert split_text_lines('  Acme \n\n   \n Realty\r\n') == ['Acme', 'Realty']
    assert split_text_lines('   \n  ') == []
    assert split_text_lines('') == []


def test_logo_size_relative_to_shortest_edge(logo):
    assert logo_size(Logo(logo), 20, 675) == (135, 68)
    assert logo_size(NO_LOGO, 20, 675) == (0, 0)


def test_logo_scale_is_clamped(logo):
    assert logo_size(Logo(logo), 0, 675) == logo_size(Logo(logo), 1, 675)
    assert logo_size(Logo(logo), 1000, 675) == logo_size(Logo(logo), 200, 675)


def test_logo_overlay(logo):
    options = WatermarkOptions(mode=WatermarkMode.LOGO, scale_pct=20)
    overlay = build_overlay(options, Logo(logo), 1200, 675)
    assert (overlay.width, overlay.height) == (135, 68)
    # drawn at full opacity; overlay opacity is applied when compositing
    r, g, b, a = overlay.surface.image.getpixel((60, 30))
    assert r >= 254 and a == 255
    assert g <= 1 and b <= 1


def test_logo_mode_without_logo_is_one_pixel():
    overlay = build_overlay(WatermarkOptions(mode=WatermarkMode.LOGO), NO_LOGO, 1200, 675)
    assert (overlay.width, overlay.height) == (1, 1)
    assert overlay.surface.image.getpixel((0, 0))[3] == 0


def test_blank_text_is_one_pixel():
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='  \n ')
    overlay = build_overlay(options, NO_LOGO, 1200, 675)
    assert (overlay.width, overlay.height) == (1, 1)
    assert overlay.text.lines == []


def test_text_overlay_size():
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='Acme\nRealty Group', text_size_px=40)
    overlay = build_overlay(options, NO_LOGO, 1200, 675)

    font = get_bold_font(40)
    expected_w = math.ceil(max(font.getlength('Acme'), font.getlength('Realty Group')))
    assert overlay.text.line_height == 50
    assert overlay.height == 100
    assert overlay.width == max(1, expected_w)
    assert overlay.gap == 0


def test_text_is_drawn_in_color():
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='MMMM', text_size_px=60, text_color='#0f0')
    overlay = build_overlay(options, NO_LOGO, 1200, 675)
    colors = overlay.surface.image.getcolors(maxcolors=100000)
    opaque = [rgba for _, rgba in colors if rgba[3] == 255]
    assert opaque
    assert all(rgba[:3] == (0, 255, 0) for rgba in opaque)


def test_text_size_is_clamped():
    small = build_overlay(WatermarkOptions(mode=WatermarkMode.TEXT, text='A', text_size_px=2), NO_LOGO, 800, 600)
    large = build_overlay(WatermarkOptions(mode=WatermarkMode.TEXT, text='A', text_size_px=900), NO_LOGO, 800, 600)
    assert small.text.line_height == 10
    assert large.text.line_height == 275


def test_both_overlay_layout(logo):
    options = WatermarkOptions(mode=WatermarkMode.BOTH, scale_pct=20, text='Acme', text_size_px=40)
    overlay = build_overlay(options, Logo(logo), 1200, 675)

    assert overlay.gap == 24
    assert (overlay.logo_width, overlay.logo_height) == (135, 68)
    assert overlay.width == 135 + 24 + overlay.text.width
    assert overlay.height == max(68, overlay.text.height)
    # gap column stays transparent
    assert overlay.surface.image.getpixel((135 + 12, 0))[3] == 0


def test_both_mode_without_logo_is_text_only():
    options = WatermarkOptions(mode=WatermarkMode.BOTH, text='Acme', text_size_px=40)
    overlay = build_overlay(options, NO_LOGO, 1200, 675)
    assert overlay.gap == 0
    assert overlay.width == overlay.text.width
    assert overlay.height == overlay.text.height


def test_text_mode_ignores_logo(logo):
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='Acme', text_size_px=40)
    with_logo = build_overlay(options, Logo(logo), 1200, 675)
    without = build_overlay(options, NO_LOGO, 1200, 675)
    assert with_logo.surface.image.tobytes() == without.surface.image.tobytes()


def test_non_square_logo_keeps_ratio():
    tall = Image.new('RGBA', (100, 300), (0, 0, 0, 255))
    assert logo_size(Logo(tall), 10, 1000) == (100, 300)


def _ink_rows(overlay, left=0):
    """(top, bottom) of the opaque text pixels right of `left`."""
    alpha = overlay.surface.image.getchannel('A')
    return alpha.crop((left, 0, overlay.width, overlay.height)).getbbox()


def test_text_is_centered_against_taller_logo():
    square = Image.new('RGBA', (400, 400), (255, 0, 0, 255))
    options = WatermarkOptions(mode=WatermarkMode.BOTH, scale_pct=20, text='MMMM', text_size_px=40)
    overlay = build_overlay(options, Logo(square), 1000, 1000)

    assert (overlay.logo_width, overlay.logo_height) == (200, 200)
    assert overlay.height == 200
    assert overlay.text.line_height == 50
    # text block starts at round((200 - 50) / 2) = 75
    _, top, _, bottom = _ink_rows(overlay, left=200 + overlay.gap)
    assert 75 <= top < 125
    assert bottom <= 125


def test_text_lines_advance_by_line_height():
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='MMMM\nMMMM', text_size_px=40)
    overlay = build_overlay(options, NO_LOGO, 1200, 675)
    alpha = overlay.surface.image.getchannel('A')

    first = alpha.crop((0, 0, overlay.width, 50)).getbbox()
    second = alpha.crop((0, 50, overlay.width, 100)).getbbox()
    assert first is not None and second is not None
    # same glyphs, same offset inside each line box
    assert first[1] == second[1]
    assert first[3] == second[3]


def test_text_only_starts_at_top():
    options = WatermarkOptions(mode=WatermarkMode.TEXT, text='MMMM', text_size_px=40)
    overlay = build_overlay(options, NO_LOGO, 1200, 675)
    _, top, _, _ = _ink_rows(overlay)
    assert top < 25


def test_fractional_text_size_keeps_font_and_line_height_in_step():
    block = measure_text_block(['A'], 10.4)
    assert block.font.size == pytest.approx(10.4)
    assert block.line_height == 13
