import math

import pytest
from PIL import Image

from potatocat.meme.fonts import FontBook, FontLoadError
from potatocat.meme.primitives import (
    Canvas,
    draw_sparkle,
    draw_text_with_outline,
    scale_height,
    scale_image,
    star_polygon,
)


def test_scale_height_preserves_aspect():
    assert scale_height(Image.new("RGBA", (400, 200)), 200) == 100
    assert scale_height(Image.new("RGBA", (200, 400)), 100) == 200


def test_scale_image_exact_size():
    scaled = scale_image(Image.new("RGB", (400, 200), (10, 20, 30)), 123, 45)
    assert scaled.size == (123, 45)
    assert scaled.mode == "RGBA"


def test_star_polygon_alternates_radii():
    vertices = star_polygon(100, 100, 45, 22, 10)
    assert len(vertices) == 20
    for i, (x, y) in enumerate(vertices):
        expected = 22 if i % 2 else 45
        assert math.hypot(x - 100, y - 100) == pytest.approx(expected)
    assert vertices[0] == pytest.approx((145, 100))


def test_star_polygon_angle_step():
    vertices = star_polygon(0, 0, 10, 5, 4)
    angles = [math.atan2(y, x) % (2 * math.pi) for x, y in vertices]
    for i in range(1, len(angles)):
        step = (angles[i] - angles[i - 1]) % (2 * math.pi)
        assert step == pytest.approx(math.pi / 4)
    # closing edge returns to the first vertex with the same step
    closing = (angles[0] - angles[-1]) % (2 * math.pi)
    assert closing == pytest.approx(math.pi / 4)


def test_canvas_clips_negative_offsets():
    canvas = Canvas(10, 10)
    canvas.draw_image(Image.new("RGBA", (6, 6), (255, 0, 0, 255)), -3, -3)
    frame = canvas.to_image()
    assert frame.size == (10, 10)
    assert frame.getpixel((0, 0)) == (255, 0, 0, 255)
    assert frame.getpixel((2, 2)) == (255, 0, 0, 255)
    assert frame.getpixel((3, 3)) == (0, 0, 0, 255)


def test_overlay_blends_with_existing_pixels():
    canvas = Canvas(4, 4, background=(0, 0, 0, 255))
    with canvas.overlay() as draw:
        draw.rectangle([0, 0, 3, 3], fill=(255, 255, 255, 128))
    r, g, b, a = canvas.to_image().getpixel((1, 1))
    assert 120 <= r <= 135
    assert a == 255


def test_rotated_image_keeps_centre():
    canvas = Canvas(100, 100)
    bar = Image.new("RGBA", (40, 10), (0, 255, 0, 255))
    canvas.draw_image_rotated(bar, 30, 45, math.pi / 2)
    frame = canvas.to_image()
    assert frame.getpixel((50, 50))[1] > 200
    # now vertical: covered above the centre, not to the side
    assert frame.getpixel((50, 35))[1] > 200
    assert frame.getpixel((35, 50))[1] == 0


def test_text_outline_draws_fill_and_black():
    fonts = FontBook()
    canvas = Canvas(300, 100, background=(255, 255, 255, 255))
    draw_text_with_outline(canvas, "HI", fonts.get(48), 150, 50, (0, 255, 0, 255))
    colors = {color for _, color in canvas.to_image().getcolors(maxcolors=100000)}
    assert (0, 255, 0, 255) in colors
    assert (0, 0, 0, 255) in colors


def test_sparkle_brightens_centre():
    canvas = Canvas(30, 30)
    draw_sparkle(canvas, 15, 15, 8, 1.0)
    r, g, b, _ = canvas.to_image().getpixel((15, 15))
    assert r > 200 and g > 200


def test_fontbook_caches_sizes():
    fonts = FontBook()
    assert fonts.get(20) is fonts.get(20.2)
    assert fonts.measure("POTATO", 30) > fonts.measure("POTATO", 10)


def test_fontbook_rejects_missing_font(tmp_path):
    with pytest.raises(FontLoadError):
        FontBook(tmp_path / "missing.ttf")
