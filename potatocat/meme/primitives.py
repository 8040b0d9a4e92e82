"""
Raster primitives used by the layer compositor.

All drawing goes through a Canvas, which owns one RGBA frame while it is
being built. Semi-transparent shapes are drawn onto a scratch layer and
alpha-composited so they blend with what is already on the canvas.
"""

import math
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from PIL import Image, ImageDraw, ImageFont


Color = Tuple[int, ...]
Point = Tuple[float, float]

BLACK = (0, 0, 0, 255)
SPARKLE_COLOR = (255, 255, 200)


def scale_height(image: Image.Image, target_width: int) -> int:
    """Height that preserves the image's aspect ratio at target_width."""
    width, height = image.size
    if width == 0:
        return target_width
    return target_width * height // width


def scale_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize to exactly width x height with bilinear filtering."""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return image.resize((width, height), Image.Resampling.BILINEAR)


def star_polygon(
    cx: float,
    cy: float,
    outer_r: float,
    inner_r: float,
    points: int,
    rotation: float = 0.0
) -> List[Point]:
    """
    Vertices of a starburst with alternating outer/inner radii.

    Returns 2 * points vertices; the path closes back to the first one.
    """
    vertices = []
    for i in range(points * 2):
        angle = rotation + i * math.pi / points
        r = inner_r if i % 2 else outer_r
        vertices.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return vertices


class Canvas:
    """Mutable fixed-size drawing surface for one frame."""

    def __init__(self, width: int, height: int, background: Color = BLACK):
        self.width = width
        self.height = height
        self._image = Image.new('RGBA', (width, height), background)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _composite(self, layer: Image.Image) -> None:
        self._image.alpha_composite(layer)

    @contextmanager
    def overlay(self) -> Iterator[ImageDraw.ImageDraw]:
        """Yield a draw handle for a transparent layer blended in on exit."""
        layer = Image.new('RGBA', self.size, (0, 0, 0, 0))
        yield ImageDraw.Draw(layer)
        self._composite(layer)

    def draw_image(self, image: Image.Image, x: int, y: int) -> None:
        """Alpha-blend image with its top-left corner at (x, y)."""
        layer = Image.new('RGBA', self.size, (0, 0, 0, 0))
        # paste handles negative offsets and clipping
        layer.paste(image, (int(x), int(y)))
        self._composite(layer)

    def draw_image_rotated(self, image: Image.Image, x: int, y: int, angle: float) -> None:
        """
        Draw image at (x, y) rotated about its own centre.

        Positive angles turn clockwise on screen.
        """
        if angle == 0:
            self.draw_image(image, x, y)
            return
        cx = x + image.width / 2
        cy = y + image.height / 2
        rotated = image.rotate(
            -math.degrees(angle),
            resample=Image.Resampling.BICUBIC,
            expand=True
        )
        self.draw_image(
            rotated,
            int(round(cx - rotated.width / 2)),
            int(round(cy - rotated.height / 2))
        )

    def draw_text(
        self,
        text: str,
        position: Point,
        font: ImageFont.FreeTypeFont,
        fill: Color,
        anchor: str = 'mm'
    ) -> None:
        """Draw opaque text anchored at position."""
        if not text:
            return
        ImageDraw.Draw(self._image).text(position, text, font=font, fill=fill, anchor=anchor)

    def to_image(self) -> Image.Image:
        """The finished frame."""
        return self._image


def draw_text_with_outline(
    canvas: Canvas,
    text: str,
    font: ImageFont.FreeTypeFont,
    cx: float,
    cy: float,
    fill: Color,
    shift: int = 2
) -> None:
    """Draw centred text with a black outline made of 8 offset copies."""
    for dx in (-shift, 0, shift):
        for dy in (-shift, 0, shift):
            if dx == 0 and dy == 0:
                continue
            canvas.draw_text(text, (cx + dx, cy + dy), font, BLACK)

    canvas.draw_text(text, (cx, cy), font, fill)


def draw_sparkle(canvas: Canvas, x: int, y: int, size: int, alpha: float) -> None:
    """Render a 4-pointed star centred at (x, y)."""
    color = SPARKLE_COLOR + (int(alpha * 255),)
    half = size * 0.6
    with canvas.overlay() as draw:
        draw.line([(x, y - size), (x, y + size)], fill=color, width=2)
        draw.line([(x - size, y), (x + size, y)], fill=color, width=2)
        draw.line([(x - half, y - half), (x + half, y + half)], fill=color, width=2)
        draw.line([(x + half, y - half), (x - half, y + half)], fill=color, width=2)
