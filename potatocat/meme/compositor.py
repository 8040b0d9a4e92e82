"""
Layer compositor for the animated potato-cat meme.

Draws one frame at a time onto a fresh Canvas, back to front:
cat background, hypno wheel, divine glow, main potato, potato clones,
comic bursts, sparkles, meme text and the news ticker.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from PIL import Image
from loguru import logger

from .effects import ComicBurst, FrameParams, PotatoClone
from .fonts import FontBook
from .primitives import (
    Canvas,
    draw_sparkle,
    draw_text_with_outline,
    scale_height,
    scale_image,
    star_polygon,
)


@dataclass(frozen=True)
class AnimationConfig:
    """Fixed layout constants for the animated meme."""

    canvas_width: int = 640
    canvas_height: int = 480
    font_size: int = 48
    outline_shift: int = 2  # does not scale with font size
    top_margin: int = 40
    bottom_margin: int = 440
    potato_scale: float = 0.4  # fraction of canvas width
    potato_margin_right: int = 20
    potato_margin_bottom: int = 60

    # Optional layers
    zoom: bool = True
    hypno_wheel: bool = True
    glow: bool = True
    clones: bool = True
    bursts: bool = True
    ticker: bool = True


ZOOM_THRESHOLD = 1.001

HYPNO_SLICES = 8
HYPNO_ALPHA = 0.08
HYPNO_RADIUS_RATIO = 0.8

GLOW_RINGS = 12
GLOW_COLOR = (255, 217, 51)

BURST_POINTS = 10
BURST_OUTER_RADIUS = 45.0
BURST_INNER_RADIUS = 22.0
BURST_FONT_SIZE = 16.0
BURST_FILL = (255, 242, 0, 230)
BURST_RED = (204, 0, 0, 255)

TICKER_HEIGHT = 30
TICKER_FONT_SIZE = 18
TICKER_GAP = 100
TICKER_BANNER = (0, 0, 0, 178)
TICKER_ACCENT = (204, 0, 0, 229)
WHITE = (255, 255, 255, 255)


@dataclass
class PreparedScene:
    """Inputs scaled once per animation and shared by every frame."""

    background: Image.Image
    potato: Image.Image
    potato_source: Image.Image
    potato_x: int
    potato_y: int
    top_text: str
    bottom_text: str
    ticker_message: str
    _potato_sizes: Dict[Tuple[int, int], Image.Image] = field(default_factory=dict, repr=False)

    def scaled_potato(self, width: int, height: int) -> Image.Image:
        """Potato source scaled to width x height, cached per size."""
        key = (width, height)
        if key not in self._potato_sizes:
            self._potato_sizes[key] = scale_image(self.potato_source, width, height)
        return self._potato_sizes[key]


class LayerCompositor:
    """
    Composites a single animation frame from a PreparedScene.

    The canvas for a frame is created inside compose_frame and is never
    shared between frames.
    """

    def __init__(self, fonts: FontBook, config: Optional[AnimationConfig] = None):
        self.fonts = fonts
        self.config = config or AnimationConfig()

    def prepare(
        self,
        potato: Image.Image,
        cat: Image.Image,
        top_text: str,
        bottom_text: str,
        ticker_message: str
    ) -> PreparedScene:
        """Scale the subject images once before the frame loop."""
        cfg = self.config
        potato = potato.convert('RGBA')

        potato_w = int(cfg.canvas_width * cfg.potato_scale)
        # very wide sources would otherwise round down to zero rows
        potato_h = max(1, scale_height(potato, potato_w))

        return PreparedScene(
            background=scale_image(cat, cfg.canvas_width, cfg.canvas_height),
            potato=scale_image(potato, potato_w, potato_h),
            potato_source=potato,
            potato_x=cfg.canvas_width - potato_w - cfg.potato_margin_right,
            potato_y=cfg.canvas_height - potato_h - cfg.potato_margin_bottom,
            top_text=top_text.upper(),
            bottom_text=bottom_text.upper(),
            ticker_message=ticker_message,
        )

    def compose_frame(self, scene: PreparedScene, params: FrameParams) -> Image.Image:
        """Draw every layer for one frame and return the RGBA result."""
        cfg = self.config
        canvas = Canvas(cfg.canvas_width, cfg.canvas_height)

        zoom = params.zoom_scale if cfg.zoom else 1.0
        self._draw_background(canvas, scene.background, zoom, params.shake_dx, params.shake_dy)

        if cfg.hypno_wheel:
            self._draw_hypno_wheel(canvas, params.spiral_angle)

        potato_x = scene.potato_x
        potato_y = scene.potato_y + params.potato_bounce_y
        center_x = potato_x + scene.potato.width / 2
        center_y = potato_y + scene.potato.height / 2

        if cfg.glow:
            self._draw_divine_glow(canvas, center_x, center_y, params.glow_radius, params.glow_alpha)

        canvas.draw_image_rotated(scene.potato, potato_x, potato_y, params.potato_rotation)

        if cfg.clones:
            for clone in params.clones:
                self._draw_clone(canvas, scene, clone)

        if cfg.bursts:
            for burst in params.bursts:
                if burst.visible:
                    self._draw_burst(canvas, burst)

        for sparkle in params.sparkles:
            draw_sparkle(canvas, sparkle.x, sparkle.y, sparkle.size, sparkle.alpha)

        font = self.fonts.get(cfg.font_size * params.font_scale)
        fill = params.text_color + (255,)
        center = cfg.canvas_width / 2
        draw_text_with_outline(canvas, scene.top_text, font, center, cfg.top_margin, fill, cfg.outline_shift)
        draw_text_with_outline(canvas, scene.bottom_text, font, center, cfg.bottom_margin, fill, cfg.outline_shift)

        if cfg.ticker:
            self._draw_ticker(canvas, scene.ticker_message, params.ticker_x)

        return canvas.to_image()

    def _draw_background(
        self,
        canvas: Canvas,
        background: Image.Image,
        zoom: float,
        shake_dx: int,
        shake_dy: int
    ) -> None:
        """Cat background zoomed about the canvas centre, then shaken."""
        if zoom > ZOOM_THRESHOLD:
            zoomed_w = int(canvas.width * zoom)
            zoomed_h = int(canvas.height * zoom)
            zoomed = background.resize((zoomed_w, zoomed_h), Image.Resampling.BILINEAR)
            offset_x = -((zoomed_w - canvas.width) // 2) + shake_dx
            offset_y = -((zoomed_h - canvas.height) // 2) + shake_dy
            canvas.draw_image(zoomed, offset_x, offset_y)
        else:
            canvas.draw_image(background, shake_dx, shake_dy)

    def _draw_hypno_wheel(self, canvas: Canvas, angle: float) -> None:
        """Alternating translucent pie slices rotating about the centre."""
        cx = canvas.width / 2
        cy = canvas.height / 2
        radius = canvas.width * HYPNO_RADIUS_RATIO
        slice_angle = 2 * math.pi / HYPNO_SLICES
        fill = (255, 255, 255, int(HYPNO_ALPHA * 255))
        box = [cx - radius, cy - radius, cx + radius, cy + radius]

        with canvas.overlay() as draw:
            for i in range(1, HYPNO_SLICES, 2):
                start = angle + i * slice_angle
                draw.pieslice(box, math.degrees(start), math.degrees(start + slice_angle), fill=fill)

    def _draw_divine_glow(
        self,
        canvas: Canvas,
        cx: float,
        cy: float,
        radius: int,
        alpha: float
    ) -> None:
        """Concentric gold circles, brighter towards the centre."""
        for i in range(GLOW_RINGS, 0, -1):
            r = radius * i / GLOW_RINGS
            ring_alpha = alpha * (1.0 - i / GLOW_RINGS) * 0.8
            if ring_alpha < 0.01 or r < 1:
                continue
            with canvas.overlay() as draw:
                draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=GLOW_COLOR + (int(ring_alpha * 255),))

    def _draw_clone(self, canvas: Canvas, scene: PreparedScene, clone: PotatoClone) -> None:
        clone_w = int(canvas.width * clone.scale)
        clone_h = scale_height(scene.potato_source, clone_w)
        if clone_w < 1 or clone_h < 1:
            logger.debug(f"Skipping degenerate clone {clone_w}x{clone_h}")
            return

        image = scene.scaled_potato(clone_w, clone_h)
        canvas.draw_image_rotated(image, clone.x, clone.y + clone.bounce_y, clone.rotation)

    def _draw_burst(self, canvas: Canvas, burst: ComicBurst) -> None:
        """Yellow starburst with a red outline and label, rotated as one piece."""
        outer_r = BURST_OUTER_RADIUS * burst.scale
        inner_r = BURST_INNER_RADIUS * burst.scale
        side = 2 * (int(outer_r) + 4)
        mid = side / 2

        burst_canvas = Canvas(side, side, background=(0, 0, 0, 0))
        vertices = star_polygon(mid, mid, outer_r, inner_r, BURST_POINTS)
        with burst_canvas.overlay() as draw:
            draw.polygon(vertices, fill=BURST_FILL, outline=BURST_RED, width=2)
        burst_canvas.draw_text(burst.text, (mid, mid), self.fonts.get(BURST_FONT_SIZE * burst.scale), BURST_RED)

        canvas.draw_image_rotated(
            burst_canvas.to_image(),
            burst.x - side // 2,
            burst.y - side // 2,
            burst.rotation
        )

    def _draw_ticker(self, canvas: Canvas, message: str, ticker_x: float) -> None:
        """News banner along the bottom with a message scrolling left."""
        banner_y = canvas.height - TICKER_HEIGHT

        with canvas.overlay() as draw:
            draw.rectangle([0, banner_y, canvas.width, canvas.height], fill=TICKER_BANNER)
        with canvas.overlay() as draw:
            draw.rectangle([0, banner_y, canvas.width, banner_y + 1], fill=TICKER_ACCENT)

        font = self.fonts.get(TICKER_FONT_SIZE)
        text_y = banner_y + TICKER_HEIGHT / 2
        width = self.fonts.measure(message, TICKER_FONT_SIZE)

        # Second copy follows the first so the scroll appears to wrap.
        canvas.draw_text(message, (ticker_x, text_y), font, WHITE, anchor='lm')
        canvas.draw_text(message, (ticker_x + width + TICKER_GAP, text_y), font, WHITE, anchor='lm')
