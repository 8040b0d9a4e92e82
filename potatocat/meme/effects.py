"""
Per-frame animation parameters.

Every visual variation in the animated meme (rainbow text, bouncing potato,
sparkles, bursts, ...) is derived here from the frame index alone, so the
same frame always renders the same way.
"""

import math
import random
from dataclasses import dataclass
from typing import Tuple

from .phrases import BURST_WORDS


TOTAL_FRAMES = 16
FRAME_DELAY = 8  # centiseconds per frame (~1.3s loop)

BOUNCE_HEIGHT = 40.0
CLONE_BOUNCE_HEIGHT = 30.0
GLOW_BASE_RADIUS = 160
TICKER_SPEED = 12  # pixels per frame
BURST_INSET = 70

# (x fraction, y fraction, size as fraction of canvas width, cycles per loop)
CLONE_LAYOUT = (
    (0.04, 0.52, 0.15, 1),
    (0.24, 0.62, 0.20, 2),
    (0.08, 0.16, 0.25, 3),
)

# Seeds per overlay category: seed = frame * multiplier + offset
SHAKE_SEED = (7919, 6271)
BURST_SEED = (3571, 911)


@dataclass(frozen=True)
class Sparkle:
    """A single sparkle overlay."""
    x: int
    y: int
    size: int  # radius in pixels
    alpha: float  # 0.0 to 1.0


@dataclass(frozen=True)
class PotatoClone:
    """A smaller potato copy bouncing on its own cycle."""
    x: int
    y: int
    scale: float  # width as a fraction of canvas width
    rotation: float  # radians
    bounce_y: int


@dataclass(frozen=True)
class ComicBurst:
    """A starburst callout with a short word."""
    x: int
    y: int
    text: str
    rotation: float
    scale: float
    visible: bool


@dataclass(frozen=True)
class FrameParams:
    """All computed animation values for a single frame."""

    text_color: Tuple[int, int, int]
    font_scale: float
    potato_bounce_y: int  # negative = up
    potato_rotation: float  # radians
    shake_dx: int
    shake_dy: int
    sparkles: Tuple[Sparkle, ...]
    clones: Tuple[PotatoClone, ...]
    glow_alpha: float
    glow_radius: int
    ticker_x: float
    zoom_scale: float
    spiral_angle: float
    bursts: Tuple[ComicBurst, ...]


def _frame_rng(frame: int, seed: Tuple[int, int]) -> random.Random:
    multiplier, offset = seed
    return random.Random(frame * multiplier + offset)


def compute_frame_params(
    frame: int,
    total_frames: int,
    canvas_width: int,
    canvas_height: int
) -> FrameParams:
    """
    Calculate animation parameters for a given frame.

    Args:
        frame: Frame index in [0, total_frames)
        total_frames: Number of frames in one loop
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels

    Returns:
        FrameParams for that frame
    """
    t = frame / total_frames
    wave = math.sin(2 * math.pi * t)

    text_color = hsl_to_rgb(t * 360.0, 1.0, 0.55)
    font_scale = 1.0 + 0.15 * wave
    potato_bounce_y = -int(abs(wave) * BOUNCE_HEIGHT)
    potato_rotation = 0.17 * wave

    rng = _frame_rng(frame, SHAKE_SEED)
    shake_dx = rng.randint(-3, 3)
    shake_dy = rng.randint(-3, 3)

    sparkles = tuple(
        Sparkle(
            x=rng.randrange(canvas_width),
            y=rng.randrange(canvas_height),
            size=4 + rng.randrange(8),
            alpha=0.5 + rng.random() * 0.5,
        )
        for _ in range(6 + rng.randrange(3))
    )

    glow_wave = math.sin(2 * math.pi * 1.5 * t)

    return FrameParams(
        text_color=text_color,
        font_scale=font_scale,
        potato_bounce_y=potato_bounce_y,
        potato_rotation=potato_rotation,
        shake_dx=shake_dx,
        shake_dy=shake_dy,
        sparkles=sparkles,
        clones=_compute_clones(t, canvas_width, canvas_height),
        glow_alpha=0.4 + 0.2 * glow_wave,
        glow_radius=GLOW_BASE_RADIUS + int(20 * glow_wave),
        ticker_x=float(canvas_width - frame * TICKER_SPEED),
        zoom_scale=1.04 + 0.04 * math.sin(2 * math.pi * 0.8 * t),
        spiral_angle=math.pi * t,
        bursts=_compute_bursts(frame, canvas_width, canvas_height),
    )


def _compute_clones(t: float, canvas_width: int, canvas_height: int) -> Tuple[PotatoClone, ...]:
    clones = []
    for i, (fx, fy, scale, cycles) in enumerate(CLONE_LAYOUT):
        phase = i * 2 * math.pi / len(CLONE_LAYOUT)
        angle = 2 * math.pi * cycles * t + phase
        clones.append(PotatoClone(
            x=int(canvas_width * fx),
            y=int(canvas_height * fy),
            scale=scale,
            rotation=0.3 * math.sin(angle),
            bounce_y=-int(abs(math.sin(angle)) * CLONE_BOUNCE_HEIGHT),
        ))
    return tuple(clones)


def _compute_bursts(frame: int, canvas_width: int, canvas_height: int) -> Tuple[ComicBurst, ...]:
    rng = _frame_rng(frame, BURST_SEED)
    bursts = []
    for slot in range(2):
        bursts.append(ComicBurst(
            x=rng.randint(BURST_INSET, max(BURST_INSET, canvas_width - BURST_INSET)),
            y=rng.randint(BURST_INSET, max(BURST_INSET, canvas_height - BURST_INSET)),
            text=rng.choice(BURST_WORDS),
            rotation=rng.uniform(-0.25, 0.25),
            scale=rng.uniform(0.7, 1.3),
            visible=(frame + slot) % 3 != 0,
        ))
    return tuple(bursts)


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL (hue 0-360, saturation 0-1, lightness 0-1) to RGB bytes."""
    h = h % 360.0

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (int((r + m) * 255), int((g + m) * 255), int((b + m) * 255))
