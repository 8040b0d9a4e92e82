"""
Animation assembly: palette quantization and GIF packaging.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np
from PIL import Image
from loguru import logger

from .effects import FRAME_DELAY


def _plan9_palette() -> np.ndarray:
    """The 256-colour Plan 9 palette: 4x4x4 RGB cube crossed with 4 value levels."""
    palette = np.zeros((256, 3), dtype=np.uint8)
    i = 0
    for r in range(4):
        for v in range(4):
            j = v - r
            for g in range(4):
                for b in range(4):
                    den = max(r, g, b)
                    if den == 0:
                        color = (17 * v, 17 * v, 17 * v)
                    else:
                        num = 17 * (4 * den + v)
                        color = (r * num // den, g * num // den, b * num // den)
                    palette[i + (j & 0x0F)] = color
                    j += 1
            i += 16
    return palette


PLAN9_PALETTE = _plan9_palette()

_PALETTE_IMAGE = Image.new('P', (1, 1))
_PALETTE_IMAGE.putpalette(PLAN9_PALETTE.flatten().tolist())


def quantize_frame(frame: Image.Image) -> Image.Image:
    """Reduce a frame to the reference palette with Floyd-Steinberg dithering."""
    return frame.convert('RGB').quantize(
        palette=_PALETTE_IMAGE,
        dither=Image.Dither.FLOYDSTEINBERG
    )


def _mark_repeated_frames(frames: List[Image.Image]) -> List[Image.Image]:
    """
    Make every frame differ from the one written before it.

    Pillow's GIF writer folds a frame that repeats its predecessor into the
    previous one. A repeat gets its top-left pixel switched to a palette
    index declared transparent for that frame only, so the identical pixel
    underneath still shows and the frame count is kept.
    """
    marked: List[Image.Image] = []
    for frame in frames:
        if marked and _same_pixels(marked[-1], frame):
            frame = frame.copy()
            index = (frame.getpixel((0, 0)) + 1) % 256
            frame.putpixel((0, 0), index)
            frame.info['transparency'] = index
        marked.append(frame)
    return marked


def _same_pixels(a: Image.Image, b: Image.Image) -> bool:
    return (
        a.mode == b.mode == 'P'
        and a.size == b.size
        and a.getpalette() == b.getpalette()
        and a.tobytes() == b.tobytes()
    )


@dataclass
class AnimatedImage:
    """An ordered set of palette frames with per-frame delays."""

    frames: List[Image.Image] = field(default_factory=list)
    delays: List[int] = field(default_factory=list)  # centiseconds
    loop_count: int = 0  # 0 = loop forever

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def size(self) -> Tuple[int, int]:
        """Canvas size shared by every frame."""
        return self.frames[0].size if self.frames else (0, 0)

    def to_numpy(self) -> np.ndarray:
        """Stack the frames into an (N, H, W, 3) RGB array."""
        return np.stack([np.array(frame.convert('RGB')) for frame in self.frames])

    def to_gif_bytes(self) -> bytes:
        """Encode as an animated GIF."""
        buffer = io.BytesIO()
        self.save(buffer)
        return buffer.getvalue()

    def save(self, path: Union[str, Path, io.BytesIO]) -> None:
        """Write the animation as a GIF file."""
        if not self.frames:
            raise ValueError("animation has no frames")

        target = str(path) if isinstance(path, Path) else path
        frames = _mark_repeated_frames(self.frames)
        frames[0].save(
            target,
            format='GIF',
            save_all=True,
            append_images=frames[1:],
            duration=[delay * 10 for delay in self.delays],
            loop=self.loop_count,
            optimize=False,
        )

    def __repr__(self) -> str:
        width, height = self.size
        return f"AnimatedImage({len(self.frames)} frames, {width}x{height}, loop={self.loop_count})"


class AnimationAssembler:
    """Collects composited frames in order and builds an AnimatedImage."""

    def __init__(self, delay: int = FRAME_DELAY, loop_count: int = 0):
        self.delay = delay
        self.loop_count = loop_count
        self._frames: List[Image.Image] = []

    def add_frame(self, frame: Image.Image) -> None:
        """Quantize and append the next frame."""
        self._frames.append(quantize_frame(frame))

    def build(self) -> AnimatedImage:
        logger.debug(f"Assembled {len(self._frames)} frames at {self.delay}cs")
        return AnimatedImage(
            frames=list(self._frames),
            delays=[self.delay] * len(self._frames),
            loop_count=self.loop_count,
        )
