"""
Meme generator facade.

Validates the subject images, picks captions and drives the compositor and
assembler across every frame of the animation.
"""

import random
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from PIL import Image
from loguru import logger

from .assembler import AnimatedImage, AnimationAssembler
from .compositor import AnimationConfig, LayerCompositor
from .effects import FRAME_DELAY, TOTAL_FRAMES, compute_frame_params
from .fonts import FontBook
from .phrases import MEME_TEXTS, TICKER_MESSAGES


class MemeValidationError(ValueError):
    """Raised when a required subject image is missing."""


class MemeGenerator(ABC):
    """Composites a potato image and a cat image into an animated meme."""

    @abstractmethod
    def generate(
        self,
        potato: Optional[Image.Image],
        cat: Optional[Image.Image],
        top_text: str,
        bottom_text: str
    ) -> AnimatedImage:
        ...

    @abstractmethod
    def generate_random(
        self,
        potato: Optional[Image.Image],
        cat: Optional[Image.Image]
    ) -> AnimatedImage:
        ...


class CompositingMemeGenerator(MemeGenerator):
    """
    Builds the full chaos-effects animation.

    The cat fills the background, the potato bounces in the lower right and
    the captions cycle through the rainbow, TOTAL_FRAMES frames per loop.
    """

    def __init__(
        self,
        config: Optional[AnimationConfig] = None,
        font_path: Optional[Union[str, Path]] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the generator.

        Args:
            config: Layout constants and optional layer toggles
            font_path: TrueType font for captions, None for a system font
            rng: Source for caption and ticker choices

        Raises:
            FontLoadError: If font_path is given but cannot be loaded
        """
        self.config = config or AnimationConfig()
        self.fonts = FontBook(font_path, base_size=self.config.font_size)
        self.compositor = LayerCompositor(self.fonts, self.config)
        self._rng = rng or random.Random()

    def generate(
        self,
        potato: Optional[Image.Image],
        cat: Optional[Image.Image],
        top_text: str,
        bottom_text: str
    ) -> AnimatedImage:
        """
        Composite the animation with explicit captions.

        Args:
            potato: Foreground subject
            cat: Background subject
            top_text: Caption for the top of the frame
            bottom_text: Caption for the bottom of the frame

        Returns:
            AnimatedImage with TOTAL_FRAMES frames

        Raises:
            MemeValidationError: If either image is missing
        """
        if potato is None:
            raise MemeValidationError("potato image is required")
        if cat is None:
            raise MemeValidationError("cat image is required")

        ticker_message = self._rng.choice(TICKER_MESSAGES)
        scene = self.compositor.prepare(potato, cat, top_text, bottom_text, ticker_message)

        cfg = self.config
        assembler = AnimationAssembler(delay=FRAME_DELAY, loop_count=0)
        for frame in range(TOTAL_FRAMES):
            params = compute_frame_params(frame, TOTAL_FRAMES, cfg.canvas_width, cfg.canvas_height)
            assembler.add_frame(self.compositor.compose_frame(scene, params))

        animation = assembler.build()
        logger.info(f"Generated meme '{scene.top_text}' / '{scene.bottom_text}': {animation!r}")
        return animation

    def generate_random(
        self,
        potato: Optional[Image.Image],
        cat: Optional[Image.Image]
    ) -> AnimatedImage:
        """Composite the animation with a random predefined caption pair."""
        text = self._rng.choice(MEME_TEXTS)
        return self.generate(potato, cat, text.top, text.bottom)
