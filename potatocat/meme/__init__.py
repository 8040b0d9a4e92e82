"""
Meme generation module for the potato-cat service.

Provides the frame parameter generator, layer compositor and GIF assembly.
"""

from .assembler import (
    AnimatedImage,
    AnimationAssembler,
    quantize_frame,
)
from .compositor import (
    AnimationConfig,
    LayerCompositor,
    PreparedScene,
)
from .effects import (
    FRAME_DELAY,
    TOTAL_FRAMES,
    FrameParams,
    compute_frame_params,
)
from .fonts import FontBook, FontLoadError
from .generator import (
    CompositingMemeGenerator,
    MemeGenerator,
    MemeValidationError,
)

__all__ = [
    # Assembly
    "AnimatedImage",
    "AnimationAssembler",
    "quantize_frame",
    # Compositing
    "AnimationConfig",
    "LayerCompositor",
    "PreparedScene",
    # Effects
    "FRAME_DELAY",
    "TOTAL_FRAMES",
    "FrameParams",
    "compute_frame_params",
    # Fonts
    "FontBook",
    "FontLoadError",
    # Generator
    "CompositingMemeGenerator",
    "MemeGenerator",
    "MemeValidationError",
]
