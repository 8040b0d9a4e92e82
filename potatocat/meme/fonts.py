"""
Font loading and caching for meme text.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from PIL import ImageFont
from loguru import logger


class FontLoadError(RuntimeError):
    """Raised when a configured font cannot be loaded."""


class FontBook:
    """
    Resolves one TrueType face and hands out sized copies of it.

    An explicit font path must load or construction fails. Without one,
    common bold system fonts are tried before Pillow's bundled default.
    """

    SYSTEM_FONTS = ['Anton-Regular', 'Impact', 'DejaVuSans-Bold', 'Arial-Bold', 'FreeSansBold']

    def __init__(self, font_path: Optional[Union[str, Path]] = None, base_size: int = 48):
        self.font_path = str(font_path) if font_path else None
        self._cache: Dict[int, ImageFont.FreeTypeFont] = {}

        if self.font_path:
            try:
                self._cache[base_size] = ImageFont.truetype(self.font_path, base_size)
            except OSError as e:
                raise FontLoadError(f"loading font {self.font_path}: {e}") from e
        else:
            self._cache[base_size] = self._find_system_font(base_size)

    def _find_system_font(self, size: int) -> ImageFont.FreeTypeFont:
        for font_name in self.SYSTEM_FONTS:
            try:
                font = ImageFont.truetype(font_name, size)
            except OSError:
                continue
            self.font_path = font_name
            logger.debug(f"Using system font {font_name}")
            return font

        logger.warning("No system meme font found - using Pillow default font")
        return ImageFont.load_default(size=size)

    def _open(self, size: int) -> ImageFont.FreeTypeFont:
        if self.font_path:
            return ImageFont.truetype(self.font_path, size)
        return ImageFont.load_default(size=size)

    def get(self, size: float) -> ImageFont.FreeTypeFont:
        """Get the font at the given point size (rounded to whole points)."""
        key = max(1, int(round(size)))
        if key not in self._cache:
            self._cache[key] = self._open(key)
        return self._cache[key]

    def measure(self, text: str, size: float) -> float:
        """Advance width of a single line of text."""
        return self.get(size).getlength(text)
