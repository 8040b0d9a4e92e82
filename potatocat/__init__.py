"""
potato-cat meme service.

Fetches a potato and a cat, then composites them into an animated GIF.
"""

from .config import ServiceConfig, load_config

__version__ = "1.0.0"

__all__ = [
    "ServiceConfig",
    "load_config",
]
