"""
HTTP service exposing the animated potato-cat meme.
"""

from .app import build_app, create_app

__all__ = [
    "build_app",
    "create_app",
]
