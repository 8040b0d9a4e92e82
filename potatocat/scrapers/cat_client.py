"""
Client for CATAAS (Cat as a Service).
"""

from abc import ABC, abstractmethod

import requests
from PIL import Image
from loguru import logger

from .session import ImageSourceError, decode_image


class CatFetcher(ABC):
    """Retrieves cat images."""

    @abstractmethod
    def fetch_random_cat(self) -> Image.Image:
        """Return a random decoded cat image."""


class CataasClient(CatFetcher):
    """Fetches random cats from cataas.com."""

    BASE_URL = "https://cataas.com/cat"

    def __init__(self, session: requests.Session, base_url: str = BASE_URL, timeout: float = 10):
        self.session = session
        self.base_url = base_url
        self.timeout = timeout

    def fetch_random_cat(self) -> Image.Image:
        """
        Fetch a random cat image.

        Raises:
            ImageSourceError: On transport errors, non-200 responses or bad data
        """
        try:
            response = self.session.get(self.base_url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ImageSourceError(f"fetching cat image: {e}") from e

        if response.status_code != 200:
            raise ImageSourceError(f"cataas returned status {response.status_code}")

        image = decode_image(response.content, "cat")
        logger.debug(f"Fetched cat image {image.width}x{image.height}")
        return image
