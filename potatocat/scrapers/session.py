"""
Shared HTTP helpers for the image sources.
"""

import io

import requests
from PIL import Image, UnidentifiedImageError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from loguru import logger


USER_AGENT = "potato-nice-thelma/1.0"


class ImageSourceError(RuntimeError):
    """Raised when a subject image cannot be fetched or decoded."""


def create_session(max_retries: int = 2, user_agent: str = USER_AGENT) -> requests.Session:
    """Create a requests session with retry logic."""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "image/*, application/json;q=0.9, */*;q=0.8",
    })

    return session


def decode_image(data: bytes, source: str) -> Image.Image:
    """Decode raw bytes into an RGBA still image."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageSourceError(f"decoding {source} image: {e}") from e
    return image.convert("RGBA")


def download_image(session: requests.Session, url: str, timeout: float = 10) -> Image.Image:
    """
    Download and decode an image.

    Args:
        session: HTTP session to use
        url: Image URL
        timeout: Request timeout in seconds

    Returns:
        Decoded RGBA image

    Raises:
        ImageSourceError: On transport errors, non-200 responses or bad data
    """
    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ImageSourceError(f"downloading {url}: {e}") from e

    if response.status_code != 200:
        raise ImageSourceError(f"image download returned status {response.status_code}")

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return decode_image(response.content, "downloaded")
