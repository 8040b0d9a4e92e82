"""
Concurrent fetch of the two meme subject images.
"""

import random
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout, as_completed
from dataclasses import dataclass
from typing import Dict, Optional

import requests
from PIL import Image
from loguru import logger

from .cat_client import CatFetcher
from .reddit_scraper import PotatoSearcher
from .session import ImageSourceError, download_image


SEARCH_QUERIES = (
    "weird potato",
    "funny potato",
    "potato fail",
    "potato meme",
    "ugly potato",
    "potato face",
)


@dataclass
class SubjectImages:
    """The decoded potato and cat images for one meme."""
    potato: Image.Image
    cat: Image.Image


class SubjectImageFetcher:
    """
    Fetches the potato and the cat in parallel.

    Both downloads must succeed; the first failure is raised and the other
    result is discarded.
    """

    def __init__(
        self,
        searcher: PotatoSearcher,
        cat_fetcher: CatFetcher,
        session: requests.Session,
        download_timeout: float = 10,
        rng: Optional[random.Random] = None
    ):
        self.searcher = searcher
        self.cat_fetcher = cat_fetcher
        self.session = session
        self.download_timeout = download_timeout
        self._rng = rng or random.Random()

    def fetch_potato(self) -> Image.Image:
        """Search for a potato URL and download it."""
        query = self._rng.choice(SEARCH_QUERIES)
        url = self.searcher.search_random(query)
        logger.info(f"Potato image: {url}")
        return download_image(self.session, url, timeout=self.download_timeout)

    def fetch_pair(self, timeout: Optional[float] = None) -> SubjectImages:
        """
        Fetch both subject images concurrently.

        Args:
            timeout: Overall deadline in seconds, None to wait indefinitely

        Raises:
            ImageSourceError: If either fetch fails or the deadline passes
        """
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            futures = {
                executor.submit(self.fetch_potato): "potato",
                executor.submit(self.cat_fetcher.fetch_random_cat): "cat",
            }

            results: Dict[str, Image.Image] = {}
            try:
                for future in as_completed(futures, timeout=timeout):
                    name = futures[future]
                    try:
                        results[name] = future.result()
                    except ImageSourceError as e:
                        logger.error(f"Failed to fetch {name} image: {e}")
                        raise ImageSourceError(f"fetching {name} image: {e}") from e
            except FuturesTimeout as e:
                raise ImageSourceError(f"fetching images timed out after {timeout}s") from e
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return SubjectImages(potato=results["potato"], cat=results["cat"])
