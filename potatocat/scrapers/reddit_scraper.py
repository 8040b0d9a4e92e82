"""
Potato image search backed by Reddit's public JSON listings.

No API key is needed, only a descriptive User-Agent. Any failure falls back
to a fixed list of known potato images so a meme can always be made.
"""

import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import requests
from loguru import logger


SUBREDDITS = ("potato", "PotatoesAreFunny", "potatoes")

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")

FALLBACK_URLS = (
    "https://upload.wikimedia.org/wikipedia/commons/a/ab/Patates.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/4/47/Russet_potato_cultivar_with_sprouts.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/0/0c/Potato_and_cross_section.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/6/60/Potatoes.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/e/e0/Potato_flowers.jpg",
)


class PotatoSearcher(ABC):
    """Finds potato images on the internet."""

    @abstractmethod
    def search_random(self, query: str) -> str:
        """Return the URL of a random potato image."""


def is_image_url(url: str) -> bool:
    """Check whether the URL ends with a common still image extension."""
    return url.lower().endswith(IMAGE_EXTENSIONS)


class RedditClient(PotatoSearcher):
    """
    Picks random potato images from potato subreddits.

    Features:
    - Filters to SFW still-image posts
    - Falls back to a static URL list on any failure
    """

    LISTING_URL = "https://www.reddit.com/r/{subreddit}/hot.json?limit=50"

    def __init__(
        self,
        session: requests.Session,
        subreddits: Sequence[str] = SUBREDDITS,
        timeout: float = 10,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the client.

        Args:
            session: HTTP session (should carry the User-Agent header)
            subreddits: Subreddits to choose from
            timeout: Request timeout in seconds
            rng: Random source for subreddit and post choice
        """
        self.session = session
        self.subreddits = list(subreddits)
        self.timeout = timeout
        self._rng = rng or random.Random()

    def search_random(self, query: str) -> str:
        """
        Return a random potato image URL.

        The query is accepted for interface compatibility but ignored;
        images come from potato-specific subreddits.
        """
        try:
            return self._fetch_from_reddit()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Reddit search failed, using fallback: {e}")
            return self._rng.choice(FALLBACK_URLS)

    def _fetch_from_reddit(self) -> str:
        subreddit = self._rng.choice(self.subreddits)
        url = self.LISTING_URL.format(subreddit=subreddit)
        logger.debug(f"Fetching listing: {url}")

        response = self.session.get(url, timeout=self.timeout)
        if response.status_code != 200:
            raise ValueError(f"reddit returned status {response.status_code}")

        candidates = self._extract_candidates(response.json())
        if not candidates:
            raise ValueError(f"no qualifying image posts found in r/{subreddit}")

        logger.debug(f"Found {len(candidates)} candidate images in r/{subreddit}")
        return self._rng.choice(candidates)

    @staticmethod
    def _extract_candidates(listing: Any) -> List[str]:
        """Keep SFW, non-video image posts with a direct image URL."""
        if not isinstance(listing, dict):
            raise ValueError(f"unexpected listing type {type(listing).__name__}")

        data = listing.get("data")
        children = data.get("children") if isinstance(data, dict) else None
        if not isinstance(children, list):
            return []

        candidates = []
        for child in children:
            post = child.get("data") if isinstance(child, dict) else None
            if not isinstance(post, dict):
                continue
            if post.get("post_hint") != "image":
                continue
            if post.get("is_video") or post.get("over_18"):
                continue
            url = post.get("url")
            if not isinstance(url, str) or not is_image_url(url):
                continue
            candidates.append(url)
        return candidates
