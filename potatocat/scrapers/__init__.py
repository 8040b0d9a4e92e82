"""
Image sources for the potato-cat service: Reddit potatoes and CATAAS cats.
"""

from .cat_client import CataasClient, CatFetcher
from .image_fetcher import SubjectImageFetcher, SubjectImages
from .reddit_scraper import PotatoSearcher, RedditClient, is_image_url
from .session import ImageSourceError, create_session, download_image

__all__ = [
    "CataasClient",
    "CatFetcher",
    "SubjectImageFetcher",
    "SubjectImages",
    "PotatoSearcher",
    "RedditClient",
    "is_image_url",
    "ImageSourceError",
    "create_session",
    "download_image",
]
