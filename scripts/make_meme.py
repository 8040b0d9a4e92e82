#!/usr/bin/env python3
"""
Generate an animated potato-cat meme GIF from the command line.

Images come from local files when given, otherwise from Reddit and CATAAS.
"""

import argparse
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger
from PIL import Image

from potatocat import load_config
from potatocat.meme import CompositingMemeGenerator
from potatocat.scrapers import CataasClient, RedditClient, SubjectImageFetcher, create_session


def setup_logging(verbose: bool) -> None:
    """Configure logging level."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )


def load_subjects(potato_path: str, cat_path: str, timeout: float, http_timeout: float):
    """Open local images, fetching whichever one is missing."""
    potato = Image.open(potato_path).convert("RGBA") if potato_path else None
    cat = Image.open(cat_path).convert("RGBA") if cat_path else None

    if potato is not None and cat is not None:
        return potato, cat

    session = create_session()
    fetcher = SubjectImageFetcher(
        searcher=RedditClient(session, timeout=http_timeout),
        cat_fetcher=CataasClient(session, timeout=http_timeout),
        session=session,
        download_timeout=http_timeout,
    )

    if potato is None and cat is None:
        images = fetcher.fetch_pair(timeout=timeout)
        return images.potato, images.cat
    if potato is None:
        return fetcher.fetch_potato(), cat
    return potato, fetcher.cat_fetcher.fetch_random_cat()


def main():
    parser = argparse.ArgumentParser(
        description="Generate an animated potato-cat meme",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch both images and pick random captions
  python scripts/make_meme.py -o output/meme.gif

  # Use local images and explicit captions
  python scripts/make_meme.py --potato spud.jpg --cat tom.png --top "i can haz" --bottom "potato?"

  # Reproducible captions
  python scripts/make_meme.py --seed 42
"""
    )

    parser.add_argument("--potato", default="", help="Local potato image (default: search Reddit)")
    parser.add_argument("--cat", default="", help="Local cat image (default: fetch from CATAAS)")
    parser.add_argument("--top", default="", help="Top text")
    parser.add_argument("--bottom", default="", help="Bottom text")
    parser.add_argument(
        "--output", "-o",
        default="output/meme.gif",
        help="Output GIF path (default: output/meme.gif)"
    )
    parser.add_argument("--font", default=None, help="TrueType font for captions")
    parser.add_argument("--seed", type=int, default=None, help="Seed for caption/ticker choice")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()
    setup_logging(args.verbose)
    config = load_config()

    try:
        potato, cat = load_subjects(args.potato, args.cat, config.request_timeout, config.http_timeout)

        rng = random.Random(args.seed) if args.seed is not None else None
        generator = CompositingMemeGenerator(font_path=args.font or config.font_path, rng=rng)

        if args.top and args.bottom:
            animation = generator.generate(potato, cat, args.top, args.bottom)
        else:
            animation = generator.generate_random(potato, cat)

        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        animation.save(output)
        logger.info(f"Saved meme to: {output}")

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Error: {e}")
        if args.verbose:
            raise
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
