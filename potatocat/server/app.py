"""
HTTP service for the potato-cat meme generator.

Routes:
- GET /health  liveness check
- GET /meme    animated GIF, optional ?top=&bottom= captions
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from loguru import logger

from ..config import ServiceConfig
from ..meme import CompositingMemeGenerator, MemeGenerator
from ..scrapers import (
    CataasClient,
    ImageSourceError,
    RedditClient,
    SubjectImageFetcher,
    create_session,
)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def create_app(
    fetcher: SubjectImageFetcher,
    generator: MemeGenerator,
    config: Optional[ServiceConfig] = None
) -> FastAPI:
    """
    Create the FastAPI app around the given collaborators.

    Args:
        fetcher: Fetches the potato and cat images
        generator: Builds the animated meme
        config: Service configuration (timeouts)
    """
    config = config or ServiceConfig()
    app = FastAPI(title="potato-nice-thelma")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Plain def: FastAPI runs it in its threadpool, so blocking work is fine.
    @app.get("/meme")
    def meme(top: str = "", bottom: str = ""):
        try:
            images = fetcher.fetch_pair(timeout=config.request_timeout)
        except ImageSourceError as e:
            logger.error(f"Failed to fetch images: {e}")
            return _error(502, str(e))

        try:
            if top and bottom:
                animation = generator.generate(images.potato, images.cat, top, bottom)
            else:
                animation = generator.generate_random(images.potato, images.cat)
            body = animation.to_gif_bytes()
        except Exception as e:
            logger.exception(f"Failed to generate meme: {e}")
            return _error(500, str(e))

        return Response(content=body, media_type="image/gif")

    return app


def build_app(config: ServiceConfig) -> FastAPI:
    """Wire the production clients and create the app."""
    session = create_session(max_retries=config.max_retries)
    fetcher = SubjectImageFetcher(
        searcher=RedditClient(session, timeout=config.http_timeout),
        cat_fetcher=CataasClient(session, timeout=config.http_timeout),
        session=session,
        download_timeout=config.http_timeout,
    )
    generator = CompositingMemeGenerator(font_path=config.font_path)
    logger.info(f"Meme generator ready (font: {generator.fonts.font_path or 'default'})")
    return create_app(fetcher, generator, config)
