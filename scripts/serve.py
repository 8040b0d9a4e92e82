#!/usr/bin/env python3
"""
Run the potato-cat meme web service.

Usage:
    python scripts/serve.py
    PORT=9000 python scripts/serve.py --verbose
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from loguru import logger

from potatocat import load_config
from potatocat.server import build_app


def setup_logging(level: str):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )


def main():
    parser = argparse.ArgumentParser(description="Serve animated potato-cat memes over HTTP")
    parser.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 8080)")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    try:
        config = load_config()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    setup_logging("DEBUG" if args.verbose else config.log_level)

    try:
        app = build_app(config)
    except Exception as e:
        logger.error(f"Failed to create meme generator: {e}")
        return 1

    logger.info(f"Starting server on {config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
