"""
Service configuration loaded from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class ServiceConfig:
    """Configuration for the meme web service."""

    host: str = "0.0.0.0"
    port: int = 8080

    # Timeouts (seconds)
    request_timeout: float = 15.0  # whole image fetch for one /meme request
    http_timeout: float = 10.0  # single outbound HTTP request

    max_retries: int = 2
    font_path: Optional[str] = None  # None uses a system font
    log_level: str = "INFO"


def _number(environ: Mapping[str, str], name: str, default, cast):
    raw = environ.get(name, "")
    if raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Build a ServiceConfig from environment variables.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Populated ServiceConfig

    Raises:
        ValueError: If a numeric variable is not a number
    """
    env = os.environ if environ is None else environ
    defaults = ServiceConfig()

    return ServiceConfig(
        host=env.get("HOST") or defaults.host,
        port=_number(env, "PORT", defaults.port, int),
        request_timeout=_number(env, "POTATOCAT_REQUEST_TIMEOUT", defaults.request_timeout, float),
        http_timeout=_number(env, "POTATOCAT_HTTP_TIMEOUT", defaults.http_timeout, float),
        max_retries=_number(env, "POTATOCAT_MAX_RETRIES", defaults.max_retries, int),
        font_path=env.get("POTATOCAT_FONT_PATH") or None,
        log_level=(env.get("POTATOCAT_LOG_LEVEL") or defaults.log_level).upper(),
    )
