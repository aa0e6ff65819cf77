"""
Service configuration.

Read from the environment (and a local .env file when present):
  - QUOTE_ENDPOINT
  - GEOCODE_ENDPOINT, GEOCODE_API_KEY (optional)
  - SUNRISE_SUNSET_ENDPOINT
  - HTTP_TIMEOUT (seconds)
  - LOG_LEVEL
  - CORS_ORIGINS (comma separated)
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_QUOTE_ENDPOINT = "http://quotesondesign.com/wp-json/posts?filter[orderby]=rand&filter[posts_per_page]=1"
DEFAULT_GEOCODE_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_SUNRISE_SUNSET_ENDPOINT = "https://api.sunrise-sunset.org/json"


@dataclass(frozen=True)
class Settings:
    quote_endpoint: str = DEFAULT_QUOTE_ENDPOINT
    geocode_endpoint: str = DEFAULT_GEOCODE_ENDPOINT
    geocode_api_key: str | None = None
    sunrise_sunset_endpoint: str = DEFAULT_SUNRISE_SUNSET_ENDPOINT
    http_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)


def _split_origins(value: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


def get_settings() -> Settings:
    """Build settings from the current environment."""
    timeout = os.getenv("HTTP_TIMEOUT")
    try:
        http_timeout = float(timeout) if timeout else Settings.http_timeout
    except ValueError:
        raise ValueError(f"HTTP_TIMEOUT must be a number of seconds, got {timeout!r}") from None

    origins = os.getenv("CORS_ORIGINS")

    return Settings(
        quote_endpoint=os.getenv("QUOTE_ENDPOINT") or DEFAULT_QUOTE_ENDPOINT,
        geocode_endpoint=os.getenv("GEOCODE_ENDPOINT") or DEFAULT_GEOCODE_ENDPOINT,
        geocode_api_key=os.getenv("GEOCODE_API_KEY") or None,
        sunrise_sunset_endpoint=os.getenv("SUNRISE_SUNSET_ENDPOINT") or DEFAULT_SUNRISE_SUNSET_ENDPOINT,
        http_timeout=http_timeout,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_split_origins(origins) if origins else Settings.cors_origins,
    )
