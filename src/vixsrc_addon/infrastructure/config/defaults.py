"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vixsrc-addon",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "vixsrc-addon/1.2.5",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "tmdb": {
        "api_key": None,
        "language": "it-IT",
        "base_url": "https://api.themoviedb.org/3",
        "image_base_url": "https://image.tmdb.org/t/p/w500",
    },
    "vixsrc": {
        "base_url": "https://vixsrc.to",
    },
    "mediaflow": {
        "proxy_url": None,
        "api_password": None,
    },
    "catalog": {
        "page_size": 20,
        "cache_max_age": 1300,
        "stale_revalidate": 120,
        "stale_error": 86_400,
    },
}
