"""Shared test fixtures for the VixSrc addon test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from vixsrc_addon.domain.entities.stremio import TmdbPage
from vixsrc_addon.infrastructure.config import AddonSettings
from vixsrc_addon.infrastructure.tmdb.mappers import TmdbMetaMapper

IMAGE_BASE = "https://image.tmdb.org/t/p/w500"

# ---------------------------------------------------------------------------
# Settings fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> AddonSettings:
    """Addon settings without a streaming proxy."""
    return AddonSettings(
        tmdb_api_key="test-api-key",
        tmdb_language="it-IT",
        tmdb_base_url="https://api.themoviedb.org/3",
        tmdb_image_base_url=IMAGE_BASE,
        provider_base_url="https://vixsrc.to",
    )


@pytest.fixture()
def proxy_settings() -> AddonSettings:
    """Addon settings with a MediaFlow proxy configured."""
    return AddonSettings(
        tmdb_api_key="test-api-key",
        tmdb_language="it-IT",
        tmdb_base_url="https://api.themoviedb.org/3",
        tmdb_image_base_url=IMAGE_BASE,
        provider_base_url="https://vixsrc.to",
        proxy_url="https://mfp.example.com",
        proxy_password="secret",
    )


# ---------------------------------------------------------------------------
# Port mocks
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_tmdb() -> AsyncMock:
    """Mock TmdbClientPort (every lookup misses by default)."""
    tmdb = AsyncMock()
    tmdb.find_by_imdb_id.return_value = []
    tmdb.fetch_page.return_value = TmdbPage()
    tmdb.get_movie.return_value = None
    tmdb.get_tv.return_value = None
    tmdb.get_season.return_value = None
    return tmdb


@pytest.fixture()
def mapper() -> TmdbMetaMapper:
    return TmdbMetaMapper(IMAGE_BASE)


# ---------------------------------------------------------------------------
# TMDB payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def movie_json() -> dict[str, Any]:
    """TMDB /movie/{id} payload for The Shawshank Redemption."""
    return {
        "id": 278,
        "title": "Le ali della libertà",
        "original_title": "The Shawshank Redemption",
        "overview": "Un banchiere condannato all'ergastolo...",
        "poster_path": "/poster278.jpg",
        "backdrop_path": "/backdrop278.jpg",
        "release_date": "1994-09-23",
        "vote_average": 8.706,
        "genres": [{"id": 18, "name": "Dramma"}, {"id": 80, "name": "Crime"}],
    }


@pytest.fixture()
def tv_json() -> dict[str, Any]:
    """TMDB /tv/{id} payload with specials plus two regular seasons."""
    return {
        "id": 1399,
        "name": "Il Trono di Spade",
        "original_name": "Game of Thrones",
        "overview": "Sette nobili famiglie...",
        "poster_path": "/poster1399.jpg",
        "backdrop_path": "/backdrop1399.jpg",
        "first_air_date": "2011-04-17",
        "vote_average": 8.4,
        "genres": [{"id": 10765, "name": "Sci-Fi & Fantasy"}],
        "seasons": [
            {"season_number": 0, "episode_count": 0},
            {"season_number": 1, "episode_count": 2},
            {"season_number": 2, "episode_count": 1},
        ],
        "external_ids": {"imdb_id": "tt0944947"},
    }


@pytest.fixture()
def season_json() -> Callable[[int, int], dict[str, Any]]:
    """Factory: TMDB /tv/{id}/season/{n} payload with ``episodes`` episodes."""

    def _build(season_number: int, episodes: int) -> dict[str, Any]:
        return {
            "season_number": season_number,
            "episodes": [
                {
                    "season_number": season_number,
                    "episode_number": n,
                    "name": f"Episode {season_number}x{n}",
                    "air_date": f"2011-0{season_number}-1{n}",
                    "overview": "",
                    "still_path": None,
                }
                for n in range(1, episodes + 1)
            ],
        }

    return _build
