"""Catalogs advertised by the addon and the TMDB endpoints behind them."""

from __future__ import annotations

from vixsrc_addon.domain.entities.stremio import CatalogDefinition, StremioContentType

CATALOGS: tuple[CatalogDefinition, ...] = (
    CatalogDefinition(
        id="tmdb_series_kdrama_it",
        type="series",
        name="K-Drama Popolari",
        path="/discover/tv",
        params={
            "with_origin_country": "KR",
            "sort_by": "first_air_date.desc",
            "vote_average.gte": 0,
            "vote_average.lte": 10,
            "with_genres": 18,  # Drama
            "with_runtime.gte": 30,  # minimum episode runtime (minutes)
        },
    ),
    CatalogDefinition(
        id="tmdb_movies_trending_it",
        type="movie",
        name="Film di Tendenza",
        path="/trending/movie/week",
    ),
)

# TMDB search endpoint per content type
SEARCH_PATHS: dict[StremioContentType, str] = {
    "movie": "/search/movie",
    "series": "/search/tv",
}


def manifest_catalogs() -> list[dict[str, object]]:
    """Catalog entries in Stremio manifest format."""
    entries: list[dict[str, object]] = []
    for catalog in CATALOGS:
        extra = [{"name": "skip", "isRequired": False}]
        if catalog.searchable:
            extra.append({"name": "search", "isRequired": False})
        entries.append(
            {
                "type": catalog.type,
                "id": catalog.id,
                "name": catalog.name,
                "extra": extra,
            }
        )
    return entries
