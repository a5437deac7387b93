"""Domain entities for the Stremio addon protocol.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

StremioContentType = Literal["movie", "series"]

CONTENT_TYPES: tuple[StremioContentType, ...] = ("movie", "series")


@dataclass(frozen=True)
class StremioStream:
    """Stremio protocol Stream object.

    Exactly one of ``url`` (playable through the proxy) or ``external_url``
    (opened in a browser) is set.
    """

    name: str  # Source label in Stremio UI, e.g. "VixSrc (Proxy)"
    title: str  # Per-stream label, e.g. "S1 E5 (Proxy)"
    url: str | None = None
    external_url: str | None = None


@dataclass(frozen=True)
class StremioMetaPreview:
    """Stremio catalog item (MetaPreview object)."""

    id: str  # "tmdb:<id>"
    type: StremioContentType
    name: str
    poster: str | None = None
    description: str = ""
    release_info: str = ""  # Year, e.g. "2024"
    imdb_rating: str | None = None


@dataclass(frozen=True)
class StremioVideo:
    """A single episode entry of a series meta."""

    id: str  # "tmdb:<series>:<season>:<episode>"
    title: str
    season: int
    episode: int
    released: str
    overview: str = ""
    thumbnail: str | None = None


@dataclass(frozen=True)
class StremioMeta:
    """Full Stremio Meta object (detail page)."""

    id: str
    type: StremioContentType
    name: str
    poster: str | None = None
    background: str | None = None
    description: str = ""
    release_info: str = ""
    imdb_rating: str | None = None
    genres: list[str] = field(default_factory=list)
    videos: list[StremioVideo] | None = None  # series only


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog results plus the pagination flag."""

    metas: list[StremioMetaPreview] = field(default_factory=list)
    has_more: bool = False


@dataclass(frozen=True)
class CatalogDefinition:
    """A catalog advertised in the manifest and backed by a TMDB list endpoint."""

    id: str
    type: StremioContentType
    name: str
    path: str  # TMDB list endpoint, e.g. "/discover/tv"
    params: dict[str, str | int] = field(default_factory=dict)
    searchable: bool = True


@dataclass(frozen=True)
class TmdbPage:
    """Raw page of TMDB list results with TMDB's pagination counters."""

    results: list[dict] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
