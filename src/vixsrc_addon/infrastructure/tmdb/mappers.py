"""TMDB JSON -> Stremio entity mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from vixsrc_addon.domain.entities.stremio import (
    StremioContentType,
    StremioMeta,
    StremioMetaPreview,
    StremioVideo,
)


def format_rating(vote_average: Any) -> str | None:
    """TMDB vote average with one decimal ("8.4"); None when unrated."""
    if not vote_average:
        return None
    return f"{float(vote_average):.1f}"


def release_year(item: dict[str, Any], content_type: StremioContentType) -> str:
    key = "release_date" if content_type == "movie" else "first_air_date"
    date = item.get(key)
    return date[:4] if date else ""


def _title(item: dict[str, Any], content_type: StremioContentType) -> str:
    if content_type == "movie":
        return item.get("title") or item.get("original_title") or ""
    return item.get("name") or item.get("original_name") or ""


class TmdbMetaMapper:
    """Builds Stremio previews, metas and episode videos from TMDB payloads."""

    def __init__(self, image_base_url: str) -> None:
        self._image_base_url = image_base_url

    def image_url(self, path: str | None) -> str | None:
        if not path:
            return None
        return f"{self._image_base_url}{path}"

    def preview(
        self, item: dict[str, Any], content_type: StremioContentType
    ) -> StremioMetaPreview:
        return StremioMetaPreview(
            id=f"tmdb:{item['id']}",
            type=content_type,
            name=_title(item, content_type),
            poster=self.image_url(item.get("poster_path")),
            description=item.get("overview") or "",
            release_info=release_year(item, content_type),
            imdb_rating=format_rating(item.get("vote_average")),
        )

    def meta(
        self,
        item: dict[str, Any],
        content_type: StremioContentType,
        videos: list[StremioVideo] | None = None,
    ) -> StremioMeta:
        return StremioMeta(
            id=f"tmdb:{item['id']}",
            type=content_type,
            name=_title(item, content_type),
            poster=self.image_url(item.get("poster_path")),
            background=self.image_url(item.get("backdrop_path")),
            description=item.get("overview") or "",
            release_info=release_year(item, content_type),
            imdb_rating=format_rating(item.get("vote_average")),
            genres=[g["name"] for g in item.get("genres") or [] if g.get("name")],
            videos=videos,
        )

    def episode(self, series_id: Any, episode: dict[str, Any]) -> StremioVideo:
        season_number = episode["season_number"]
        episode_number = episode["episode_number"]
        released = episode.get("air_date") or datetime.now(timezone.utc).isoformat()
        return StremioVideo(
            id=f"tmdb:{series_id}:{season_number}:{episode_number}",
            title=episode.get("name") or f"Episodio {episode_number}",
            season=season_number,
            episode=episode_number,
            released=released,
            overview=episode.get("overview") or "",
            thumbnail=self.image_url(episode.get("still_path")),
        )
