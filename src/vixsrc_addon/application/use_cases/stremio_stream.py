"""Stremio stream resolution use case.

Raw Stremio id -> parsed id -> canonical TMDB id -> provider URL
-> (optionally) MediaFlow proxy URL -> StremioStream list.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import structlog

from vixsrc_addon.domain.entities.media_id import ParsedMediaId, parse_media_id
from vixsrc_addon.domain.entities.stremio import StremioStream
from vixsrc_addon.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)

_SOURCE_NAME = "VixSrc"


class _StreamSettings(Protocol):
    """Settings consumed by StremioStreamUseCase (satisfied by AddonSettings)."""

    provider_base_url: str
    proxy_url: str | None
    proxy_password: str | None


# Type aliases for injected pure functions.
_ProviderUrlFn = Callable[[str, str, str, int | None, int | None], str]
_ProxyUrlFn = Callable[[str, str, str], str]


def _stream_title(parsed: ParsedMediaId) -> str:
    if parsed.content_type == "series":
        return f"S{parsed.season} E{parsed.episode}"
    return "Watch"


class StremioStreamUseCase:
    """Resolves a Stremio stream request to a single VixSrc stream.

    At most one TMDB lookup per request (IMDb-shaped ids only). Every
    failure is logged and answered with an empty list.
    """

    def __init__(
        self,
        *,
        tmdb: TmdbClientPort,
        settings: _StreamSettings,
        provider_url_fn: _ProviderUrlFn,
        proxy_url_fn: _ProxyUrlFn,
    ) -> None:
        self._tmdb = tmdb
        self._settings = settings
        self._provider_url = provider_url_fn
        self._proxy_url = proxy_url_fn

    async def resolve_canonical(self, parsed: ParsedMediaId) -> str | None:
        """Return the TMDB id for a parsed id, or None if it cannot be found."""
        if not parsed.provider.is_imdb:
            return parsed.content_id

        matches = await self._tmdb.find_by_imdb_id(
            parsed.content_id, parsed.content_type
        )
        if matches is None:
            log.warning(
                "stream_lookup_failed",
                imdb_id=parsed.content_id,
                content_type=parsed.content_type,
            )
            return None
        if not matches:
            log.info(
                "stream_lookup_miss",
                imdb_id=parsed.content_id,
                content_type=parsed.content_type,
            )
            return None
        return str(matches[0])

    def _to_stream(self, parsed: ParsedMediaId, canonical_id: str) -> StremioStream:
        provider_url = self._provider_url(
            self._settings.provider_base_url,
            canonical_id,
            parsed.content_type,
            parsed.season,
            parsed.episode,
        )
        title = _stream_title(parsed)

        proxy_url = self._settings.proxy_url
        proxy_password = self._settings.proxy_password
        if proxy_url and proxy_password:
            return StremioStream(
                name=f"{_SOURCE_NAME} (Proxy)",
                title=f"{title} (Proxy)",
                url=self._proxy_url(proxy_url, proxy_password, provider_url),
            )
        return StremioStream(
            name=_SOURCE_NAME,
            title=title,
            external_url=provider_url,
        )

    async def execute(self, content_type: str, raw_id: str) -> list[StremioStream]:
        """Resolve streams for a raw Stremio id. Never raises."""
        parsed = parse_media_id(raw_id, content_type)
        if parsed is None:
            log.warning(
                "stream_id_unsupported", content_type=content_type, stream_id=raw_id
            )
            return []

        try:
            canonical_id = await self.resolve_canonical(parsed)
        except Exception:
            log.error("stream_resolution_error", stream_id=raw_id, exc_info=True)
            return []

        if canonical_id is None:
            return []

        stream = self._to_stream(parsed, canonical_id)
        log.info(
            "stream_resolved",
            stream_id=raw_id,
            tmdb_id=canonical_id,
            proxied=stream.url is not None,
        )
        return [stream]
