"""Provider (vixsrc.to) and MediaFlow proxy URL builders. Pure functions."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from vixsrc_addon.domain.entities.stremio import StremioContentType

# MediaFlow extractor that knows how to unpack VixCloud player pages
_EXTRACTOR_HOST = "VixCloud"


def build_provider_url(
    base_url: str,
    canonical_id: str,
    content_type: StremioContentType,
    season: int | None = None,
    episode: int | None = None,
) -> str:
    """Provider page URL for a movie or a single episode.

    Raises:
        ValueError: series without season/episode. Such ids are rejected
            while parsing, so reaching this is a caller bug.
    """
    base = base_url.rstrip("/")
    if content_type == "movie":
        return f"{base}/movie/{canonical_id}"
    if season is None or episode is None:
        raise ValueError("series provider URL requires season and episode")
    return f"{base}/tv/{canonical_id}/{season}/{episode}"


def build_proxy_url(proxy_base_url: str, api_password: str, provider_url: str) -> str:
    """MediaFlow ``/extractor/video`` URL that redirects to the playable stream."""
    query = urlencode(
        {
            "host": _EXTRACTOR_HOST,
            "d": provider_url,
            "redirect_stream": "true",
            "additionalProp1": "{}",
            "api_password": api_password,
        },
        quote_via=quote,
        safe="",
    )
    return f"{proxy_base_url.rstrip('/')}/extractor/video?{query}"
