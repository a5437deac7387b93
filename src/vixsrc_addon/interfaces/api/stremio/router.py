"""Stremio addon API endpoints (manifest, catalog, meta, stream)."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, cast
from urllib.parse import parse_qs

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from vixsrc_addon.infrastructure.tmdb.catalogs import manifest_catalogs
from vixsrc_addon.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

ADDON_ID = "org.stremio.vixsrc.addon"
ADDON_VERSION = "1.2.5"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}

# dataclass field -> Stremio JSON key
_CAMEL_KEYS = {
    "release_info": "releaseInfo",
    "imdb_rating": "imdbRating",
    "external_url": "externalUrl",
}


def _build_manifest() -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": ADDON_ID,
        "version": ADDON_VERSION,
        "name": "VixSrc streams addon",
        "description": "Streams from VixSrc for movies and TV series",
        "logo": "https://icon-library.com/images/letter-v-icon/letter-v-icon-8.jpg",
        "resources": ["catalog", "meta", "stream"],
        "types": ["movie", "series"],
        "catalogs": manifest_catalogs(),
        "idPrefixes": ["tmdb:", "tt", "imdb:"],
        "behaviorHints": {
            "adult": False,
            "configurable": False,
        },
    }


def _clean(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            _CAMEL_KEYS.get(k, k): _clean(v) for k, v in value.items() if v is not None
        }
    if isinstance(value, list):
        return [_clean(v) for v in value]
    return value


def _to_json(entity: Any) -> dict[str, Any]:
    """Dataclass -> Stremio JSON object (camelCase keys, no null fields)."""
    return _clean(asdict(entity))


def _parse_extra(extra: str | None) -> tuple[int, str | None]:
    """Parse the Stremio extra path segment (``search=x&skip=20``)."""
    if not extra:
        return 0, None
    values = parse_qs(extra, keep_blank_values=True)
    raw_skip = (values.get("skip") or ["0"])[0]
    try:
        skip = max(int(raw_skip), 0)
    except ValueError:
        skip = 0
    search = (values.get("search") or [None])[0]
    return skip, search


def _raw_extra(request: Request) -> str:
    """The extra path segment as sent by the client, still percent-encoded.

    Starlette already decoded the ``{extra}`` path parameter, so an encoded
    ``&`` or ``+`` inside a search term would split it.
    """
    segment = request.scope["raw_path"].decode("latin-1").rsplit("/", 1)[-1]
    return segment.removesuffix(".json")


def _catalog_headers(state: AppState) -> dict[str, str]:
    catalog_cfg = state.config.catalog
    cache_control = (
        f"max-age={catalog_cfg.cache_max_age}, "
        f"stale-while-revalidate={catalog_cfg.stale_revalidate}, "
        f"stale-if-error={catalog_cfg.stale_error}, public"
    )
    return {**_CORS_HEADERS, "Cache-Control": cache_control}


@router.get("/manifest.json")
async def stremio_manifest() -> JSONResponse:
    """Serve the Stremio addon manifest."""
    return JSONResponse(content=_build_manifest(), headers=_CORS_HEADERS)


async def _serve_catalog(
    request: Request,
    content_type: str,
    catalog_id: str,
    extra: str | None,
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    headers = _catalog_headers(state)
    skip, search = _parse_extra(extra)

    page = await state.stremio_catalog_uc.catalog(
        content_type, catalog_id, skip=skip, search=search
    )
    return JSONResponse(
        content={
            "metas": [_to_json(m) for m in page.metas],
            "hasMore": page.has_more,
        },
        headers=headers,
    )


@router.get("/catalog/{content_type}/{catalog_id}.json")
async def stremio_catalog(
    request: Request,
    content_type: str,
    catalog_id: str,
) -> JSONResponse:
    """Serve a Stremio catalog page."""
    return await _serve_catalog(request, content_type, catalog_id, None)


@router.get("/catalog/{content_type}/{catalog_id}/{extra}.json")
async def stremio_catalog_extra(
    request: Request,
    content_type: str,
    catalog_id: str,
) -> JSONResponse:
    """Serve a Stremio catalog page with ``skip``/``search`` extras."""
    return await _serve_catalog(
        request, content_type, catalog_id, _raw_extra(request)
    )


@router.get("/meta/{content_type}/{meta_id}.json")
async def stremio_meta(
    request: Request,
    content_type: str,
    meta_id: str,
) -> JSONResponse:
    """Serve the meta (detail page) of a ``tmdb:`` item."""
    state = cast(AppState, request.app.state)
    log.info("stremio_meta_request", content_type=content_type, id=meta_id)

    meta = await state.stremio_meta_uc.meta(content_type, meta_id)
    body = {"meta": _to_json(meta) if meta is not None else None}
    return JSONResponse(content=body, headers=_CORS_HEADERS)


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve the VixSrc stream for a movie or episode."""
    state = cast(AppState, request.app.state)
    log.info("stremio_stream_request", content_type=content_type, id=stream_id)

    streams = await state.stremio_stream_uc.execute(content_type, stream_id)
    return JSONResponse(
        content={"streams": [_to_json(s) for s in streams]},
        headers=_CORS_HEADERS,
    )
