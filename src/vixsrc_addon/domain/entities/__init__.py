from .media_id import IdProvider, ParsedMediaId, is_numeral, parse_media_id
from .stremio import (
    CONTENT_TYPES,
    CatalogDefinition,
    CatalogPage,
    StremioContentType,
    StremioMeta,
    StremioMetaPreview,
    StremioStream,
    StremioVideo,
    TmdbPage,
)

__all__ = [
    "CONTENT_TYPES",
    "CatalogDefinition",
    "CatalogPage",
    "IdProvider",
    "ParsedMediaId",
    "StremioContentType",
    "StremioMeta",
    "StremioMetaPreview",
    "StremioStream",
    "StremioVideo",
    "TmdbPage",
    "is_numeral",
    "parse_media_id",
]
