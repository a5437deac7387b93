"""Stremio media identifiers and their grammar.

Pure value objects, no I/O. A raw Stremio id such as ``tmdb:550``,
``tt0111161:1:1`` or ``imdb:tt0944947:2:3`` is classified by content type,
segment count and first segment into a :class:`ParsedMediaId`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from vixsrc_addon.domain.entities.stremio import StremioContentType

_IMDB_PREFIX = "tt"


def is_numeral(value: str) -> bool:
    """ASCII decimal digits only; ``str.isdecimal`` also accepts other scripts."""
    return value.isascii() and value.isdecimal()


class IdProvider(str, Enum):
    """Numbering space a content id belongs to."""

    TMDB = "tmdb"
    IMDB = "imdb"  # explicit "imdb:" prefix
    BARE_IMDB = "bare-imdb"  # "tt..." without prefix

    @property
    def is_imdb(self) -> bool:
        return self is not IdProvider.TMDB


@dataclass(frozen=True)
class ParsedMediaId:
    """Parsed form of a raw Stremio id.

    ``season`` and ``episode`` are set together, and only for series.
    """

    provider: IdProvider
    content_id: str
    content_type: StremioContentType
    season: int | None = None
    episode: int | None = None

    def __post_init__(self) -> None:
        has_episode = self.season is not None and self.episode is not None
        if (self.season is None) != (self.episode is None):
            raise ValueError("season and episode must be given together")
        if has_episode != (self.content_type == "series"):
            raise ValueError("season/episode are required for series only")


@dataclass(frozen=True)
class _IdRule:
    """One identifier shape: where the content id and episode info live."""

    content_type: StremioContentType
    segments: int
    matches_head: Callable[[str], bool]
    provider: IdProvider
    id_index: int
    season_index: int | None = None
    episode_index: int | None = None


def _is_tt(head: str) -> bool:
    return head.startswith(_IMDB_PREFIX)


def _is_literal(value: str) -> Callable[[str], bool]:
    return lambda head: head == value


_ID_GRAMMAR: tuple[_IdRule, ...] = (
    _IdRule("movie", 1, _is_tt, IdProvider.BARE_IMDB, 0),
    _IdRule("movie", 2, _is_literal("imdb"), IdProvider.IMDB, 1),
    _IdRule("movie", 2, _is_literal("tmdb"), IdProvider.TMDB, 1),
    # "tt123:<anything>" for movies is non-standard but seen in the wild
    _IdRule("movie", 2, _is_tt, IdProvider.BARE_IMDB, 0),
    _IdRule("series", 3, _is_tt, IdProvider.BARE_IMDB, 0, 1, 2),
    _IdRule("series", 4, _is_literal("imdb"), IdProvider.IMDB, 1, 2, 3),
    _IdRule("series", 4, _is_literal("tmdb"), IdProvider.TMDB, 1, 2, 3),
)


def _valid_content_id(provider: IdProvider, content_id: str) -> bool:
    if provider is IdProvider.TMDB:
        return is_numeral(content_id)
    return content_id.startswith(_IMDB_PREFIX) and len(content_id) > len(
        _IMDB_PREFIX
    )


def _to_number(value: str) -> int | None:
    return int(value) if is_numeral(value) else None


def _apply_rule(rule: _IdRule, parts: list[str]) -> ParsedMediaId | None:
    content_id = parts[rule.id_index]
    if not _valid_content_id(rule.provider, content_id):
        return None

    if rule.season_index is None or rule.episode_index is None:
        return ParsedMediaId(
            provider=rule.provider,
            content_id=content_id,
            content_type=rule.content_type,
        )

    season = _to_number(parts[rule.season_index])
    episode = _to_number(parts[rule.episode_index])
    if season is None or episode is None:
        return None
    return ParsedMediaId(
        provider=rule.provider,
        content_id=content_id,
        content_type=rule.content_type,
        season=season,
        episode=episode,
    )


def parse_media_id(raw_id: str, content_type: str) -> ParsedMediaId | None:
    """Classify a raw Stremio id for the given content type.

    Returns ``None`` when no identifier shape matches. That is an expected
    outcome (the caller answers with an empty result), not an error.
    """
    if not raw_id:
        return None

    parts = raw_id.split(":")
    head = parts[0]
    for rule in _ID_GRAMMAR:
        if rule.content_type != content_type or rule.segments != len(parts):
            continue
        if rule.matches_head(head):
            return _apply_rule(rule, parts)
    return None
