"""Lookups and filters over a reconciled song list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ddrscores.domain.model import DDRSong, SkillAttackIndex


def search_by_title(songs: Iterable[DDRSong], query: str) -> DDRSong | None:
    """Find a song by (part of) its title.

    An exact match on any search name wins immediately. Otherwise the first song,
    in list order, with a search name containing every query word is returned.
    """

    query = query.strip().lower()
    if not query:
        return None
    words = query.split()

    fuzzy: DDRSong | None = None
    for song in songs:
        if query in song.search_names:
            return song
        if fuzzy is None and any(
            all(word in name for word in words) for name in song.search_names
        ):
            fuzzy = song
    return fuzzy


def search_by_skill_attack_index(
    songs: Iterable[DDRSong], index: SkillAttackIndex
) -> DDRSong | None:
    for song in songs:
        if song.skill_attack_index == index:
            return song
    return None


@dataclass(frozen=True, slots=True)
class BySingleLevel:
    level: int


@dataclass(frozen=True, slots=True)
class HasChallenge:
    pass


@dataclass(frozen=True, slots=True)
class HasNonChallenge:
    pass


type FilterSpec = BySingleLevel | HasChallenge | HasNonChallenge


def filter_songs(songs: Iterable[DDRSong], spec: FilterSpec) -> Iterator[DDRSong]:
    """Lazily yield the songs that satisfy ``spec``."""

    match spec:
        case BySingleLevel(level=level):
            return (song for song in songs if song.ratings.contains_single(level))
        case HasChallenge():
            return (song for song in songs if song.ratings.has_single_challenge())
        case HasNonChallenge():
            return (song for song in songs if song.ratings.has_non_challenge())
