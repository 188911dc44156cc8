"""Translate Sanbai payloads into domain records and score tables."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ddrscores.domain.model import (
    Chart,
    DDRVersion,
    LampType,
    LockTypes,
    Ratings,
    ScoreSlot,
    ScoreTable,
    SongId,
)
from ddrscores.domain.ports import PrimaryRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import SanbaiScoreEntry, SanbaiSong


def translate_song(song: SanbaiSong) -> PrimaryRecord:
    return PrimaryRecord(
        song_id=SongId.parse(song.song_id),
        name=song.song_name,
        romanized_name=song.romanized_name or None,
        alternate_name=song.alternate_name or None,
        searchable_name=song.searchable_name or None,
        version=DDRVersion.from_number(song.version_num),
        deleted=song.deleted,
        ratings=Ratings.from_values(song.ratings),
        lock_types=LockTypes(tuple(song.lock_types)) if song.lock_types is not None else None,
    )


def translate_scores(entries: Iterable[SanbaiScoreEntry]) -> dict[SongId, ScoreTable]:
    """Collapse score rows into one table per song; repeated rows merge."""

    tables: dict[SongId, ScoreTable] = {}
    for entry in entries:
        song_id = SongId.parse(entry.song_id)
        chart = Chart.from_site_difficulty(entry.style, entry.difficulty)
        slot = ScoreSlot(
            score=entry.score,
            lamp=LampType.from_sanbai(entry.lamp),
            time_played=_from_epoch(entry.time_played),
        )
        tables.setdefault(song_id, ScoreTable()).merge_slot(chart, slot)
    return tables


def _from_epoch(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=UTC)
