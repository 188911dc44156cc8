"""Public domain model surface."""

from __future__ import annotations

from ddrscores.domain.model.database import Database, song_sort_key
from ddrscores.domain.model.enums import (
    CHART_COUNT,
    DOUBLE_CHARTS,
    SINGLE_CHARTS,
    Chart,
    DDRVersion,
    LampType,
    PlayStyle,
    Provider,
    UnknownLampError,
)
from ddrscores.domain.model.player import Player, PlayerSeed
from ddrscores.domain.model.scores import ScoreSlot, ScoreTable, merge_slots
from ddrscores.domain.model.song import (
    Bpm,
    DDRSong,
    LockTypes,
    Ratings,
    SkillAttackIndex,
    build_search_names,
)
from ddrscores.domain.model.song_id import SONG_ID_ALPHABET, SongId, SongIdParseError

__all__ = [  # noqa: RUF022
    # ids
    "SongId",
    "SongIdParseError",
    "SONG_ID_ALPHABET",
    # enums
    "Provider",
    "PlayStyle",
    "Chart",
    "CHART_COUNT",
    "SINGLE_CHARTS",
    "DOUBLE_CHARTS",
    "LampType",
    "UnknownLampError",
    "DDRVersion",
    # songs
    "Bpm",
    "DDRSong",
    "Ratings",
    "LockTypes",
    "SkillAttackIndex",
    "build_search_names",
    # scores
    "ScoreSlot",
    "ScoreTable",
    "merge_slots",
    # players
    "Player",
    "PlayerSeed",
    # aggregate
    "Database",
    "song_sort_key",
]
