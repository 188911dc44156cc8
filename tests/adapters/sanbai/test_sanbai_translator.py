from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from ddrscores.adapters.sanbai import (
    SanbaiScoreEntry,
    SanbaiSong,
    translate_scores,
    translate_song,
)
from ddrscores.adapters.sanbai.schema import strip_song_data_wrapper
from ddrscores.domain.model import Chart, DDRVersion, LampType, SongId

SONG = "0" * 31 + "1"


def _entry(**overrides: object) -> SanbaiScoreEntry:
    payload: dict[str, object] = {
        "song_id": SONG,
        "SP_or_DP": 0,
        "difficulty": 2,
        "score": 900_000,
        "lamp": 1,
    }
    payload.update(overrides)
    return SanbaiScoreEntry.model_validate(payload)


def test_translate_song_maps_optional_fields() -> None:
    song = SanbaiSong.model_validate(
        {
            "song_id": SONG,
            "song_name": "Title",
            "romanized_name": "",
            "version_num": 99,
            "deleted": 0,
            "ratings": [1, 2, 3, 4, -1, 0, 0, 0, 0],
        }
    )

    record = translate_song(song)

    assert record.song_id == SongId.parse(SONG)
    assert record.romanized_name is None
    assert record.version is DDRVersion.UNKNOWN
    assert not record.deleted
    assert record.ratings.levels == (1, 2, 3, 4, 0, 0, 0, 0, 0)


def test_ratings_must_cover_every_chart() -> None:
    with pytest.raises(ValidationError):
        SanbaiSong.model_validate({"song_id": SONG, "song_name": "Short", "ratings": [1, 2, 3]})


def test_repeated_rows_merge_per_chart() -> None:
    tables = translate_scores(
        [
            _entry(score=900_000, lamp=4),
            _entry(score=950_000, lamp=1),
            _entry(difficulty=0, score=990_000, lamp=6),
        ]
    )

    table = tables[SongId.parse(SONG)]
    difficult = table[Chart.DSP]
    beginner = table[Chart.GSP]
    assert difficult is not None
    assert difficult.score == 950_000
    assert difficult.lamp is LampType.GREAT_FULL_COMBO
    assert beginner is not None
    assert beginner.lamp is LampType.MARVELOUS_FULL_COMBO
    assert table.played_count() == 2


def test_unknown_chart_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported chart"):
        translate_scores([_entry(**{"SP_or_DP": 1, "difficulty": 0})])


def test_song_data_wrapper_is_stripped() -> None:
    assert strip_song_data_wrapper("var ALL_SONG_DATA=[1,2];\n") == "[1,2]"
    with pytest.raises(ValueError, match="suffix"):
        strip_song_data_wrapper("var ALL_SONG_DATA=[1,2]")


def test_unmodeled_keys_are_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="ddrscores.adapters.sanbai"):
        _entry(rank_tier=3)
        _entry(rank_tier=4)

    messages = [record.getMessage() for record in caplog.records]
    assert sum("rank_tier" in message for message in messages) == 1
