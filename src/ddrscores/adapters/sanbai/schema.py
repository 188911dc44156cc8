"""Sanbai payload schemas.

``songdata.js`` is a JavaScript assignment (``var ALL_SONG_DATA=[...];``) whose
right-hand side is JSON. Scores come from ``POST /api/follow_scores``::

    {"scores": [{"song_id": "...", "SP_or_DP": 0, "difficulty": 2, "score": 989350,
                 "prev_score": 983570, "lamp": 4, "time_played": 1620500291,
                 "time_scraped": 1620522577}, ...]}
"""

from __future__ import annotations

import logging
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)

SONG_DATA_PREFIX = "var ALL_SONG_DATA="
SONG_DATA_SUFFIX = ";"

# One entry per chart slot, singles then doubles.
type ChartArray = Annotated[list[int], Field(min_length=9, max_length=9)]


class SanbaiBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Sanbai %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class SanbaiSong(SanbaiBaseModel):
    song_id: str
    song_name: str
    alternate_name: str | None = None
    romanized_name: str | None = None
    searchable_name: str | None = None
    version_num: int | None = None
    deleted: bool = False
    ratings: ChartArray
    lock_types: ChartArray | None = None

    @field_validator("deleted", mode="before")
    @classmethod
    def _deleted_flag(cls, value: object) -> bool:
        # Sent as a number; only 1 marks a deleted song.
        return value == 1


class SanbaiScoreEntry(SanbaiBaseModel):
    song_id: str
    style: int = Field(alias="SP_or_DP")
    difficulty: int
    score: int
    lamp: int
    prev_score: int | None = None
    time_played: int | None = None
    time_scraped: int | None = None


class SanbaiScoresResponse(SanbaiBaseModel):
    scores: list[SanbaiScoreEntry]


def strip_song_data_wrapper(text: str) -> str:
    """Return the JSON array inside ``songdata.js``; raise ``ValueError`` if malformed."""

    body = text.strip()
    if not body.startswith(SONG_DATA_PREFIX):
        raise ValueError(f"songdata.js is missing the {SONG_DATA_PREFIX!r} prefix")
    body = body.removeprefix(SONG_DATA_PREFIX)
    if not body.endswith(SONG_DATA_SUFFIX):
        raise ValueError(f"songdata.js is missing the {SONG_DATA_SUFFIX!r} suffix")
    return body.removesuffix(SONG_DATA_SUFFIX)
