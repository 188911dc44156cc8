"""Players and their per-song score tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddrscores.domain.model.scores import ScoreTable

if TYPE_CHECKING:
    from collections.abc import Container, Mapping

    from ddrscores.domain.model.song_id import SongId


@dataclass(frozen=True, slots=True)
class PlayerSeed:
    """Who to fetch: a display name plus an optional account on each site.

    Sanbai accounts are usernames; Skill Attack accounts are 8-digit DDR codes.
    """

    name: str
    sanbai_username: str | None = None
    ddr_code: int | None = None


@dataclass(eq=False, kw_only=True)
class Player:
    name: str
    sanbai_username: str | None = None
    ddr_code: int | None = None
    scores: dict[SongId, ScoreTable] = field(default_factory=dict["SongId", ScoreTable])

    @classmethod
    def from_seed(cls, seed: PlayerSeed) -> Player:
        return cls(name=seed.name, sanbai_username=seed.sanbai_username, ddr_code=seed.ddr_code)

    @property
    def seed(self) -> PlayerSeed:
        return PlayerSeed(self.name, self.sanbai_username, self.ddr_code)

    def table_for(self, song_id: SongId) -> ScoreTable | None:
        return self.scores.get(song_id)

    def merge_scores(self, incoming: Mapping[SongId, ScoreTable]) -> int:
        """Merge tables keyed by song id into this player; return changed slots."""
        changed = 0
        for song_id, table in incoming.items():
            current = self.scores.get(song_id)
            if current is None:
                current = ScoreTable()
                self.scores[song_id] = current
            changed += current.merge(table)
        return changed

    def drop_scores_outside(self, known: Container[SongId]) -> int:
        """Forget tables for songs not in ``known``; return how many were dropped."""
        stale = [song_id for song_id in self.scores if song_id not in known]
        for song_id in stale:
            del self.scores[song_id]
        return len(stale)

    def played_song_count(self) -> int:
        return sum(1 for table in self.scores.values() if not table.is_empty())

    def played_chart_count(self) -> int:
        return sum(table.played_count() for table in self.scores.values())
