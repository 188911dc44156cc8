"""In-memory aggregate of the reconciled catalog and the tracked players."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ddrscores.domain.model.player import Player
    from ddrscores.domain.model.song import DDRSong, SkillAttackIndex
    from ddrscores.domain.model.song_id import SongId


def song_sort_key(song: DDRSong) -> tuple[str, SongId]:
    return (song.name, song.song_id)


@dataclass(eq=False)
class Database:
    """Songs sorted by display name (ties broken by id) and the players being tracked.

    Only the update pipeline's driver mutates a database; fetch tasks never see it.
    """

    songs: tuple[DDRSong, ...] = ()
    players: list[Player] = field(default_factory=list["Player"])
    _by_id: dict[SongId, DDRSong] = field(init=False, repr=False)
    _by_skill_attack: dict[SkillAttackIndex, DDRSong] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._install(self.songs)

    def _install(self, songs: Iterable[DDRSong]) -> None:
        ordered = tuple(sorted(songs, key=song_sort_key))
        self.songs = ordered
        self._by_id = {song.song_id: song for song in ordered}
        self._by_skill_attack = {
            song.skill_attack_index: song
            for song in ordered
            if song.skill_attack_index is not None
        }

    def song_by_id(self, song_id: SongId) -> DDRSong | None:
        return self._by_id.get(song_id)

    def song_by_skill_attack_index(self, index: SkillAttackIndex) -> DDRSong | None:
        return self._by_skill_attack.get(index)

    def player(self, name: str) -> Player | None:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def replace_catalog(self, songs: Iterable[DDRSong]) -> int:
        """Swap in a new catalog; return how many song ids were not present before."""
        previous = set(self._by_id)
        self._install(songs)
        return sum(1 for song_id in self._by_id if song_id not in previous)

    def has_song(self, song_id: SongId) -> bool:
        return song_id in self._by_id

    def drop_unknown_scores(self) -> int:
        """Remove score tables whose song left (or never joined) the catalog."""
        return sum(player.drop_scores_outside(self._by_id) for player in self.players)
