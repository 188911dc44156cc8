"""Ports for fetching catalogs and scores from the score-tracking sites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ddrscores.domain.model import DDRVersion, Ratings

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ddrscores.domain.model import (
        LockTypes,
        Provider,
        ScoreTable,
        SkillAttackIndex,
        SongId,
    )


class FetchError(RuntimeError):
    """A collaborator could not deliver a catalog or a player's scores."""

    def __init__(self, message: str, *, provider: Provider) -> None:
        super().__init__(message)
        self.provider = provider


@dataclass(frozen=True, slots=True, kw_only=True)
class PrimaryRecord:
    """One song as listed by the authoritative catalog."""

    song_id: SongId
    name: str
    romanized_name: str | None = None
    alternate_name: str | None = None
    searchable_name: str | None = None
    version: DDRVersion = DDRVersion.UNKNOWN
    deleted: bool = False
    ratings: Ratings = field(default_factory=Ratings)
    lock_types: LockTypes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondaryRecord:
    """One song as listed by the legacy catalog.

    ``skill_attack_index`` is only meaningful within a single fetch of that catalog.
    """

    skill_attack_index: SkillAttackIndex
    name: str
    song_id: SongId | None = None
    ratings: Ratings | None = None


type SecondaryScores = Mapping[SkillAttackIndex, ScoreTable]
type PrimaryScores = Mapping[SongId, ScoreTable]


@runtime_checkable
class PrimaryCatalogFetcher(Protocol):
    async def __call__(self) -> Sequence[PrimaryRecord]: ...


@runtime_checkable
class SecondaryCatalogFetcher(Protocol):
    async def __call__(self) -> Sequence[SecondaryRecord]: ...


@runtime_checkable
class PrimaryScoreFetcher(Protocol):
    """Fetch one player's scores keyed by canonical song id."""

    async def __call__(self, username: str) -> PrimaryScores: ...


@runtime_checkable
class SecondaryScoreFetcher(Protocol):
    """Fetch one player's scores keyed by the legacy catalog's local index."""

    async def __call__(self, ddr_code: int) -> SecondaryScores: ...


@dataclass(frozen=True, slots=True)
class ScoreSources:
    """The four collaborators an update run talks to."""

    primary_catalog: PrimaryCatalogFetcher
    secondary_catalog: SecondaryCatalogFetcher
    primary_scores: PrimaryScoreFetcher
    secondary_scores: SecondaryScoreFetcher


__all__ = [
    "FetchError",
    "PrimaryCatalogFetcher",
    "PrimaryRecord",
    "PrimaryScoreFetcher",
    "PrimaryScores",
    "ScoreSources",
    "SecondaryCatalogFetcher",
    "SecondaryRecord",
    "SecondaryScoreFetcher",
    "SecondaryScores",
]
