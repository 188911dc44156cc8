"""Progress markers and the outcome of one update run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ddrscores.domain.model import Database, Provider


class PipelineState(StrEnum):
    IDLE = "idle"
    CATALOGS_IN_FLIGHT = "catalogs_in_flight"
    CATALOG_READY = "catalog_ready"
    DRAINING = "draining"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class PlayerFailure:
    """One player account that could not be fetched during a run."""

    player: str
    provider: Provider
    message: str


@dataclass(slots=True)
class UpdateCounters:
    """Best-effort telemetry; the values depend on the order results arrive in."""

    new_songs: int = 0
    new_scores: int = 0
    failures: list[PlayerFailure] = field(default_factory=list[PlayerFailure])


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateResult:
    database: Database
    new_songs: int
    new_scores: int
    failed_players: tuple[PlayerFailure, ...] = ()
    secondary_catalog_available: bool = True
    state: PipelineState = PipelineState.DONE

    @property
    def ok(self) -> bool:
        return not self.failed_players and self.secondary_catalog_available
