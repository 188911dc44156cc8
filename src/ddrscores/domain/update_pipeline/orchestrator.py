"""Concurrent update run: fetch both sites, reconcile, merge scores.

Every fetch runs as its own task and returns an owned value. A single driver loop
applies results to the database as tasks complete, so merges never need a lock.
Scores from the legacy site wait in a buffer until the catalog is reconciled,
because their keys only mean something against that catalog. Sanbai scores merge
on arrival; once the catalog is in place, tables for songs it lacks are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from ddrscores.domain.model import Database, Player, Provider
from ddrscores.domain.ports import FetchError
from ddrscores.domain.reconciliation import (
    apply_secondary_scores,
    primary_only_catalog,
    reconcile,
)

from .state import PipelineState, PlayerFailure, UpdateCounters, UpdateResult

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Iterable, Sequence

    from ddrscores.domain.model import PlayerSeed
    from ddrscores.domain.ports import (
        PrimaryRecord,
        PrimaryScores,
        ScoreSources,
        SecondaryRecord,
        SecondaryScores,
    )
    from ddrscores.domain.reconciliation import CanonicalCatalog

log = logging.getLogger(__name__)


class _JobKind(StrEnum):
    PRIMARY_CATALOG = "primary_catalog"
    SECONDARY_CATALOG = "secondary_catalog"
    PRIMARY_SCORES = "primary_scores"
    SECONDARY_SCORES = "secondary_scores"


@dataclass(frozen=True, slots=True)
class _Job:
    kind: _JobKind
    player: Player | None = None

    @property
    def provider(self) -> Provider:
        if self.kind in (_JobKind.PRIMARY_CATALOG, _JobKind.PRIMARY_SCORES):
            return Provider.SANBAI
        return Provider.SKILL_ATTACK


@dataclass(slots=True)
class UpdateOrchestrator:
    """Run updates against one set of score sources."""

    sources: ScoreSources

    async def run(self, players: Iterable[PlayerSeed]) -> UpdateResult:
        """Build a fresh database for ``players`` and fill it."""

        database = Database(players=[Player.from_seed(seed) for seed in players])
        return await self.refresh(database)

    async def refresh(
        self,
        database: Database,
        players: Iterable[PlayerSeed] | None = None,
    ) -> UpdateResult:
        """Update ``database`` in place, adding any seeds it does not track yet."""

        if players is not None:
            for seed in players:
                if database.player(seed.name) is None:
                    database.players.append(Player.from_seed(seed))
        return await _UpdateRun(database=database, sources=self.sources).execute()


@dataclass(eq=False)
class _UpdateRun:
    database: Database
    sources: ScoreSources
    state: PipelineState = PipelineState.IDLE
    counters: UpdateCounters = field(default_factory=UpdateCounters)
    catalog: CanonicalCatalog | None = None
    _tasks: dict[asyncio.Task[Any], _Job] = field(default_factory=dict["asyncio.Task[Any]", _Job])
    _abandoned: list[asyncio.Task[Any]] = field(default_factory=list["asyncio.Task[Any]"])
    _primary_records: Sequence[PrimaryRecord] | None = None
    _secondary_records: Sequence[SecondaryRecord] | None = None
    _secondary_failed: bool = False
    _buffered: list[tuple[Player, SecondaryScores]] = field(
        default_factory=list[tuple[Player, "SecondaryScores"]]
    )

    async def execute(self) -> UpdateResult:
        log.info("Starting update for %d players", len(self.database.players))
        self._start()
        try:
            while self._tasks:
                done, _ = await asyncio.wait(self._tasks, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    job = self._tasks.pop(task, None)
                    if job is None:
                        continue
                    self._handle(task, job)
        except BaseException:
            self._cancel(lambda _job: True)
            await self._settle_abandoned()
            raise
        await self._settle_abandoned()

        self.state = PipelineState.DONE
        failures = tuple(self.counters.failures)
        log.info(
            "Update finished: %d new songs, %d new scores, %d failed player fetches",
            self.counters.new_songs,
            self.counters.new_scores,
            len(failures),
        )
        return UpdateResult(
            database=self.database,
            new_songs=self.counters.new_songs,
            new_scores=self.counters.new_scores,
            failed_players=failures,
            secondary_catalog_available=not self._secondary_failed,
            state=self.state,
        )

    def _start(self) -> None:
        self.state = PipelineState.CATALOGS_IN_FLIGHT
        self._spawn(self.sources.primary_catalog(), _Job(_JobKind.PRIMARY_CATALOG))
        self._spawn(self.sources.secondary_catalog(), _Job(_JobKind.SECONDARY_CATALOG))
        for player in self.database.players:
            if player.sanbai_username:
                self._spawn(
                    self.sources.primary_scores(player.sanbai_username),
                    _Job(_JobKind.PRIMARY_SCORES, player),
                )
            if player.ddr_code is not None:
                self._spawn(
                    self.sources.secondary_scores(player.ddr_code),
                    _Job(_JobKind.SECONDARY_SCORES, player),
                )

    def _spawn(self, coro: Coroutine[Any, Any, Any], job: _Job) -> None:
        name = job.kind if job.player is None else f"{job.kind}:{job.player.name}"
        task = asyncio.create_task(coro, name=name)
        self._tasks[task] = job

    def _handle(self, task: asyncio.Task[Any], job: _Job) -> None:
        match job.kind:
            case _JobKind.PRIMARY_CATALOG:
                self._on_primary_catalog(task)
            case _JobKind.SECONDARY_CATALOG:
                self._on_secondary_catalog(task)
            case _JobKind.PRIMARY_SCORES:
                self._on_primary_scores(task, job)
            case _JobKind.SECONDARY_SCORES:
                self._on_secondary_scores(task, job)

    def _on_primary_catalog(self, task: asyncio.Task[Any]) -> None:
        try:
            self._primary_records = task.result()
        except FetchError as exc:
            log.error("Primary catalog unavailable, aborting update: %s", exc)  # noqa: TRY400
            raise
        log.debug("Primary catalog arrived with %d songs", len(self._primary_records))
        self._reconcile_when_ready()

    def _on_secondary_catalog(self, task: asyncio.Task[Any]) -> None:
        try:
            self._secondary_records = task.result()
        except FetchError as exc:
            log.warning("Secondary catalog unavailable, continuing with primary only: %s", exc)
            self._secondary_failed = True
            self._cancel(lambda job: job.kind is _JobKind.SECONDARY_SCORES)
            self._buffered.clear()
        else:
            log.debug("Secondary catalog arrived with %d songs", len(self._secondary_records))
        self._reconcile_when_ready()

    def _on_primary_scores(self, task: asyncio.Task[Any], job: _Job) -> None:
        player = _require_player(job)
        try:
            scores = task.result()
        except FetchError as exc:
            self._record_failure(player, job, exc)
            return
        if self.catalog is not None:
            scores = self._known_only(player, scores)
        changed = player.merge_scores(scores)
        self.counters.new_scores += changed
        log.debug("Merged %d changed slots from %s for %s", changed, job.provider, player.name)

    def _on_secondary_scores(self, task: asyncio.Task[Any], job: _Job) -> None:
        player = _require_player(job)
        try:
            scores = task.result()
        except FetchError as exc:
            self._record_failure(player, job, exc)
            return
        if self.catalog is None:
            self._buffered.append((player, scores))
            return
        self._apply_secondary(player, scores, self.catalog)

    def _reconcile_when_ready(self) -> None:
        if self.catalog is not None or self._primary_records is None:
            return
        if self._secondary_failed:
            catalog = primary_only_catalog(self._primary_records)
        elif self._secondary_records is not None:
            catalog = reconcile(self._primary_records, self._secondary_records)
        else:
            return

        self.catalog = catalog
        self.state = PipelineState.CATALOG_READY
        new_songs = self.database.replace_catalog(catalog.songs)
        self.counters.new_songs += new_songs
        log.info("Catalog ready: %d songs (%d new)", len(catalog), new_songs)
        dropped = self.database.drop_unknown_scores()
        if dropped:
            log.info("Dropped %d score tables for songs missing from the catalog", dropped)

        buffered, self._buffered = self._buffered, []
        for player, scores in buffered:
            self._apply_secondary(player, scores, catalog)
        self.state = PipelineState.DRAINING

    def _known_only(self, player: Player, scores: PrimaryScores) -> PrimaryScores:
        known = {key: value for key, value in scores.items() if self.database.has_song(key)}
        if len(known) < len(scores):
            log.debug(
                "Ignoring %d %s tables for %s with songs missing from the catalog",
                len(scores) - len(known),
                Provider.SANBAI,
                player.name,
            )
        return known

    def _apply_secondary(
        self, player: Player, scores: SecondaryScores, catalog: CanonicalCatalog
    ) -> None:
        changed = apply_secondary_scores(player, scores, catalog)
        self.counters.new_scores += changed
        log.debug(
            "Merged %d changed slots from %s for %s", changed, Provider.SKILL_ATTACK, player.name
        )

    def _record_failure(self, player: Player, job: _Job, exc: FetchError) -> None:
        log.warning("Could not fetch %s scores for %s: %s", job.provider, player.name, exc)
        self.counters.failures.append(
            PlayerFailure(player=player.name, provider=job.provider, message=str(exc))
        )

    def _cancel(self, predicate: _JobPredicate) -> None:
        for task, job in list(self._tasks.items()):
            if predicate(job):
                del self._tasks[task]
                task.cancel()
                self._abandoned.append(task)

    async def _settle_abandoned(self) -> None:
        if not self._abandoned:
            return
        abandoned, self._abandoned = self._abandoned, []
        await asyncio.gather(*abandoned, return_exceptions=True)


type _JobPredicate = Callable[[_Job], bool]


def _require_player(job: _Job) -> Player:
    if job.player is None:
        raise RuntimeError(f"{job.kind} job has no player")
    return job.player


def run_update(players: Iterable[PlayerSeed], sources: ScoreSources) -> UpdateResult:
    """Synchronous helper around :meth:`UpdateOrchestrator.run`."""
    return asyncio.run(UpdateOrchestrator(sources).run(players))


def refresh_update(
    database: Database,
    sources: ScoreSources,
    players: Iterable[PlayerSeed] | None = None,
) -> UpdateResult:
    """Synchronous helper around :meth:`UpdateOrchestrator.refresh`."""
    return asyncio.run(UpdateOrchestrator(sources).refresh(database, players))
