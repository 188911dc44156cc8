"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ddrscores.adapters.sanbai import SanbaiCatalogFetcher, SanbaiClient, SanbaiScoreFetcher
from ddrscores.adapters.skill_attack import (
    SkillAttackCatalogFetcher,
    SkillAttackClient,
    SkillAttackScoreFetcher,
)
from ddrscores.config import get_sanbai_config, get_skill_attack_config
from ddrscores.domain.ports import ScoreSources
from ddrscores.domain.update_pipeline import refresh_update, run_update

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ddrscores.adapters.http_resilience import ResilientClient
    from ddrscores.config import ResilienceConfig, SanbaiConfig, SkillAttackConfig
    from ddrscores.domain.model import Bpm, Database, PlayerSeed, SongId
    from ddrscores.domain.update_pipeline import UpdateResult

log = getLogger(__name__)


def build_score_sources(
    *,
    sanbai_config: SanbaiConfig | None = None,
    skill_attack_config: SkillAttackConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> ScoreSources:
    """Wire the Sanbai and Skill Attack adapters into the update pipeline's ports."""

    sanbai = SanbaiClient(
        config=sanbai_config or get_sanbai_config(),
        client_factory=client_factory,
    )
    skill_attack = SkillAttackClient(
        config=skill_attack_config or get_skill_attack_config(),
        client_factory=client_factory,
    )
    return ScoreSources(
        primary_catalog=SanbaiCatalogFetcher(sanbai),
        secondary_catalog=SkillAttackCatalogFetcher(skill_attack),
        primary_scores=SanbaiScoreFetcher(sanbai),
        secondary_scores=SkillAttackScoreFetcher(skill_attack),
    )


def update_scores(
    players: Iterable[PlayerSeed],
    *,
    sources: ScoreSources | None = None,
) -> UpdateResult:
    """Fetch catalogs and scores for ``players`` into a fresh database."""

    seeds = list(players)
    log.info("Starting score update for %d players", len(seeds))
    result = run_update(seeds, sources or build_score_sources())
    _log_result(result)
    return result


def refresh_scores(
    database: Database,
    *,
    sources: ScoreSources | None = None,
    players: Iterable[PlayerSeed] | None = None,
) -> UpdateResult:
    """Refresh an existing database in place."""

    result = refresh_update(database, sources or build_score_sources(), players)
    _log_result(result)
    return result


def lookup_bpms(
    song_ids: Iterable[SongId],
    *,
    sanbai_config: SanbaiConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> dict[SongId, Bpm | None]:
    """Fetch the BPM of each song from Sanbai, one page at a time."""

    client = SanbaiClient(
        config=sanbai_config or get_sanbai_config(),
        client_factory=client_factory,
    )
    return {song_id: client.fetch_bpm(song_id) for song_id in song_ids}


def _log_result(result: UpdateResult) -> None:
    log.info(
        "Finished score update: songs=%s, new_songs=%s, new_scores=%s, failed=%s",
        len(result.database.songs),
        result.new_songs,
        result.new_scores,
        len(result.failed_players),
    )
    if not result.secondary_catalog_available:
        log.warning("Skill Attack was unavailable; its scores were not merged")
