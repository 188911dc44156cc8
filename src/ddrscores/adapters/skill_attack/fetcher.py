"""Skill Attack implementations of the catalog and score fetching ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddrscores.config.skill_attack import get_skill_attack_config

from .client import SkillAttackClient

if TYPE_CHECKING:
    from ddrscores.domain.model import ScoreTable
    from ddrscores.domain.ports import (
        SecondaryCatalogFetcher,
        SecondaryRecord,
        SecondaryScoreFetcher,
    )


def _default_client() -> SkillAttackClient:
    return SkillAttackClient(config=get_skill_attack_config())


@dataclass(slots=True)
class SkillAttackCatalogFetcher:
    client: SkillAttackClient = field(default_factory=_default_client)

    async def __call__(self) -> list[SecondaryRecord]:
        return await self.client.fetch_catalog_async()


@dataclass(slots=True)
class SkillAttackScoreFetcher:
    client: SkillAttackClient = field(default_factory=_default_client)

    async def __call__(self, ddr_code: int) -> dict[int, ScoreTable]:
        return await self.client.fetch_scores_async(ddr_code)


if TYPE_CHECKING:
    _catalog_check: SecondaryCatalogFetcher = SkillAttackCatalogFetcher()
    _scores_check: SecondaryScoreFetcher = SkillAttackScoreFetcher()
