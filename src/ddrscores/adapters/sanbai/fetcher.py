"""Sanbai implementations of the catalog and score fetching ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddrscores.config.sanbai import get_sanbai_config

from .client import SanbaiClient

if TYPE_CHECKING:
    from ddrscores.domain.model import ScoreTable, SongId
    from ddrscores.domain.ports import PrimaryCatalogFetcher, PrimaryRecord, PrimaryScoreFetcher


def _default_client() -> SanbaiClient:
    return SanbaiClient(config=get_sanbai_config())


@dataclass(slots=True)
class SanbaiCatalogFetcher:
    client: SanbaiClient = field(default_factory=_default_client)

    async def __call__(self) -> list[PrimaryRecord]:
        return await self.client.fetch_catalog_async()


@dataclass(slots=True)
class SanbaiScoreFetcher:
    client: SanbaiClient = field(default_factory=_default_client)

    async def __call__(self, username: str) -> dict[SongId, ScoreTable]:
        return await self.client.fetch_scores_async(username)


if TYPE_CHECKING:
    _catalog_check: PrimaryCatalogFetcher = SanbaiCatalogFetcher()
    _scores_check: PrimaryScoreFetcher = SanbaiScoreFetcher()
