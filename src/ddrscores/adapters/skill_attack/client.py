"""HTTP client for Skill Attack (skillattack.com/sa4)."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from ddrscores.adapters.http_resilience import ResilientClient
from ddrscores.domain.model import Provider
from ddrscores.domain.ports import FetchError

from .parser import parse_master_music, parse_score_page

if TYPE_CHECKING:
    from collections.abc import Callable

    from ddrscores.config.http_resilience import ResilienceConfig
    from ddrscores.config.skill_attack import SkillAttackConfig
    from ddrscores.domain.model import ScoreTable
    from ddrscores.domain.ports import SecondaryRecord

log = getLogger(__name__)


class SkillAttackAPIError(FetchError):
    """Raised when Skill Attack cannot be reached or returns something we cannot read."""

    def __init__(self, message: str) -> None:
        super().__init__(message, provider=Provider.SKILL_ATTACK)


class SkillAttackClient:
    """Fetch the legacy song list and per-player score matrices from Skill Attack."""

    def __init__(
        self,
        *,
        config: SkillAttackConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_catalog(self) -> list[SecondaryRecord]:
        return asyncio.run(self.fetch_catalog_async())

    def fetch_scores(self, ddr_code: int) -> dict[int, ScoreTable]:
        return asyncio.run(self.fetch_scores_async(ddr_code))

    async def fetch_catalog_async(self) -> list[SecondaryRecord]:
        async with self._client_factory(self._resilience) as client:
            text = await self._get_text(client, self._config.master_music_path)
        try:
            records = parse_master_music(text)
        except ValueError as exc:
            raise SkillAttackAPIError(f"Could not parse Skill Attack song list: {exc}") from exc
        log.info("Fetched %d songs from Skill Attack", len(records))
        return records

    async def fetch_scores_async(self, ddr_code: int) -> dict[int, ScoreTable]:
        params = {"_": "matrix", "ddrcode": str(ddr_code)}
        async with self._client_factory(self._resilience) as client:
            text = await self._get_text(client, self._config.score_path, params=params)
        try:
            tables = parse_score_page(text)
        except ValueError as exc:
            raise SkillAttackAPIError(
                f"Could not parse Skill Attack scores for DDR code {ddr_code}: {exc}"
            ) from exc
        log.info("Fetched Skill Attack scores for %s covering %d songs", ddr_code, len(tables))
        return tables

    async def _get_text(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> str:
        # The site does not declare its charset.
        try:
            return await client.fetch_text(
                "GET", path, params=params, encoding=self._config.encoding
            )
        except httpx.HTTPError as exc:
            raise SkillAttackAPIError(f"Skill Attack request {path} failed: {exc}") from exc
