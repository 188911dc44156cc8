"""HTTP client for Sanbai (3icecream.com)."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from ddrscores.adapters.http_resilience import ResilientClient
from ddrscores.domain.model import Provider
from ddrscores.domain.ports import FetchError

from .parser import parse_song_bpm
from .schema import SanbaiScoresResponse, SanbaiSong, strip_song_data_wrapper
from .translator import translate_scores, translate_song

if TYPE_CHECKING:
    from collections.abc import Callable

    from ddrscores.config.http_resilience import ResilienceConfig
    from ddrscores.config.sanbai import SanbaiConfig
    from ddrscores.domain.model import Bpm, ScoreTable, SongId
    from ddrscores.domain.ports import PrimaryRecord

log = getLogger(__name__)

_SONG_LIST_ADAPTER = TypeAdapter(list[SanbaiSong])


class SanbaiAPIError(FetchError):
    """Raised when Sanbai cannot be reached or returns something we cannot read."""

    def __init__(self, message: str) -> None:
        super().__init__(message, provider=Provider.SANBAI)


class SanbaiClient:
    """Fetch the song catalog and player scores from Sanbai."""

    def __init__(
        self,
        *,
        config: SanbaiConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_catalog(self) -> list[PrimaryRecord]:
        return asyncio.run(self.fetch_catalog_async())

    def fetch_scores(self, username: str) -> dict[SongId, ScoreTable]:
        return asyncio.run(self.fetch_scores_async(username))

    def fetch_bpm(self, song_id: SongId) -> Bpm | None:
        return asyncio.run(self.fetch_bpm_async(song_id))

    async def fetch_catalog_async(self) -> list[PrimaryRecord]:
        async with self._client_factory(self._resilience) as client:
            text = await self._perform_request(client, "GET", self._config.song_data_path)
        try:
            payload = strip_song_data_wrapper(text)
            songs = _SONG_LIST_ADAPTER.validate_json(payload)
            records = [translate_song(song) for song in songs]
        except (ValidationError, ValueError) as exc:
            raise SanbaiAPIError(f"Could not parse Sanbai song data: {exc}") from exc
        log.info("Fetched %d songs from Sanbai", len(records))
        return records

    async def fetch_scores_async(self, username: str) -> dict[SongId, ScoreTable]:
        async with self._client_factory(self._resilience) as client:
            text = await self._perform_request(
                client,
                "POST",
                self._config.scores_path,
                json={"username": username},
            )
        try:
            response = SanbaiScoresResponse.model_validate_json(text)
            tables = translate_scores(response.scores)
        except (ValidationError, ValueError) as exc:
            raise SanbaiAPIError(f"Could not parse Sanbai scores for {username!r}: {exc}") from exc
        log.info("Fetched Sanbai scores for %s covering %d songs", username, len(tables))
        return tables

    async def fetch_bpm_async(self, song_id: SongId) -> Bpm | None:
        """Look up one song's BPM on its details page; ``None`` if Sanbai has none."""
        path = self._config.song_details_path.format(song_id=song_id)
        async with self._client_factory(self._resilience) as client:
            html = await self._perform_request(client, "GET", path)
        try:
            return parse_song_bpm(html)
        except ValueError as exc:
            raise SanbaiAPIError(f"Could not read the BPM for song {song_id}: {exc}") from exc

    async def _perform_request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object | None = None,
    ) -> str:
        try:
            return await client.fetch_text(method, path, json=json)
        except httpx.HTTPError as exc:
            raise SanbaiAPIError(f"Sanbai request {method} {path} failed: {exc}") from exc
