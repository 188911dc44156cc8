"""Rate-limited, retrying HTTP sessions shared by the site adapters."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from ddrscores.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)

_IN_MEMORY_DATABASE = ":memory:"


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        allowed_methods=sorted(policy.allowed_methods),
        status_forcelist=sorted(policy.status_forcelist),
        backoff_factor=policy.backoff_factor,
        backoff_jitter=policy.backoff_jitter,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
    )


class ResilientClient:
    """One site's HTTP session.

    Retries happen inside the transport, so callers only ever see the last
    response of a retry sequence. The optional limiter paces whole requests,
    including their retries. Site adapters open one session per fetch with
    ``async with`` and read bodies through :meth:`fetch_text`.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = _build_limiter(config.ratelimit)
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        started = time.perf_counter()
        if self._limiter is None:
            response = await self._client.request(method, url, params=params, json=json)
        else:
            async with self._limiter:
                response = await self._client.request(method, url, params=params, json=json)
        log.debug(
            "%s: %s %s -> %d in %.2fs",
            self.config.name,
            method,
            url,
            response.status_code,
            time.perf_counter() - started,
        )
        return response

    async def fetch_text(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
        encoding: str | None = None,
    ) -> str:
        """Return the body of a successful response as text.

        Raises ``httpx.HTTPStatusError`` for non-2xx answers. ``encoding``
        overrides whatever charset the server declares (or fails to declare);
        undecodable bytes are replaced rather than raised.
        """
        response = await self.request(method, url, params=params, json=json)
        response.raise_for_status()
        if encoding is None:
            return response.text
        return response.content.decode(encoding, errors="replace")


def _build_limiter(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    transport = RetryTransport(retry=build_retry(config.retry))
    base_url = config.base_url or ""
    storage = _build_storage(config.cache)
    if storage is None:
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )
    return AsyncCacheClient(
        base_url=base_url,
        timeout=config.timeout_seconds,
        transport=transport,
        storage=storage,
    )


def _build_storage(cache: CacheConfig | None) -> AsyncSqliteStorage | None:
    if cache is None or not cache.enabled:
        return None
    # Nothing is written to disk; results never outlive the process.
    return AsyncSqliteStorage(
        database_path=_IN_MEMORY_DATABASE,
        default_ttl=cache.default_ttl_seconds,
        refresh_ttl_on_access=cache.refresh_ttl_on_access,
    )
