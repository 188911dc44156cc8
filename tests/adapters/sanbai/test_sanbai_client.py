from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from ddrscores.adapters.sanbai import (
    SanbaiAPIError,
    SanbaiCatalogFetcher,
    SanbaiClient,
    SanbaiScoreFetcher,
)
from ddrscores.config import ResilienceConfig, RetryPolicy, SanbaiConfig
from ddrscores.domain.model import Bpm, Chart, DDRVersion, LampType, Provider, SongId
from tests.helpers.http import make_client_factory

SONG_A = "01689DIOPQbdiloq01689DIOPQbdiloq"
SONG_B = "bdiloq01689DIOPQbdiloq01689DIOPQ"

SONG_DATA = [
    {
        "song_id": SONG_A,
        "song_name": "愛言葉",
        "romanized_name": "Aikotoba",
        "alternate_name": "aikotoba/ai kotoba",
        "searchable_name": None,
        "alphabet": "A",
        "version_num": 16,
        "ratings": [3, 6, 9, 12, 0, 6, 9, 12, 0],
        "tiers": [1, 1, 1, 1, 1, 1, 1, 1, 1],
        "lock_types": [0, 0, 0, 0, 0, 0, 0, 0, 0],
    },
    {
        "song_id": SONG_B,
        "song_name": "Old Song",
        "version_num": 1,
        "deleted": 1,
        "ratings": [2, 4, 7, 0, 0, 4, 7, 0, 0],
    },
]


def _config() -> SanbaiConfig:
    return SanbaiConfig(
        resilience=ResilienceConfig(
            name="sanbai-test",
            base_url="https://sanbai.test",
            retry=RetryPolicy(total=0),
            cache=None,
        )
    )


def _song_data_js() -> str:
    return f"var ALL_SONG_DATA={json.dumps(SONG_DATA)};\n"


def test_fetch_catalog_reads_song_data_script() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=_song_data_js())

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    records = client.fetch_catalog()

    assert [str(request.url) for request in requests] == ["https://sanbai.test/js/songdata.js"]
    assert [record.song_id for record in records] == [SongId.parse(SONG_A), SongId.parse(SONG_B)]
    first, second = records
    assert first.name == "愛言葉"
    assert first.romanized_name == "Aikotoba"
    assert first.version is DDRVersion.DDR_A
    assert first.ratings.level_for(Chart.ESP) == 12
    assert first.lock_types is not None
    assert not first.deleted
    assert second.deleted
    assert second.lock_types is None
    assert second.version is DDRVersion.DDR_1ST_MIX


def test_fetch_scores_posts_username() -> None:
    bodies: list[object] = []
    payload = {
        "scores": [
            {
                "song_id": SONG_A,
                "SP_or_DP": 0,
                "difficulty": 3,
                "score": 989_350,
                "prev_score": 983_570,
                "lamp": 4,
                "time_played": 1_620_500_291,
                "time_scraped": 1_620_522_577,
            },
            {
                "song_id": SONG_A,
                "SP_or_DP": 1,
                "difficulty": 4,
                "score": 700_000,
                "lamp": 1,
            },
        ]
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/follow_scores"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=payload)

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    tables = client.fetch_scores("alice")

    assert bodies == [{"username": "alice"}]
    table = tables[SongId.parse(SONG_A)]
    expert = table[Chart.ESP]
    challenge = table[Chart.CDP]
    assert expert is not None
    assert expert.score == 989_350
    assert expert.lamp is LampType.GREAT_FULL_COMBO
    assert expert.time_played is not None
    assert int(expert.time_played.timestamp()) == 1_620_500_291
    assert challenge is not None
    assert challenge.lamp is LampType.CLEAR
    assert challenge.time_played is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="down"),
        httpx.Response(200, text="ALL_SONG_DATA=[];"),
        httpx.Response(200, text='var ALL_SONG_DATA=[{"song_id": "short"}];'),
    ],
)
def test_catalog_failures_become_sanbai_errors(response: httpx.Response) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return response

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SanbaiAPIError) as excinfo:
        client.fetch_catalog()

    assert excinfo.value.provider is Provider.SANBAI


def test_bad_song_id_in_scores_is_an_error() -> None:
    payload = {
        "scores": [{"song_id": "x" * 32, "SP_or_DP": 0, "difficulty": 0, "score": 1, "lamp": 1}]
    }

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SanbaiAPIError, match="alice"):
        client.fetch_scores("alice")


def test_unknown_lamp_in_scores_is_an_error() -> None:
    payload = {
        "scores": [{"song_id": SONG_A, "SP_or_DP": 0, "difficulty": 0, "score": 1, "lamp": 9}]
    }

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SanbaiAPIError):
        client.fetch_scores("alice")


def test_fetchers_delegate_to_client() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("songdata.js"):
            return httpx.Response(200, text=_song_data_js())
        return httpx.Response(200, json={"scores": []})

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    records = asyncio.run(SanbaiCatalogFetcher(client)())
    scores = asyncio.run(SanbaiScoreFetcher(client)("bob"))

    assert len(records) == 2
    assert scores == {}


def test_fetch_bpm_reads_song_details_page() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            text='<span class="sp-bpm">75-528</span> <span class="sp-bpm">150</span>',
        )

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    bpm = client.fetch_bpm(SongId.parse(SONG_A))

    assert [request.url.path for request in requests] == [f"/ddr/song_details/{SONG_A}"]
    assert bpm == Bpm(lower=75, upper=528, main=150)


def test_fetch_bpm_reports_changed_page_layout() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>redesigned</html>")

    client = SanbaiClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SanbaiAPIError, match=SONG_A):
        client.fetch_bpm(SongId.parse(SONG_A))
