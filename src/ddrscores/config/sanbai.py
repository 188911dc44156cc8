"""Sanbai (3icecream) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SANBAI_BASE_URL = "https://3icecream.com"
SANBAI_SONG_DATA_PATH = "/js/songdata.js"
SANBAI_SCORES_PATH = "/api/follow_scores"
SANBAI_SONG_DETAILS_PATH = "/ddr/song_details/{song_id}"
SANBAI_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class SanbaiConfig:
    """Holds Sanbai endpoint and client configuration values."""

    resilience: ResilienceConfig
    song_data_path: str = SANBAI_SONG_DATA_PATH
    scores_path: str = SANBAI_SCORES_PATH
    song_details_path: str = SANBAI_SONG_DETAILS_PATH


def get_sanbai_config(*, resilience: ResilienceConfig | None = None) -> SanbaiConfig:
    base_url = optional_env_var("DDRSCORES_SANBAI_BASE_URL", DEFAULT_SANBAI_BASE_URL)
    return SanbaiConfig(
        resilience=resilience
        or ResilienceConfig(
            name="sanbai",
            base_url=base_url,
            timeout_seconds=SANBAI_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        ),
    )
