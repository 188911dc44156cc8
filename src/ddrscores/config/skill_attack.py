"""Skill Attack configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SKILL_ATTACK_BASE_URL = "http://skillattack.com/sa4"
SKILL_ATTACK_MASTER_MUSIC_PATH = "/data/master_music.txt"
SKILL_ATTACK_SCORE_PATH = "/dancer_score.php"
SKILL_ATTACK_ENCODING = "shift_jis"
SKILL_ATTACK_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SkillAttackConfig:
    """Holds Skill Attack endpoint and client configuration values."""

    resilience: ResilienceConfig
    master_music_path: str = SKILL_ATTACK_MASTER_MUSIC_PATH
    score_path: str = SKILL_ATTACK_SCORE_PATH
    encoding: str = SKILL_ATTACK_ENCODING


def get_skill_attack_config(*, resilience: ResilienceConfig | None = None) -> SkillAttackConfig:
    base_url = optional_env_var("DDRSCORES_SKILL_ATTACK_BASE_URL", DEFAULT_SKILL_ATTACK_BASE_URL)
    return SkillAttackConfig(
        resilience=resilience
        or ResilienceConfig(
            name="skill_attack",
            base_url=base_url,
            timeout_seconds=SKILL_ATTACK_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2, backoff_factor=1.0),
            # Skill Attack is a small hobby site; keep the request rate low.
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        ),
    )
