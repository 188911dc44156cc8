"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .sanbai import SanbaiConfig, get_sanbai_config
from .skill_attack import SkillAttackConfig, get_skill_attack_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SanbaiConfig",
    "SkillAttackConfig",
    "configure_logging",
    "get_sanbai_config",
    "get_skill_attack_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
