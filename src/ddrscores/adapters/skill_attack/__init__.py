"""Public interface for the Skill Attack adapter."""

from __future__ import annotations

from .client import SkillAttackAPIError, SkillAttackClient
from .fetcher import SkillAttackCatalogFetcher, SkillAttackScoreFetcher
from .parser import SkillAttackParseError, parse_master_music, parse_score_page

__all__ = [
    "SkillAttackAPIError",
    "SkillAttackCatalogFetcher",
    "SkillAttackClient",
    "SkillAttackParseError",
    "SkillAttackScoreFetcher",
    "parse_master_music",
    "parse_score_page",
]
