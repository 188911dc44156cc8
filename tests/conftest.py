from __future__ import annotations

import pytest

from ddrscores.config.logging import LOG_LEVEL_ENV_VAR
from ddrscores.config.roster import ROSTER_ENV_VAR

_SITE_ENV_VARS = (
    "DDRSCORES_SANBAI_BASE_URL",
    "DDRSCORES_SKILL_ATTACK_BASE_URL",
    LOG_LEVEL_ENV_VAR,
    ROSTER_ENV_VAR,
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ``.env`` or shell settings out of the tests."""
    for name in _SITE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
