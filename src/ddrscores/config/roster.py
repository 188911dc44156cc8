"""Player roster parsing for the command-line and environment configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddrscores.domain.model import PlayerSeed

from .env import require_env_var
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

ROSTER_ENV_VAR = "DDRSCORES_PLAYERS"
_ENTRY_SEPARATOR = ";"
_FIELD_SEPARATOR = ":"


def parse_player_entry(entry: str) -> PlayerSeed:
    """Parse ``NAME:SANBAI_USERNAME:DDR_CODE`` where either account may be left empty."""

    parts = [part.strip() for part in entry.split(_FIELD_SEPARATOR)]
    if len(parts) != 3:  # noqa: PLR2004
        raise ConfigurationError(
            f"Invalid player entry {entry!r}: expected NAME:SANBAI_USERNAME:DDR_CODE"
        )
    name, sanbai_username, raw_code = parts
    if not name:
        raise ConfigurationError(f"Invalid player entry {entry!r}: name is required")
    ddr_code = parse_ddr_code(raw_code) if raw_code else None
    if not sanbai_username and ddr_code is None:
        raise ConfigurationError(f"Player {name!r} has neither a Sanbai username nor a DDR code")
    return PlayerSeed(
        name=name,
        sanbai_username=sanbai_username or None,
        ddr_code=ddr_code,
    )


def parse_ddr_code(raw: str) -> int:
    """Parse a DDR code, accepting the ``1234-5678`` display form."""

    digits = raw.replace("-", "").strip()
    if len(digits) != 8 or not digits.isdigit():  # noqa: PLR2004
        raise ConfigurationError(f"Invalid DDR code {raw!r}: expected 8 digits")
    return int(digits)


def parse_roster(entries: Iterable[str]) -> list[PlayerSeed]:
    seeds = [parse_player_entry(entry) for entry in entries if entry.strip()]
    names = [seed.name for seed in seeds]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate player names in roster: {', '.join(duplicates)}")
    return seeds


def get_roster_from_environment() -> list[PlayerSeed]:
    """Read ``NAME:SANBAI_USERNAME:DDR_CODE;...`` from ``DDRSCORES_PLAYERS``."""
    return parse_roster(require_env_var(ROSTER_ENV_VAR).split(_ENTRY_SEPARATOR))
