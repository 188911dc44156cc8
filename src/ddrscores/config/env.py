"""Read configuration values from the process environment.

Blank values count as unset everywhere, and surrounding whitespace is
stripped, so ``KEY=`` lines in a ``.env`` file never produce empty settings.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def _read(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Look up every name at once so one error can report all the gaps."""

    found = {name: _read(name) for name in names}
    absent = sorted(name for name, value in found.items() if value is None)
    if absent:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(absent)}")
    return {name: value for name, value in found.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]


def optional_env_var(name: str, default: str) -> str:
    return _read(name) or default
