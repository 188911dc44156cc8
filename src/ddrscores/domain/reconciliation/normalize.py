"""Title folding used to pair songs across the two catalogs.

The sites spell the same title slightly differently: a space before a
parenthetical, full-width punctuation, smart quotes, ``…`` against ``...`` and
the odd accented vowel. Folding is a fixed table lookup; no general Unicode
normalization is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_FULLWIDTH_OFFSET = 0xFEE0

_PUNCTUATION_FOLDS: dict[str, str] = {
    "！": "!",
    "（": "(",
    "）": ")",
    "＋": "+",
    "“": '"',
    "”": '"',
    "’": "'",
    "ã": "a",
    "ā": "a",
    "…": "...",
}


def _fullwidth_alphanumerics() -> dict[str, str]:
    folds: dict[str, str] = {}
    for ascii_range in ("AZ", "az", "09"):
        start, end = (ord(bound) for bound in ascii_range)
        for code in range(start, end + 1):
            folds[chr(code + _FULLWIDTH_OFFSET)] = chr(code)
    return folds


def _default_folds() -> Mapping[str, str]:
    return MappingProxyType(_PUNCTUATION_FOLDS | _fullwidth_alphanumerics())


@dataclass(frozen=True, slots=True)
class TitleFolds:
    """Immutable character fold table; whitespace is always dropped."""

    table: Mapping[str, str] = field(default_factory=_default_folds)

    def apply(self, title: str) -> str:
        return "".join(self.table.get(char, char) for char in title if not char.isspace())


DEFAULT_FOLDS = TitleFolds()


def normalize_title(title: str, folds: TitleFolds = DEFAULT_FOLDS) -> str:
    """Fold spelling variants away while preserving case.

    >>> normalize_title("Possession (EDP Mix)")
    'Possession(EDPMix)'
    >>> normalize_title("Ａ…Ｂ")
    'A...B'
    """

    return folds.apply(title)


def title_match_key(title: str, folds: TitleFolds = DEFAULT_FOLDS) -> str:
    """Key on which the catalogs are joined: the normalized title, case-folded."""
    return normalize_title(title, folds).casefold()
