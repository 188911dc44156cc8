"""Song catalog entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddrscores.domain.model.enums import CHART_COUNT, SINGLE_CHARTS, Chart, DDRVersion

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ddrscores.domain.model.song_id import SongId

type SkillAttackIndex = int


def _fixed_slots(values: Iterable[int], *, kind: str) -> tuple[int, ...]:
    slots = tuple(int(value) for value in values)
    if len(slots) != CHART_COUNT:
        raise ValueError(f"{kind} must have {CHART_COUNT} entries, got {len(slots)}")
    return slots


@dataclass(frozen=True, slots=True)
class Ratings:
    """Difficulty level per chart slot; ``0`` means the chart does not exist."""

    levels: tuple[int, ...] = (0,) * CHART_COUNT

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", _fixed_slots(self.levels, kind="Ratings"))

    @classmethod
    def from_values(cls, values: Iterable[int | None]) -> Ratings:
        """Build from raw site values where ``None`` or a negative level means absent."""
        return cls(tuple(value if value is not None and value > 0 else 0 for value in values))

    def level_for(self, chart: Chart) -> int:
        return self.levels[chart.index]

    def has_chart(self, chart: Chart) -> bool:
        return self.level_for(chart) > 0

    def single_levels(self) -> tuple[int, ...]:
        return tuple(self.levels[chart.index] for chart in SINGLE_CHARTS)

    def contains_single(self, level: int) -> bool:
        return level > 0 and level in self.single_levels()

    def has_single_challenge(self) -> bool:
        return self.has_chart(Chart.CSP)

    def has_non_challenge(self) -> bool:
        return any(self.has_chart(chart) for chart in SINGLE_CHARTS if not chart.is_challenge)


@dataclass(frozen=True, slots=True)
class LockTypes:
    """Opaque per-chart unlock metadata as published by Sanbai."""

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _fixed_slots(self.values, kind="LockTypes"))

    def for_chart(self, chart: Chart) -> int:
        return self.values[chart.index]


@dataclass(frozen=True, slots=True)
class Bpm:
    """Single-play tempo as Sanbai lists it.

    Songs with tempo changes show a range plus the main BPM the chart mostly
    sits at; for constant-tempo songs all three values are equal.
    """

    lower: int
    upper: int
    main: int

    def __post_init__(self) -> None:
        if not self.lower <= self.main <= self.upper:
            raise ValueError(f"Main BPM {self.main} lies outside {self.lower}-{self.upper}")

    @classmethod
    def constant(cls, bpm: int) -> Bpm:
        return cls(lower=bpm, upper=bpm, main=bpm)

    @property
    def is_constant(self) -> bool:
        return self.lower == self.upper

    def __str__(self) -> str:
        if self.is_constant:
            return str(self.main)
        return f"{self.lower}-{self.upper} (main {self.main})"


@dataclass(frozen=True, slots=True, kw_only=True)
class DDRSong:
    song_id: SongId
    name: str
    romanized_name: str | None = None
    search_names: tuple[str, ...] = ()
    skill_attack_index: SkillAttackIndex | None = None
    version: DDRVersion = DDRVersion.UNKNOWN
    deleted: bool = False
    ratings: Ratings = field(default_factory=Ratings)
    lock_types: LockTypes | None = None

    @property
    def display_name(self) -> str:
        return self.name


def build_search_names(
    name: str,
    *,
    romanized_name: str | None = None,
    alternate_name: str | None = None,
    searchable_name: str | None = None,
) -> tuple[str, ...]:
    """Lower-cased lookup names for a song, without duplicates, in a stable order.

    Alternate and searchable names hold ``/``-separated variants. The display name
    is kept whole because real titles contain ``/``.
    """

    candidates: list[str] = [name]
    if romanized_name:
        candidates.append(romanized_name)
    for grouped in (alternate_name, searchable_name):
        if grouped:
            candidates.extend(grouped.split("/"))

    names: list[str] = []
    for candidate in candidates:
        lowered = candidate.strip().lower()
        if lowered and lowered not in names:
            names.append(lowered)
    return tuple(names)
