"""Score slots and per-song score tables with a monotonic merge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddrscores.domain.model.enums import CHART_COUNT, Chart, LampType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class ScoreSlot:
    """Best known result for one (song, chart) pair."""

    score: int
    lamp: LampType
    time_played: datetime | None = None


def merge_slots(a: ScoreSlot | None, b: ScoreSlot | None) -> ScoreSlot | None:
    """Keep the best of two observations, maximizing each field independently.

    A slot may end up pairing a score from one play with a lamp from another.
    """

    if a is None:
        return b
    if b is None:
        return a
    return ScoreSlot(
        score=max(a.score, b.score),
        lamp=max(a.lamp, b.lamp),
        time_played=_latest(a.time_played, b.time_played),
    )


def _latest(a: datetime | None, b: datetime | None) -> datetime | None:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


def _empty_slots() -> list[ScoreSlot | None]:
    return [None] * CHART_COUNT


@dataclass(slots=True)
class ScoreTable:
    """One optional slot per chart, mutated only through :meth:`merge`."""

    _slots: list[ScoreSlot | None] = field(default_factory=_empty_slots, repr=False)

    def __post_init__(self) -> None:
        if len(self._slots) != CHART_COUNT:
            raise ValueError(f"ScoreTable needs {CHART_COUNT} slots, got {len(self._slots)}")

    @classmethod
    def from_slots(
        cls, slots: Mapping[Chart, ScoreSlot] | Iterable[ScoreSlot | None]
    ) -> ScoreTable:
        if isinstance(slots, Mapping):
            table = cls()
            for chart, slot in slots.items():
                table._slots[Chart(chart).index] = slot
            return table
        return cls(list(slots))

    def __getitem__(self, chart: Chart) -> ScoreSlot | None:
        return self._slots[chart.index]

    def __iter__(self) -> Iterator[ScoreSlot | None]:
        return iter(self._slots)

    @property
    def slots(self) -> tuple[ScoreSlot | None, ...]:
        return tuple(self._slots)

    def is_empty(self) -> bool:
        return all(slot is None for slot in self._slots)

    def played_count(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def items(self) -> Iterator[tuple[Chart, ScoreSlot]]:
        for chart in Chart:
            slot = self._slots[chart.index]
            if slot is not None:
                yield chart, slot

    def merge(self, other: ScoreTable) -> int:
        """Merge ``other`` into this table; return how many slots changed."""
        changed = 0
        for index, incoming in enumerate(other._slots):
            current = self._slots[index]
            merged = merge_slots(current, incoming)
            if merged != current:
                self._slots[index] = merged
                changed += 1
        return changed

    def merge_slot(self, chart: Chart, slot: ScoreSlot) -> bool:
        current = self._slots[chart.index]
        merged = merge_slots(current, slot)
        if merged == current:
            return False
        self._slots[chart.index] = merged
        return True

    def merged(self, other: ScoreTable) -> ScoreTable:
        result = self.copy()
        result.merge(other)
        return result

    def copy(self) -> ScoreTable:
        return ScoreTable(list(self._slots))
