from __future__ import annotations

from datetime import UTC, datetime
from itertools import product

import pytest

from ddrscores.domain.model import Chart, LampType, ScoreSlot, ScoreTable, merge_slots

EARLY = datetime(2024, 1, 1, tzinfo=UTC)
LATE = datetime(2024, 6, 1, tzinfo=UTC)

SLOTS: tuple[ScoreSlot | None, ...] = (
    None,
    ScoreSlot(score=700_000, lamp=LampType.GOOD_FULL_COMBO),
    ScoreSlot(score=800_000, lamp=LampType.CLEAR, time_played=EARLY),
    ScoreSlot(score=650_000, lamp=LampType.PERFECT_FULL_COMBO, time_played=LATE),
    ScoreSlot(score=800_000, lamp=LampType.CLEAR, time_played=LATE),
)


def test_merge_with_nothing_keeps_the_other_side() -> None:
    slot = SLOTS[1]

    assert merge_slots(None, None) is None
    assert merge_slots(slot, None) == slot
    assert merge_slots(None, slot) == slot


def test_merge_maximizes_fields_independently() -> None:
    merged = merge_slots(SLOTS[2], SLOTS[3])

    assert merged == ScoreSlot(
        score=800_000,
        lamp=LampType.PERFECT_FULL_COMBO,
        time_played=LATE,
    )


def test_missing_timestamp_loses_to_any_timestamp() -> None:
    merged = merge_slots(SLOTS[1], SLOTS[2])

    assert merged is not None
    assert merged.time_played == EARLY


@pytest.mark.parametrize(("a", "b"), list(product(SLOTS, repeat=2)))
def test_merge_is_commutative_and_idempotent(a: ScoreSlot | None, b: ScoreSlot | None) -> None:
    merged = merge_slots(a, b)

    assert merged == merge_slots(b, a)
    assert merge_slots(merged, b) == merged
    assert merge_slots(a, a) == a


@pytest.mark.parametrize(("a", "b", "c"), list(product(SLOTS[1:], repeat=3)))
def test_merge_is_associative_and_monotonic(a: ScoreSlot, b: ScoreSlot, c: ScoreSlot) -> None:
    left = merge_slots(merge_slots(a, b), c)
    right = merge_slots(a, merge_slots(b, c))

    assert left == right
    assert left is not None
    assert left.score >= max(a.score, b.score, c.score)
    assert left.lamp >= max(a.lamp, b.lamp, c.lamp)


def test_table_defaults_to_empty() -> None:
    table = ScoreTable()

    assert table.is_empty()
    assert all(table[chart] is None for chart in Chart)


def test_table_rejects_wrong_slot_count() -> None:
    with pytest.raises(ValueError, match="9 slots"):
        ScoreTable([None] * 5)


def test_table_merge_counts_changed_slots() -> None:
    table = ScoreTable.from_slots({Chart.ESP: SLOTS[1]})
    incoming = ScoreTable.from_slots(
        {
            Chart.ESP: ScoreSlot(score=600_000, lamp=LampType.CLEAR),
            Chart.CSP: SLOTS[2],
            Chart.CDP: SLOTS[3],
        }
    )

    changed = table.merge(incoming)

    assert changed == 2
    assert table[Chart.ESP] == SLOTS[1]
    assert table[Chart.CSP] == SLOTS[2]
    assert table[Chart.CDP] == SLOTS[3]


def test_table_merge_counts_timestamp_only_change() -> None:
    table = ScoreTable.from_slots({Chart.DSP: SLOTS[2]})

    changed = table.merge(ScoreTable.from_slots({Chart.DSP: SLOTS[4]}))

    assert changed == 1
    assert table[Chart.DSP] == SLOTS[4]


def test_table_merge_replay_changes_nothing() -> None:
    incoming = ScoreTable.from_slots({Chart.BSP: SLOTS[1], Chart.EDP: SLOTS[3]})
    table = ScoreTable()

    assert table.merge(incoming) == 2
    assert table.merge(incoming) == 0


def test_merged_leaves_inputs_untouched() -> None:
    left = ScoreTable.from_slots({Chart.GSP: SLOTS[1]})
    right = ScoreTable.from_slots({Chart.GSP: SLOTS[3]})

    merged = left.merged(right)

    assert left[Chart.GSP] == SLOTS[1]
    assert right[Chart.GSP] == SLOTS[3]
    assert merged[Chart.GSP] == ScoreSlot(
        score=700_000, lamp=LampType.PERFECT_FULL_COMBO, time_played=LATE
    )
    assert left.merged(right) == right.merged(left)


def test_items_yields_only_played_charts() -> None:
    table = ScoreTable.from_slots({Chart.CSP: SLOTS[1], Chart.BDP: SLOTS[2]})

    assert list(table.items()) == [(Chart.CSP, SLOTS[1]), (Chart.BDP, SLOTS[2])]
    assert table.played_count() == 2
