"""Merge the authoritative and legacy song lists into one canonical catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import groupby
from operator import itemgetter
from types import MappingProxyType
from typing import TYPE_CHECKING

from ddrscores.domain.model import DDRSong, build_search_names, song_sort_key

from .normalize import DEFAULT_FOLDS, TitleFolds, title_match_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from ddrscores.domain.model import SkillAttackIndex, SongId
    from ddrscores.domain.ports import PrimaryRecord, SecondaryRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CanonicalCatalog:
    """Reconciled songs in display order plus the legacy-index lookup."""

    songs: tuple[DDRSong, ...]
    secondary_index: Mapping[SkillAttackIndex, SongId] = field(
        default_factory=lambda: MappingProxyType({})
    )
    unmatched_secondary: int = 0

    def __len__(self) -> int:
        return len(self.songs)

    def __iter__(self) -> Iterator[DDRSong]:
        return iter(self.songs)

    def song_id_for(self, index: SkillAttackIndex) -> SongId | None:
        return self.secondary_index.get(index)

    @property
    def has_secondary(self) -> bool:
        return bool(self.secondary_index)


def reconcile(
    primary: Iterable[PrimaryRecord],
    secondary: Iterable[SecondaryRecord],
    *,
    folds: TitleFolds = DEFAULT_FOLDS,
) -> CanonicalCatalog:
    """Every primary record becomes a song; secondary records only contribute an index.

    Secondary records that carry a known shared song id are linked directly. The
    rest are paired by normalized title against primary records not linked yet.
    """

    primary_by_id = _index_primary(primary)
    links: dict[SongId, SkillAttackIndex] = {}
    by_title: list[SecondaryRecord] = []
    dropped = 0

    for record in secondary:
        if record.song_id is None:
            by_title.append(record)
            continue
        if record.song_id not in primary_by_id:
            log.debug(
                "Secondary song %r (index %s) has unknown id %s; matching by title",
                record.name,
                record.skill_attack_index,
                record.song_id,
            )
            by_title.append(record)
            continue
        if record.song_id in links:
            log.warning(
                "Secondary song %r (index %s) claims %s which is already linked to index %s",
                record.name,
                record.skill_attack_index,
                record.song_id,
                links[record.song_id],
            )
            dropped += 1
            continue
        links[record.song_id] = record.skill_attack_index

    candidates = [record for record in primary_by_id.values() if record.song_id not in links]
    pairs, unmatched = _merge_join(candidates, by_title, folds)
    for primary_record, secondary_record in pairs:
        links[primary_record.song_id] = secondary_record.skill_attack_index

    dropped += len(unmatched)
    if dropped:
        log.info("Dropped %d secondary-only songs during reconciliation", dropped)

    songs = tuple(
        sorted(
            (_to_song(record, links.get(record.song_id)) for record in primary_by_id.values()),
            key=song_sort_key,
        )
    )
    index = {
        song.skill_attack_index: song.song_id
        for song in songs
        if song.skill_attack_index is not None
    }
    log.debug("Reconciled %d songs, %d linked to the secondary catalog", len(songs), len(index))
    return CanonicalCatalog(
        songs=songs,
        secondary_index=MappingProxyType(index),
        unmatched_secondary=dropped,
    )


def primary_only_catalog(primary: Iterable[PrimaryRecord]) -> CanonicalCatalog:
    """Catalog used when the secondary source is unavailable."""
    songs = tuple(
        sorted(
            (_to_song(record, None) for record in _index_primary(primary).values()),
            key=song_sort_key,
        )
    )
    return CanonicalCatalog(songs=songs)


def _index_primary(primary: Iterable[PrimaryRecord]) -> dict[SongId, PrimaryRecord]:
    indexed: dict[SongId, PrimaryRecord] = {}
    for record in primary:
        if record.song_id in indexed:
            log.warning(
                "Primary catalog lists %s twice; keeping %r",
                record.song_id,
                indexed[record.song_id].name,
            )
            continue
        indexed[record.song_id] = record
    return indexed


def _merge_join(
    primary: Sequence[PrimaryRecord],
    secondary: Sequence[SecondaryRecord],
    folds: TitleFolds,
) -> tuple[list[tuple[PrimaryRecord, SecondaryRecord]], list[SecondaryRecord]]:
    """Sort both sides by match key and walk them with two cursors.

    Equal keys pair positionally in stable sort order, so duplicated titles match
    first-with-first and any surplus falls through as unmatched.
    """

    left = sorted(((title_match_key(r.name, folds), r) for r in primary), key=itemgetter(0))
    right = sorted(((title_match_key(r.name, folds), r) for r in secondary), key=itemgetter(0))
    _warn_duplicate_titles(left, source="primary")
    _warn_duplicate_titles(right, source="secondary")

    pairs: list[tuple[PrimaryRecord, SecondaryRecord]] = []
    unmatched: list[SecondaryRecord] = []
    i = j = 0
    while i < len(left) and j < len(right):
        left_key, left_record = left[i]
        right_key, right_record = right[j]
        if left_key == right_key:
            pairs.append((left_record, right_record))
            i += 1
            j += 1
        elif left_key < right_key:
            i += 1
        else:
            unmatched.append(right_record)
            j += 1
    unmatched.extend(record for _, record in right[j:])

    for record in unmatched:
        log.debug(
            "No primary song matches secondary song %r (index %s)",
            record.name,
            record.skill_attack_index,
        )
    return pairs, unmatched


def _warn_duplicate_titles(keyed: Sequence[tuple[str, object]], *, source: str) -> None:
    for key, group in groupby(keyed, key=itemgetter(0)):
        count = sum(1 for _ in group)
        if count > 1:
            log.warning(
                "%d %s songs share the normalized title %r; pairing them in listing order",
                count,
                source,
                key,
            )


def _to_song(record: PrimaryRecord, index: SkillAttackIndex | None) -> DDRSong:
    return DDRSong(
        song_id=record.song_id,
        name=record.name,
        romanized_name=record.romanized_name,
        search_names=build_search_names(
            record.name,
            romanized_name=record.romanized_name,
            alternate_name=record.alternate_name,
            searchable_name=record.searchable_name,
        ),
        skill_attack_index=index,
        version=record.version,
        deleted=record.deleted,
        ratings=record.ratings,
        lock_types=record.lock_types,
    )
