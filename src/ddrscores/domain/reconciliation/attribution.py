"""Re-key legacy-site scores onto canonical song ids."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ddrscores.domain.model import ScoreTable

if TYPE_CHECKING:
    from ddrscores.domain.model import Player, SongId
    from ddrscores.domain.ports import SecondaryScores

    from .catalog import CanonicalCatalog

log = logging.getLogger(__name__)


def attribute(
    secondary_scores: SecondaryScores,
    catalog: CanonicalCatalog,
) -> dict[SongId, ScoreTable]:
    """Translate index-keyed tables; indices the catalog does not know are dropped."""

    attributed: dict[SongId, ScoreTable] = {}
    unknown = 0
    for index, table in secondary_scores.items():
        song_id = catalog.song_id_for(index)
        if song_id is None:
            unknown += 1
            continue
        existing = attributed.get(song_id)
        if existing is None:
            attributed[song_id] = table.copy()
        else:
            existing.merge(table)
    if unknown:
        log.debug("Skipped scores for %d songs missing from the catalog", unknown)
    return attributed


def apply_secondary_scores(
    player: Player,
    secondary_scores: SecondaryScores,
    catalog: CanonicalCatalog,
) -> int:
    """Attribute and merge into ``player``; return the number of changed slots."""
    return player.merge_scores(attribute(secondary_scores, catalog))
