"""Parsers for the two Skill Attack documents we read.

``master_music.txt`` is a tab-separated song list::

    index  song_id  gsp bsp dsp esp csp bdp ddp edp cdp  name  artist

with ``-1`` for a missing chart and HTML entities in the name and artist.

The score page embeds one JavaScript array per column of the score matrix,
one per line::

    ddIndex = new Array(246,63,74);
    dsScoreGsp = new Array('998,310','-','');
    ddFcGsp = new Array(3,0,0);
"""

from __future__ import annotations

import csv
import html
import logging
import re

from ddrscores.domain.model import Chart, LampType, Ratings, ScoreSlot, ScoreTable, SongId
from ddrscores.domain.ports import SecondaryRecord

log = logging.getLogger(__name__)

SCORE_PAGE_MARKER = "sName"
INDEX_ARRAY = "ddIndex"
SCORE_ARRAYS = tuple(f"dsScore{chart.name.capitalize()}" for chart in Chart)
LAMP_ARRAYS = tuple(f"ddFc{chart.name.capitalize()}" for chart in Chart)

_MASTER_COLUMNS = 2 + len(Chart) + 2
_ARRAY_BODY = re.compile(r"Array\((.*)\);\s*$")
_QUOTED_TEXT = re.compile(r"'(?P<text>(?:[^'\\]|\\.)*)'")
_MISSING_SCORES = frozenset({"", "-"})


class SkillAttackParseError(ValueError):
    """Raised when a Skill Attack document does not have the expected shape."""


def parse_master_music(text: str) -> list[SecondaryRecord]:
    records: list[SecondaryRecord] = []
    reader = csv.reader(text.splitlines(), delimiter="\t", quoting=csv.QUOTE_NONE)
    for line_number, row in enumerate(reader, start=1):
        if not row or not "".join(row).strip():
            continue
        if len(row) < _MASTER_COLUMNS:
            raise SkillAttackParseError(
                f"master_music.txt line {line_number}: expected {_MASTER_COLUMNS} columns, "
                f"got {len(row)}"
            )
        try:
            index = int(row[0])
            song_id = SongId.parse(row[1])
            ratings = Ratings.from_values(int(value) for value in row[2 : 2 + len(Chart)])
        except ValueError as exc:
            raise SkillAttackParseError(f"master_music.txt line {line_number}: {exc}") from exc
        records.append(
            SecondaryRecord(
                skill_attack_index=index,
                name=html.unescape(row[2 + len(Chart)]),
                song_id=song_id,
                ratings=ratings,
            )
        )
    return records


def parse_score_page(page: str) -> dict[int, ScoreTable]:
    """Extract one score table per song index from a player's score matrix page."""

    start = page.find(SCORE_PAGE_MARKER)
    if start < 0:
        raise SkillAttackParseError(f"Score page has no {SCORE_PAGE_MARKER!r} marker")
    page = page[start:]

    try:
        indices = _parse_int_array(_array_body(page, INDEX_ARRAY))
        scores = [
            [_parse_score(match.group("text")) for match in _QUOTED_TEXT.finditer(body)]
            for body in (_array_body(page, name) for name in SCORE_ARRAYS)
        ]
        lamp_codes = [_parse_int_array(_array_body(page, name)) for name in LAMP_ARRAYS]
    except ValueError as exc:
        raise SkillAttackParseError(str(exc)) from exc

    expected = len(indices)
    for name, column in zip(SCORE_ARRAYS + LAMP_ARRAYS, scores + lamp_codes, strict=True):
        if len(column) != expected:
            raise SkillAttackParseError(
                f"Array {name} has {len(column)} entries but {INDEX_ARRAY} has {expected}"
            )

    lamps = [[LampType.from_skill_attack(code) for code in column] for column in lamp_codes]
    tables: dict[int, ScoreTable] = {}
    for position, index in enumerate(indices):
        slots: list[ScoreSlot | None] = []
        for chart in Chart:
            score = scores[chart.index][position]
            slots.append(
                None if score is None else ScoreSlot(score=score, lamp=lamps[chart.index][position])
            )
        tables[index] = ScoreTable(slots)
    log.debug("Parsed Skill Attack scores for %d songs", len(tables))
    return tables


def _array_body(page: str, name: str) -> str:
    position = page.find(name)
    if position < 0:
        raise SkillAttackParseError(f"Score page has no {name} array")
    line = page[position:].splitlines()[0]
    match = _ARRAY_BODY.search(line)
    if match is None:
        raise SkillAttackParseError(f"Could not read the {name} array")
    return match.group(1)


def _parse_int_array(body: str) -> list[int]:
    if not body.strip():
        return []
    return [int(value) for value in body.split(",")]


def _parse_score(text: str) -> int | None:
    """Scores are shown with thousands separators; ``-`` or nothing means unplayed."""

    if text in _MISSING_SCORES:
        return None
    digits = "".join(char for char in text if char.isdigit())
    if not digits:
        raise SkillAttackParseError(f"Unreadable score {text!r}")
    return int(digits)
