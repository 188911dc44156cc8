"""Read the BPM off a Sanbai ``song_details`` page.

The page shows single-play tempo in ``sp-bpm`` spans::

    <span class="sp-bpm">150</span>                              constant
    <span class="sp-bpm">75-528</span> ... <span class="sp-bpm">150</span>   range, then main

Songs without a known tempo carry an ``sp-missing-bpm`` marker instead.
"""

from __future__ import annotations

import re

from ddrscores.domain.model import Bpm

_SP_BPM = re.compile(r'"sp-bpm">(?P<first>\d+)(?:-(?P<second>\d+))?</span>')
_MISSING_MARKER = '"sp-missing-bpm"'


class SanbaiBpmParseError(ValueError):
    """The song page no longer looks the way the parser expects."""


def parse_song_bpm(html: str) -> Bpm | None:
    """Return the page's BPM, or ``None`` when Sanbai marks it as unknown."""

    matches = _SP_BPM.finditer(html)
    first = next(matches, None)
    if first is None:
        if _MISSING_MARKER in html:
            return None
        raise SanbaiBpmParseError("No sp-bpm or sp-missing-bpm span found")

    if first["second"] is None:
        return Bpm.constant(int(first["first"]))

    main = next(matches, None)
    if main is None:
        raise SanbaiBpmParseError("BPM range is not followed by a main BPM")
    try:
        return Bpm(lower=int(first["first"]), upper=int(first["second"]), main=int(main["first"]))
    except ValueError as exc:
        raise SanbaiBpmParseError(str(exc)) from exc
