"""Public interface for the Sanbai adapter."""

from __future__ import annotations

from .client import SanbaiAPIError, SanbaiClient
from .fetcher import SanbaiCatalogFetcher, SanbaiScoreFetcher
from .parser import SanbaiBpmParseError, parse_song_bpm
from .schema import SanbaiScoreEntry, SanbaiScoresResponse, SanbaiSong
from .translator import translate_scores, translate_song

__all__ = [
    "SanbaiAPIError",
    "SanbaiBpmParseError",
    "SanbaiCatalogFetcher",
    "SanbaiClient",
    "SanbaiScoreEntry",
    "SanbaiScoreFetcher",
    "SanbaiScoresResponse",
    "SanbaiSong",
    "parse_song_bpm",
    "translate_scores",
    "translate_song",
]
