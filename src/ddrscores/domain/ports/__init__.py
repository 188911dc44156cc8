"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    FetchError,
    PrimaryCatalogFetcher,
    PrimaryRecord,
    PrimaryScoreFetcher,
    PrimaryScores,
    ScoreSources,
    SecondaryCatalogFetcher,
    SecondaryRecord,
    SecondaryScoreFetcher,
    SecondaryScores,
)

__all__ = [
    "FetchError",
    "PrimaryCatalogFetcher",
    "PrimaryRecord",
    "PrimaryScoreFetcher",
    "PrimaryScores",
    "ScoreSources",
    "SecondaryCatalogFetcher",
    "SecondaryRecord",
    "SecondaryScoreFetcher",
    "SecondaryScores",
]
