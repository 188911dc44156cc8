"""Catalog reconciliation and score attribution across the two score sites."""

from __future__ import annotations

from .attribution import apply_secondary_scores, attribute
from .catalog import CanonicalCatalog, primary_only_catalog, reconcile
from .normalize import DEFAULT_FOLDS, TitleFolds, normalize_title, title_match_key

__all__ = [
    "DEFAULT_FOLDS",
    "CanonicalCatalog",
    "TitleFolds",
    "apply_secondary_scores",
    "attribute",
    "normalize_title",
    "primary_only_catalog",
    "reconcile",
    "title_match_key",
]
