"""Concurrent update pipeline: fetch, reconcile, merge."""

from __future__ import annotations

from .orchestrator import UpdateOrchestrator, refresh_update, run_update
from .state import PipelineState, PlayerFailure, UpdateCounters, UpdateResult

__all__ = [
    "PipelineState",
    "PlayerFailure",
    "UpdateCounters",
    "UpdateOrchestrator",
    "UpdateResult",
    "refresh_update",
    "run_update",
]
