"""Defaults for the account cleanup workflow."""

from __future__ import annotations

from dataclasses import dataclass

from tokensweep.domain.batching import MAX_DISSOCIATE_BATCH_SIZE

DEFAULT_CLASSIFICATION_INTERVAL_SECONDS = 0.5
DEFAULT_BATCH_INTERVAL_SECONDS = 2.0


@dataclass(frozen=True, slots=True)
class CleanupConfig:
    max_batch_size: int = MAX_DISSOCIATE_BATCH_SIZE
    classification_interval_seconds: float = DEFAULT_CLASSIFICATION_INTERVAL_SECONDS
    batch_interval_seconds: float = DEFAULT_BATCH_INTERVAL_SECONDS
    verify_after_run: bool = True


def get_cleanup_config() -> CleanupConfig:
    return CleanupConfig()
