"""Split dissociation candidates into transaction-sized batches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import Batch

if TYPE_CHECKING:
    from collections.abc import Sequence

# Hedera rejects a TokenDissociateTransaction listing more than ten tokens.
MAX_DISSOCIATE_BATCH_SIZE = 10


def plan_batches(
    asset_ids: Sequence[str],
    *,
    max_batch_size: int = MAX_DISSOCIATE_BATCH_SIZE,
) -> list[Batch]:
    """Return consecutive batches of at most ``max_batch_size`` ids, in input order."""

    if not 1 <= max_batch_size <= MAX_DISSOCIATE_BATCH_SIZE:
        msg = f"max_batch_size must be between 1 and {MAX_DISSOCIATE_BATCH_SIZE}"
        raise ValueError(msg)

    return [
        Batch(index=number, asset_ids=tuple(asset_ids[start : start + max_batch_size]))
        for number, start in enumerate(range(0, len(asset_ids), max_batch_size), start=1)
    ]


def flatten_batches(batches: Sequence[Batch]) -> list[str]:
    return [asset_id for batch in batches for asset_id in batch.asset_ids]
