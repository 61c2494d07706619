"""Submit dissociation batches to the ledger one at a time."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .pacing import NoPacing
from .types import Batch, BatchOutcome, BatchStatus

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from .pacing import Pacer
    from .ports.ledger import LedgerGateway, SigningKey

log = getLogger(__name__)


async def execute_batch(
    batch: Batch,
    *,
    account_id: str,
    signing_key: SigningKey,
    gateway: LedgerGateway,
) -> BatchOutcome:
    """Sign, submit and confirm one batch. Never raises; failures become FAILED outcomes."""

    log.info(
        "Batch %s: dissociating %s tokens: %s",
        batch.index,
        len(batch),
        ", ".join(batch.asset_ids),
    )
    try:
        receipt = await gateway.submit_disassociation(account_id, batch.asset_ids, signing_key)
    except Exception as exc:  # noqa: BLE001
        reason = str(exc) or type(exc).__name__
        log.error("Batch %s failed: %s", batch.index, reason)
        return BatchOutcome(batch=batch, status=BatchStatus.FAILED, reason=reason)

    if not receipt.succeeded:
        log.error("Batch %s rejected by the ledger: %s", batch.index, receipt.status)
        return BatchOutcome(
            batch=batch,
            status=BatchStatus.FAILED,
            reason=receipt.status,
            transaction_ref=receipt.transaction_ref,
        )

    log.info("Batch %s dissociated (transaction %s)", batch.index, receipt.transaction_ref)
    return BatchOutcome(
        batch=batch,
        status=BatchStatus.SUCCEEDED,
        transaction_ref=receipt.transaction_ref,
    )


async def execute_batches(
    batches: Iterable[Batch],
    *,
    account_id: str,
    signing_key: SigningKey,
    gateway: LedgerGateway,
    pacer: Pacer | None = None,
) -> AsyncIterator[BatchOutcome]:
    """Yield outcomes strictly in batch order; a batch starts only after the previous one settled."""

    active_pacer = pacer or NoPacing()
    for batch in batches:
        await active_pacer.wait()
        yield await execute_batch(
            batch,
            account_id=account_id,
            signing_key=signing_key,
            gateway=gateway,
        )
