"""Decide what to do with each token an account is associated with."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .pacing import NoPacing
from .types import AssetHolding, AssetMetadata, Disposition, DispositionKind

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from .pacing import Pacer
    from .ports.ledger import LedgerGateway

log = getLogger(__name__)


def decide(holding: AssetHolding, metadata: AssetMetadata) -> Disposition:
    """Pure decision rule: only deleted tokens with a zero balance may be dissociated."""

    if not metadata.is_deleted:
        kind = DispositionKind.SKIPPED_ACTIVE
    elif holding.balance == 0:
        kind = DispositionKind.CANDIDATE
    else:
        # The ledger rejects dissociation while a balance remains.
        kind = DispositionKind.SKIPPED_NONZERO_BALANCE
    return Disposition(holding=holding, kind=kind, metadata=metadata)


async def classify_holding(holding: AssetHolding, gateway: LedgerGateway) -> Disposition:
    """Fetch metadata for ``holding`` and classify it; lookup failures become FAILED."""

    try:
        metadata = await gateway.get_asset_metadata(holding.asset_id)
    except Exception as exc:  # noqa: BLE001
        log.warning("Could not inspect token %s: %s", holding.asset_id, exc)
        return Disposition.failed(holding, str(exc) or type(exc).__name__)

    disposition = decide(holding, metadata)
    log.info(
        "Token %s (%s / %s) deleted=%s balance=%s -> %s",
        holding.asset_id,
        metadata.display_name or "N/A",
        metadata.symbol or "N/A",
        metadata.is_deleted,
        holding.balance,
        disposition.kind,
    )
    return disposition


async def classify_holdings(
    holdings: Iterable[AssetHolding],
    gateway: LedgerGateway,
    *,
    pacer: Pacer | None = None,
) -> AsyncIterator[Disposition]:
    """Yield one disposition per holding, in order, one metadata query at a time."""

    active_pacer = pacer or NoPacing()
    for holding in holdings:
        await active_pacer.wait()
        yield await classify_holding(holding, gateway)
