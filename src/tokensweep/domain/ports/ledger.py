"""Port for the distributed ledger used by the cleanup workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokensweep.domain.types import AccountSnapshot, AssetMetadata

SUCCESS_STATUS = "SUCCESS"

# Opaque to the domain; only the gateway that produced it knows how to sign with it.
type SigningKey = object


@dataclass(frozen=True, slots=True)
class DisassociationReceipt:
    """Finality receipt of a submitted disassociation transaction."""

    status: str
    transaction_ref: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS


@runtime_checkable
class LedgerGateway(Protocol):
    """Capabilities the cleanup workflow needs from the ledger.

    Implementations raise subclasses of
    :class:`~tokensweep.domain.errors.LedgerError` for network, auth,
    lookup and signing failures. A transaction the ledger rejects is not an
    error: it comes back as a receipt with a non-success status.
    """

    async def get_account_holdings(self, account_id: str) -> AccountSnapshot: ...

    async def get_asset_metadata(self, asset_id: str) -> AssetMetadata: ...

    async def submit_disassociation(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: SigningKey,
    ) -> DisassociationReceipt: ...


__all__ = ["SUCCESS_STATUS", "DisassociationReceipt", "LedgerGateway", "SigningKey"]
