"""Reusable fakes and helpers for cleanup-run tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokensweep.domain.errors import AssetNotFoundError
from tokensweep.domain.ports.ledger import SUCCESS_STATUS, DisassociationReceipt
from tokensweep.domain.types import AccountSnapshot, AssetHolding, AssetMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

ACCOUNT_ID = "0.0.1001"
SIGNING_KEY = object()


def make_token_ids(count: int, *, start: int = 5000) -> list[str]:
    return [f"0.0.{start + offset}" for offset in range(count)]


@dataclass(slots=True)
class FakeLedgerGateway:
    """In-memory ledger: token metadata by id plus scripted submission results.

    ``submission_results`` is consumed one entry per submitted batch; an
    exception entry is raised, a string entry becomes the receipt status.
    Without a script every batch succeeds and the tokens are removed from the
    account.
    """

    holdings: list[AssetHolding] = field(default_factory=list)
    metadata: dict[str, AssetMetadata] = field(default_factory=dict)
    metadata_errors: dict[str, Exception] = field(default_factory=dict)
    holdings_error: Exception | None = None
    verification_error: Exception | None = None
    submission_results: list[str | Exception] = field(default_factory=list)
    hbar_balance: int = 1_500_000_000
    submitted: list[tuple[str, tuple[str, ...], object]] = field(default_factory=list)
    metadata_queries: list[str] = field(default_factory=list)
    holdings_queries: int = 0

    def add_token(self, asset_id: str, *, balance: int = 0, deleted: bool = True) -> None:
        self.holdings.append(AssetHolding(asset_id=asset_id, balance=balance))
        self.metadata[asset_id] = AssetMetadata(
            asset_id=asset_id,
            display_name=f"Token {asset_id}",
            symbol="TKN",
            is_deleted=deleted,
        )

    def add_tokens(
        self, asset_ids: Iterable[str], *, balance: int = 0, deleted: bool = True
    ) -> None:
        for asset_id in asset_ids:
            self.add_token(asset_id, balance=balance, deleted=deleted)

    async def get_account_holdings(self, account_id: str) -> AccountSnapshot:
        self.holdings_queries += 1
        if self.holdings_error is not None:
            raise self.holdings_error
        if self.holdings_queries > 1 and self.verification_error is not None:
            raise self.verification_error
        return AccountSnapshot(
            account_id=account_id,
            hbar_balance=self.hbar_balance,
            holdings=tuple(self.holdings),
        )

    async def get_asset_metadata(self, asset_id: str) -> AssetMetadata:
        self.metadata_queries.append(asset_id)
        if asset_id in self.metadata_errors:
            raise self.metadata_errors[asset_id]
        try:
            return self.metadata[asset_id]
        except KeyError:
            raise AssetNotFoundError(f"Token {asset_id} not found") from None

    async def submit_disassociation(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: object,
    ) -> DisassociationReceipt:
        self.submitted.append((account_id, tuple(asset_ids), signing_key))
        result: str | Exception = (
            self.submission_results.pop(0) if self.submission_results else SUCCESS_STATUS
        )
        if isinstance(result, Exception):
            raise result
        if result == SUCCESS_STATUS:
            removed = set(asset_ids)
            self.holdings = [h for h in self.holdings if h.asset_id not in removed]
        return DisassociationReceipt(
            status=result,
            transaction_ref=f"{account_id}@{len(self.submitted)}.000000000",
        )


@dataclass(slots=True)
class CountingPacer:
    calls: int = 0

    async def wait(self) -> None:
        self.calls += 1
