"""Value types shared by the cleanup workflow."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum


class DispositionKind(StrEnum):
    CANDIDATE = "candidate"
    SKIPPED_ACTIVE = "skipped_active"
    SKIPPED_NONZERO_BALANCE = "skipped_nonzero_balance"
    FAILED = "failed"


class BatchStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureStage(StrEnum):
    CLASSIFICATION = "classification"
    BATCH_EXECUTION = "batch_execution"


@dataclass(frozen=True, slots=True)
class AssetHolding:
    asset_id: str
    balance: int = 0

    def __post_init__(self) -> None:
        if self.balance < 0:
            raise ValueError(f"Negative balance for {self.asset_id}: {self.balance}")


@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Balances of one account as returned by a single ledger query."""

    account_id: str
    hbar_balance: int
    holdings: tuple[AssetHolding, ...] = ()


@dataclass(frozen=True, slots=True)
class AssetMetadata:
    asset_id: str
    display_name: str | None = None
    symbol: str | None = None
    is_deleted: bool = False


@dataclass(frozen=True, slots=True)
class Disposition:
    """Classification result for exactly one holding."""

    holding: AssetHolding
    kind: DispositionKind
    reason: str | None = None
    metadata: AssetMetadata | None = None

    @property
    def asset_id(self) -> str:
        return self.holding.asset_id

    @property
    def is_candidate(self) -> bool:
        return self.kind is DispositionKind.CANDIDATE

    @classmethod
    def failed(cls, holding: AssetHolding, reason: str) -> Disposition:
        return cls(holding=holding, kind=DispositionKind.FAILED, reason=reason)


@dataclass(frozen=True, slots=True)
class Batch:
    index: int
    asset_ids: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.asset_ids)


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    batch: Batch
    status: BatchStatus
    reason: str | None = None
    transaction_ref: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is BatchStatus.SUCCEEDED


@dataclass(frozen=True, slots=True)
class FailureRecord:
    asset_id: str
    reason: str
    stage: FailureStage


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Immutable tally of a cleanup run.

    Each stage folds its results in through :meth:`with_disposition` and
    :meth:`with_outcome`, which return a new summary. Every holding lands in
    exactly one of the dissociated, skipped or failed counters.
    """

    account_id: str = ""
    hbar_balance: int | None = None
    total_holdings: int = 0
    dissociated_count: int = 0
    skipped_active: int = 0
    skipped_nonzero_balance: int = 0
    failed_count: int = 0
    batches_executed: int = 0
    failures: tuple[FailureRecord, ...] = field(default_factory=tuple)
    remaining_associations: int | None = None

    @property
    def skipped_count(self) -> int:
        return self.skipped_active + self.skipped_nonzero_balance

    @property
    def processed_count(self) -> int:
        return self.dissociated_count + self.skipped_count + self.failed_count

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0

    def with_disposition(self, disposition: Disposition) -> RunSummary:
        match disposition.kind:
            case DispositionKind.SKIPPED_ACTIVE:
                return replace(self, skipped_active=self.skipped_active + 1)
            case DispositionKind.SKIPPED_NONZERO_BALANCE:
                return replace(self, skipped_nonzero_balance=self.skipped_nonzero_balance + 1)
            case DispositionKind.FAILED:
                record = FailureRecord(
                    asset_id=disposition.asset_id,
                    reason=disposition.reason or "unknown error",
                    stage=FailureStage.CLASSIFICATION,
                )
                return replace(
                    self,
                    failed_count=self.failed_count + 1,
                    failures=(*self.failures, record),
                )
            case DispositionKind.CANDIDATE:
                # Resolved later by the batch outcome.
                return self

    def with_outcome(self, outcome: BatchOutcome) -> RunSummary:
        executed = self.batches_executed + 1
        if outcome.succeeded:
            return replace(
                self,
                batches_executed=executed,
                dissociated_count=self.dissociated_count + len(outcome.batch),
            )
        reason = outcome.reason or "unknown error"
        records = tuple(
            FailureRecord(asset_id=asset_id, reason=reason, stage=FailureStage.BATCH_EXECUTION)
            for asset_id in outcome.batch.asset_ids
        )
        return replace(
            self,
            batches_executed=executed,
            failed_count=self.failed_count + len(outcome.batch),
            failures=(*self.failures, *records),
        )
