"""Coordinator for a single account cleanup run."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .batching import MAX_DISSOCIATE_BATCH_SIZE, plan_batches
from .classifier import classify_holdings
from .errors import FatalRunError
from .executor import execute_batches
from .pacing import NoPacing, Pacer
from .types import Batch, Disposition, RunSummary

if TYPE_CHECKING:
    from .ports.ledger import LedgerGateway, SigningKey
    from .types import AccountSnapshot

log = getLogger(__name__)


class RunStage(StrEnum):
    FETCHING_HOLDINGS = "fetching_holdings"
    CLASSIFYING = "classifying"
    PLANNING_BATCHES = "planning_batches"
    EXECUTING_BATCHES = "executing_batches"
    SUMMARIZING = "summarizing"
    DONE = "done"


@dataclass(slots=True)
class CleanupRun:
    """Dissociate every deleted, zero-balance token held by ``account_id``.

    The run walks the stages of :class:`RunStage` in order, exactly once.
    Only a failure to fetch the account's holdings aborts it (as
    :class:`FatalRunError`); failed metadata lookups and failed batches are
    folded into the returned :class:`RunSummary` and the run carries on.

    ``classification_pacer`` is awaited before every metadata query and
    ``batch_pacer`` before every batch, which keeps the run under the
    ledger's rate limits without hard-coded sleeps.
    """

    gateway: LedgerGateway
    account_id: str
    signing_key: SigningKey
    max_batch_size: int = MAX_DISSOCIATE_BATCH_SIZE
    classification_pacer: Pacer = field(default_factory=NoPacing)
    batch_pacer: Pacer = field(default_factory=NoPacing)
    verify_after_run: bool = False
    stage: RunStage = field(default=RunStage.FETCHING_HOLDINGS, init=False)
    dispositions: list[Disposition] = field(default_factory=list, init=False)
    batches: list[Batch] = field(default_factory=list, init=False)

    async def run(self) -> RunSummary:
        self.dispositions = []
        self.batches = []
        self._enter(RunStage.FETCHING_HOLDINGS)
        snapshot = await self._fetch_holdings()
        summary = RunSummary(
            account_id=self.account_id,
            hbar_balance=snapshot.hbar_balance,
            total_holdings=len(snapshot.holdings),
        )
        log.info(
            "Account %s holds %s tinybar and %s token associations",
            self.account_id,
            snapshot.hbar_balance,
            len(snapshot.holdings),
        )

        self._enter(RunStage.CLASSIFYING)
        async for disposition in classify_holdings(
            snapshot.holdings, self.gateway, pacer=self.classification_pacer
        ):
            self.dispositions.append(disposition)
            summary = summary.with_disposition(disposition)

        self._enter(RunStage.PLANNING_BATCHES)
        candidates = [d.asset_id for d in self.dispositions if d.is_candidate]
        self.batches = plan_batches(candidates, max_batch_size=self.max_batch_size)
        log.info("%s tokens to dissociate in %s batches", len(candidates), len(self.batches))

        self._enter(RunStage.EXECUTING_BATCHES)
        async for outcome in execute_batches(
            self.batches,
            account_id=self.account_id,
            signing_key=self.signing_key,
            gateway=self.gateway,
            pacer=self.batch_pacer,
        ):
            summary = summary.with_outcome(outcome)

        self._enter(RunStage.SUMMARIZING)
        if self.verify_after_run and summary.dissociated_count:
            summary = replace(summary, remaining_associations=await self._count_remaining())

        self._enter(RunStage.DONE)
        return summary

    def _enter(self, stage: RunStage) -> None:
        log.debug("Cleanup run %s: %s -> %s", self.account_id, self.stage, stage)
        self.stage = stage

    async def _fetch_holdings(self) -> AccountSnapshot:
        try:
            return await self.gateway.get_account_holdings(self.account_id)
        except Exception as exc:
            msg = f"Could not fetch holdings for {self.account_id}: {exc}"
            raise FatalRunError(msg) from exc

    async def _count_remaining(self) -> int | None:
        try:
            snapshot = await self.gateway.get_account_holdings(self.account_id)
        except Exception as exc:  # noqa: BLE001
            log.warning("Could not verify remaining associations: %s", exc)
            return None
        return len(snapshot.holdings)


async def run_cleanup(
    gateway: LedgerGateway,
    *,
    account_id: str,
    signing_key: SigningKey,
    max_batch_size: int = MAX_DISSOCIATE_BATCH_SIZE,
    classification_pacer: Pacer | None = None,
    batch_pacer: Pacer | None = None,
    verify_after_run: bool = False,
) -> RunSummary:
    """Run one cleanup pass for ``account_id`` and return its summary."""

    cleanup = CleanupRun(
        gateway=gateway,
        account_id=account_id,
        signing_key=signing_key,
        max_batch_size=max_batch_size,
        classification_pacer=classification_pacer or NoPacing(),
        batch_pacer=batch_pacer or NoPacing(),
        verify_after_run=verify_after_run,
    )
    return await cleanup.run()
