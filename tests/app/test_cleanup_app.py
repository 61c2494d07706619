from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest

from tests.support.ledger import ACCOUNT_ID, FakeLedgerGateway, make_token_ids
from tokensweep.app import dissociate_deleted_tokens
from tokensweep.config import (
    CleanupConfig,
    LedgerConfig,
    LedgerNetwork,
    MissingConfigurationError,
    mirror_resilience_config,
)
from tokensweep.domain.errors import FatalRunError, LedgerNetworkError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

NO_DELAYS = CleanupConfig(classification_interval_seconds=0, batch_interval_seconds=0)


def _ledger_config() -> LedgerConfig:
    return LedgerConfig(
        account_id=ACCOUNT_ID,
        private_key="raw-key",
        network=LedgerNetwork.TESTNET,
        resilience=mirror_resilience_config(LedgerNetwork.TESTNET),
    )


def _factory_for(gateway: FakeLedgerGateway, opened: list[object]):  # noqa: ANN202
    @asynccontextmanager
    async def factory(
        config: LedgerConfig, signing_key: object
    ) -> AsyncIterator[FakeLedgerGateway]:
        del config
        opened.append(signing_key)
        yield gateway

    return factory


def test_run_uses_loaded_key_and_returns_summary() -> None:
    gateway = FakeLedgerGateway()
    gateway.add_tokens(make_token_ids(11))
    gateway.add_token("0.0.77", deleted=False)
    opened: list[object] = []

    summary = dissociate_deleted_tokens(
        ledger_config=_ledger_config(),
        cleanup_config=NO_DELAYS,
        signing_key_loader=lambda raw: f"parsed:{raw}",
        gateway_factory=_factory_for(gateway, opened),
    )

    assert opened == ["parsed:raw-key"]
    assert {key for _, _, key in gateway.submitted} == {"parsed:raw-key"}
    assert summary.dissociated_count == 11
    assert summary.skipped_count == 1
    assert summary.remaining_associations == 1


def test_missing_configuration_fails_before_any_ledger_call(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("HEDERA_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("HEDERA_PRIVATE_KEY", raising=False)
    opened: list[object] = []

    with pytest.raises(MissingConfigurationError):
        dissociate_deleted_tokens(
            cleanup_config=NO_DELAYS,
            signing_key_loader=lambda raw: raw,
            gateway_factory=_factory_for(FakeLedgerGateway(), opened),
        )

    assert opened == []


def test_holdings_failure_surfaces_as_fatal_error() -> None:
    gateway = FakeLedgerGateway(holdings_error=LedgerNetworkError("mirror down"))

    with pytest.raises(FatalRunError, match="mirror down"):
        dissociate_deleted_tokens(
            ledger_config=_ledger_config(),
            cleanup_config=NO_DELAYS,
            signing_key_loader=lambda raw: raw,
            gateway_factory=_factory_for(gateway, []),
        )
