"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from logging import getLogger
from typing import TYPE_CHECKING

from tokensweep.adapters.hedera import build_hedera_gateway, is_token_info_payload, load_signing_key
from tokensweep.config import CleanupConfig, LedgerConfig, get_cleanup_config, get_ledger_config
from tokensweep.domain.cleanup import run_cleanup
from tokensweep.domain.pacing import pacer_for_interval
from tokensweep.domain.ports.ledger import LedgerGateway, SigningKey

if TYPE_CHECKING:
    from tokensweep.domain.types import RunSummary

GatewayFactory = Callable[[LedgerConfig, SigningKey], AbstractAsyncContextManager[LedgerGateway]]

log = getLogger(__name__)


def _default_gateway_factory(
    config: LedgerConfig, signing_key: SigningKey
) -> AbstractAsyncContextManager[LedgerGateway]:
    return build_hedera_gateway(config, operator_key=signing_key)  # type: ignore[arg-type]


def dissociate_deleted_tokens(
    *,
    ledger_config: LedgerConfig | None = None,
    cleanup_config: CleanupConfig | None = None,
    signing_key_loader: Callable[[str], SigningKey] = load_signing_key,
    gateway_factory: GatewayFactory = _default_gateway_factory,
) -> RunSummary:
    """Dissociate the configured account from deleted, zero-balance tokens.

    Configuration is read and the signing key parsed before any ledger call,
    so a misconfigured environment fails fast with a ``ConfigurationError``.
    """

    ledger = ledger_config or get_ledger_config(cache_predicate=is_token_info_payload)
    cleanup = cleanup_config or get_cleanup_config()
    signing_key = signing_key_loader(ledger.private_key)

    log.info("Network: %s, account: %s", ledger.network, ledger.account_id)
    return asyncio.run(_run(ledger, cleanup, signing_key, gateway_factory))


async def _run(
    ledger: LedgerConfig,
    cleanup: CleanupConfig,
    signing_key: SigningKey,
    gateway_factory: GatewayFactory,
) -> RunSummary:
    async with gateway_factory(ledger, signing_key) as gateway:
        return await run_cleanup(
            gateway,
            account_id=ledger.account_id,
            signing_key=signing_key,
            max_batch_size=cleanup.max_batch_size,
            classification_pacer=pacer_for_interval(cleanup.classification_interval_seconds),
            batch_pacer=pacer_for_interval(cleanup.batch_interval_seconds),
            verify_after_run=cleanup.verify_after_run,
        )
