"""Ledger gateway backed by the mirror node (reads) and the SDK (writes)."""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Protocol

from .mirror import MirrorNodeClient
from .submitter import SdkDisassociationSubmitter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from hiero_sdk_python import PrivateKey

    from tokensweep.config.ledger import LedgerConfig
    from tokensweep.domain.ports.ledger import DisassociationReceipt, SigningKey
    from tokensweep.domain.types import AccountSnapshot, AssetMetadata


class DisassociationSubmitter(Protocol):
    async def submit(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: SigningKey,
    ) -> DisassociationReceipt: ...

    def close(self) -> None: ...


class HederaLedgerGateway:
    """Async context manager implementing :class:`~tokensweep.domain.ports.ledger.LedgerGateway`.

    Both the mirror HTTP client and the SDK client are released on exit,
    whether the run finished, failed, or was aborted.
    """

    def __init__(self, *, mirror: MirrorNodeClient, submitter: DisassociationSubmitter) -> None:
        self._mirror = mirror
        self._submitter = submitter
        self._stack = AsyncExitStack()

    async def __aenter__(self) -> HederaLedgerGateway:
        async with AsyncExitStack() as stack:
            stack.callback(self._submitter.close)
            await stack.enter_async_context(self._mirror)
            self._stack = stack.pop_all()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._stack.aclose()

    async def get_account_holdings(self, account_id: str) -> AccountSnapshot:
        return await self._mirror.fetch_account_snapshot(account_id)

    async def get_asset_metadata(self, asset_id: str) -> AssetMetadata:
        return await self._mirror.fetch_asset_metadata(asset_id)

    async def submit_disassociation(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: SigningKey,
    ) -> DisassociationReceipt:
        return await self._submitter.submit(account_id, asset_ids, signing_key)


def build_hedera_gateway(config: LedgerConfig, *, operator_key: PrivateKey) -> HederaLedgerGateway:
    return HederaLedgerGateway(
        mirror=MirrorNodeClient(resilience=config.resilience),
        submitter=SdkDisassociationSubmitter(config, operator_key=operator_key),
    )
