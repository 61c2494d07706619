"""Sign and submit TokenDissociate transactions through the Hedera SDK."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from hiero_sdk_python import (
    AccountId,
    Client,
    Network,
    PrivateKey,
    ResponseCode,
    TokenDissociateTransaction,
    TokenId,
)

from tokensweep.config.errors import ConfigurationError
from tokensweep.config.ledger import TINYBARS_PER_HBAR
from tokensweep.domain.errors import LedgerNetworkError, SigningError
from tokensweep.domain.ports.ledger import DisassociationReceipt

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokensweep.config.ledger import LedgerConfig

log = getLogger(__name__)


def load_signing_key(private_key: str) -> PrivateKey:
    """Parse an ECDSA private key, raising :class:`ConfigurationError` when it is malformed."""

    try:
        return PrivateKey.from_string_ecdsa(private_key)
    except Exception as exc:
        raise ConfigurationError("HEDERA_PRIVATE_KEY is not a valid ECDSA private key") from exc


class SdkDisassociationSubmitter:
    """Owns one SDK client for the operator account; close it when the run ends."""

    def __init__(self, config: LedgerConfig, *, operator_key: PrivateKey) -> None:
        self._max_fee_tinybars = config.max_transaction_fee_hbar * TINYBARS_PER_HBAR
        self._client = Client(Network(network=config.network.value))
        self._client.set_operator(AccountId.from_string(config.account_id), operator_key)

    def close(self) -> None:
        self._client.close()

    async def submit(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: PrivateKey,
    ) -> DisassociationReceipt:
        # The SDK blocks on gRPC; keep the event loop free while it waits for the receipt.
        return await asyncio.to_thread(self._submit_blocking, account_id, asset_ids, signing_key)

    def _submit_blocking(
        self,
        account_id: str,
        asset_ids: Sequence[str],
        signing_key: PrivateKey,
    ) -> DisassociationReceipt:
        try:
            transaction = TokenDissociateTransaction()
            transaction.set_account_id(AccountId.from_string(account_id))
            for asset_id in asset_ids:
                transaction.add_token_id(TokenId.from_string(asset_id))
            transaction.transaction_fee = self._max_fee_tinybars
            transaction.freeze_with(self._client)
            transaction.sign(signing_key)
        except Exception as exc:
            raise SigningError(f"Could not prepare dissociate transaction: {exc}") from exc

        try:
            receipt = transaction.execute(self._client)
        except Exception as exc:
            raise LedgerNetworkError(f"Dissociate transaction failed: {exc}") from exc

        transaction_ref = str(transaction.transaction_id) if transaction.transaction_id else None
        status = ResponseCode(receipt.status).name
        log.debug("Transaction %s finished with status %s", transaction_ref, status)
        return DisassociationReceipt(status=status, transaction_ref=transaction_ref)
