"""Translate mirror node payloads into domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokensweep.domain.types import AccountSnapshot, AssetHolding, AssetMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import AccountResponse, TokenInfoResponse, TokenRelationship


def parse_asset_metadata(payload: TokenInfoResponse) -> AssetMetadata:
    return AssetMetadata(
        asset_id=payload.token_id,
        display_name=payload.name,
        symbol=payload.symbol,
        is_deleted=payload.deleted,
    )


def parse_holding(relationship: TokenRelationship) -> AssetHolding:
    return AssetHolding(asset_id=relationship.token_id, balance=relationship.balance)


def build_account_snapshot(
    account: AccountResponse,
    relationships: Iterable[TokenRelationship],
) -> AccountSnapshot:
    """Combine the account payload and every token relationship page into one snapshot."""

    return AccountSnapshot(
        account_id=account.account,
        hbar_balance=account.balance.balance,
        holdings=tuple(parse_holding(relationship) for relationship in relationships),
    )
