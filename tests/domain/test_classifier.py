from __future__ import annotations

import asyncio

from hypothesis import given
from hypothesis import strategies as st

from tests.support.ledger import CountingPacer, FakeLedgerGateway, make_token_ids
from tokensweep.domain.classifier import classify_holding, classify_holdings, decide
from tokensweep.domain.errors import LedgerNetworkError
from tokensweep.domain.types import AssetHolding, AssetMetadata, DispositionKind

asset_ids = st.from_regex(r"0\.0\.[1-9][0-9]{0,6}", fullmatch=True)
names = st.one_of(st.none(), st.text(max_size=20))


@given(asset_id=asset_ids, balance=st.integers(min_value=0), name=names, symbol=names)
def test_active_tokens_are_always_skipped(
    asset_id: str, balance: int, name: str | None, symbol: str | None
) -> None:
    metadata = AssetMetadata(asset_id=asset_id, display_name=name, symbol=symbol, is_deleted=False)

    disposition = decide(AssetHolding(asset_id=asset_id, balance=balance), metadata)

    assert disposition.kind is DispositionKind.SKIPPED_ACTIVE


@given(asset_id=asset_ids, name=names, symbol=names)
def test_deleted_zero_balance_tokens_are_candidates(
    asset_id: str, name: str | None, symbol: str | None
) -> None:
    metadata = AssetMetadata(asset_id=asset_id, display_name=name, symbol=symbol, is_deleted=True)

    disposition = decide(AssetHolding(asset_id=asset_id, balance=0), metadata)

    assert disposition.kind is DispositionKind.CANDIDATE
    assert disposition.is_candidate


@given(asset_id=asset_ids, balance=st.integers(min_value=1))
def test_deleted_tokens_with_balance_are_skipped(asset_id: str, balance: int) -> None:
    metadata = AssetMetadata(asset_id=asset_id, is_deleted=True)

    disposition = decide(AssetHolding(asset_id=asset_id, balance=balance), metadata)

    assert disposition.kind is DispositionKind.SKIPPED_NONZERO_BALANCE
    assert not disposition.is_candidate


def test_classify_holding_records_lookup_failure() -> None:
    gateway = FakeLedgerGateway()
    gateway.add_token("0.0.42")
    gateway.metadata_errors["0.0.42"] = LedgerNetworkError("mirror node unreachable")

    disposition = asyncio.run(classify_holding(gateway.holdings[0], gateway))

    assert disposition.kind is DispositionKind.FAILED
    assert disposition.reason == "mirror node unreachable"
    assert disposition.metadata is None


def test_classify_holding_treats_unknown_token_as_failure() -> None:
    gateway = FakeLedgerGateway()
    holding = AssetHolding(asset_id="0.0.404")

    disposition = asyncio.run(classify_holding(holding, gateway))

    assert disposition.kind is DispositionKind.FAILED
    assert disposition.reason is not None
    assert "0.0.404" in disposition.reason


def test_classify_holding_keeps_metadata() -> None:
    gateway = FakeLedgerGateway()
    gateway.add_token("0.0.7", deleted=True)

    disposition = asyncio.run(classify_holding(gateway.holdings[0], gateway))

    assert disposition.metadata == gateway.metadata["0.0.7"]


def test_classify_holdings_continues_after_failure_and_paces_each_query() -> None:
    gateway = FakeLedgerGateway()
    ids = make_token_ids(4)
    gateway.add_tokens(ids)
    gateway.metadata_errors[ids[1]] = LedgerNetworkError("timeout")
    pacer = CountingPacer()

    async def collect() -> list[DispositionKind]:
        return [
            disposition.kind
            async for disposition in classify_holdings(gateway.holdings, gateway, pacer=pacer)
        ]

    kinds = asyncio.run(collect())

    assert kinds == [
        DispositionKind.CANDIDATE,
        DispositionKind.FAILED,
        DispositionKind.CANDIDATE,
        DispositionKind.CANDIDATE,
    ]
    assert gateway.metadata_queries == ids
    assert pacer.calls == 4


def test_classify_holdings_survives_errors_outside_the_ledger_hierarchy() -> None:
    gateway = FakeLedgerGateway()
    ids = make_token_ids(3)
    gateway.add_tokens(ids)
    gateway.metadata_errors[ids[1]] = TimeoutError("read timed out")
    gateway.metadata_errors[ids[2]] = RuntimeError()

    async def collect() -> list[tuple[DispositionKind, str | None]]:
        return [
            (disposition.kind, disposition.reason)
            async for disposition in classify_holdings(gateway.holdings, gateway)
        ]

    assert asyncio.run(collect()) == [
        (DispositionKind.CANDIDATE, None),
        (DispositionKind.FAILED, "read timed out"),
        (DispositionKind.FAILED, "RuntimeError"),
    ]
