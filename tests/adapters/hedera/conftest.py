"""Shared fixtures for Hedera adapter tests."""

from __future__ import annotations

import pytest

from tests.support.mirror import MIRROR_URL, MirrorPayload
from tokensweep.config.http_resilience import NO_RETRIES, ResilienceConfig


@pytest.fixture
def mirror_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="mirror-test", base_url=MIRROR_URL, retry=NO_RETRIES, cache=None)


@pytest.fixture
def token_payload() -> MirrorPayload:
    return {
        "admin_key": None,
        "decimals": "2",
        "deleted": True,
        "name": "Collateral Gold",
        "symbol": "CGLD",
        "token_id": "0.0.5005",
        "total_supply": "0",
        "type": "FUNGIBLE_COMMON",
    }


@pytest.fixture
def account_payload() -> MirrorPayload:
    return {
        "account": "0.0.1001",
        "balance": {"balance": 2_550_000_000, "timestamp": "1718900000.000000001", "tokens": []},
        "deleted": False,
        "transactions": [],
        "links": {"next": None},
    }
