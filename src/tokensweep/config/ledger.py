"""Hedera account and network configuration values."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import (
    NO_RETRIES,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ShouldCacheHook,
)

ACCOUNT_ID_ENV = "HEDERA_ACCOUNT_ID"
PRIVATE_KEY_ENV = "HEDERA_PRIVATE_KEY"  # noqa: S105
NETWORK_ENV = "HEDERA_NETWORK"

MIRROR_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_TRANSACTION_FEE_HBAR = 20
TINYBARS_PER_HBAR = 100_000_000

_ENTITY_ID_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class LedgerNetwork(StrEnum):
    MAINNET = "mainnet"
    TESTNET = "testnet"


MIRROR_NODE_URLS: dict[LedgerNetwork, str] = {
    LedgerNetwork.MAINNET: "https://mainnet-public.mirrornode.hedera.com",
    LedgerNetwork.TESTNET: "https://testnet.mirrornode.hedera.com",
}


@dataclass(frozen=True)
class LedgerConfig:
    """Holds the operator account, its signing key and the target network."""

    account_id: str
    private_key: str = field(repr=False)
    network: LedgerNetwork
    resilience: ResilienceConfig
    max_transaction_fee_hbar: int = DEFAULT_MAX_TRANSACTION_FEE_HBAR


def is_entity_id(value: str) -> bool:
    return bool(_ENTITY_ID_PATTERN.match(value))


def parse_network(value: str) -> LedgerNetwork:
    try:
        return LedgerNetwork(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in LedgerNetwork)
        msg = f"Unsupported {NETWORK_ENV} {value!r} (expected one of: {allowed})"
        raise ConfigurationError(msg) from None


def mirror_resilience_config(
    network: LedgerNetwork,
    *,
    cache_predicate: ShouldCacheHook | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name=f"mirror-{network}",
        base_url=MIRROR_NODE_URLS[network],
        timeout_seconds=MIRROR_TIMEOUT_SECONDS,
        retry=NO_RETRIES,
        ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
        cache=CacheConfig(should_cache=cache_predicate),
        default_headers={"Accept": "application/json"},
    )


def get_ledger_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> LedgerConfig:
    values = require_env_vars((ACCOUNT_ID_ENV, PRIVATE_KEY_ENV))
    network = parse_network(optional_env_var(NETWORK_ENV, LedgerNetwork.TESTNET.value))

    account_id = values[ACCOUNT_ID_ENV]
    if not is_entity_id(account_id):
        msg = f"Invalid {ACCOUNT_ID_ENV} {account_id!r} (expected shard.realm.num)"
        raise ConfigurationError(msg)

    return LedgerConfig(
        account_id=account_id,
        private_key=values[PRIVATE_KEY_ENV],
        network=network,
        resilience=resilience
        or mirror_resilience_config(network, cache_predicate=cache_predicate),
    )
