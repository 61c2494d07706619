"""Application configuration helpers."""

from __future__ import annotations

from .cleanup import MAX_DISSOCIATE_BATCH_SIZE, CleanupConfig, get_cleanup_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRIES, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ledger import (
    MIRROR_NODE_URLS,
    LedgerConfig,
    LedgerNetwork,
    get_ledger_config,
    mirror_resilience_config,
)
from .logging import configure_logging

__all__ = [
    "MAX_DISSOCIATE_BATCH_SIZE",
    "MIRROR_NODE_URLS",
    "NO_RETRIES",
    "CacheConfig",
    "CleanupConfig",
    "ConfigurationError",
    "LedgerConfig",
    "LedgerNetwork",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_cleanup_config",
    "get_ledger_config",
    "mirror_resilience_config",
    "optional_env_var",
    "require_env_vars",
]
