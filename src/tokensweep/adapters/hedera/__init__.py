"""Public interface for the Hedera adapter."""

from __future__ import annotations

from .gateway import DisassociationSubmitter, HederaLedgerGateway, build_hedera_gateway
from .mirror import MirrorNodeClient, is_token_info_payload
from .submitter import SdkDisassociationSubmitter, load_signing_key

__all__ = [
    "DisassociationSubmitter",
    "HederaLedgerGateway",
    "MirrorNodeClient",
    "SdkDisassociationSubmitter",
    "build_hedera_gateway",
    "is_token_info_payload",
    "load_signing_key",
]
