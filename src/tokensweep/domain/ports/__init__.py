"""Domain port definitions for adapters."""

from __future__ import annotations

from .ledger import SUCCESS_STATUS, DisassociationReceipt, LedgerGateway, SigningKey

__all__ = ["SUCCESS_STATUS", "DisassociationReceipt", "LedgerGateway", "SigningKey"]
