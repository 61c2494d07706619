"""Errors raised across the ledger port and the cleanup run."""

from __future__ import annotations


class LedgerError(RuntimeError):
    """Base class for failures reported by a ledger gateway."""


class LedgerNetworkError(LedgerError):
    """The ledger or mirror node could not be reached or answered with a server error."""


class LedgerAuthError(LedgerError):
    """The ledger refused the request for the configured operator."""


class AssetNotFoundError(LedgerError):
    """The requested account or token does not exist on the ledger."""


class LedgerProtocolError(LedgerError):
    """The ledger answered with a payload that could not be understood."""


class SigningError(LedgerError):
    """A transaction could not be frozen or signed."""


class FatalRunError(RuntimeError):
    """Raised when a cleanup run cannot start; no summary is produced."""
