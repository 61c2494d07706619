"""Domain logic for cleaning up token associations of a ledger account."""
