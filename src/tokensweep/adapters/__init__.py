"""Adapters connecting the cleanup workflow to external systems."""
