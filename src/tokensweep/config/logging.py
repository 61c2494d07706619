"""Shared logging helpers for tokensweep."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Progress of a cleanup run is reported through module loggers; the terse
    format keeps per-asset lines readable on a terminal. Pass ``force=True``
    to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
