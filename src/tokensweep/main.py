#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tokensweep.app import dissociate_deleted_tokens
from tokensweep.config import ConfigurationError, configure_logging
from tokensweep.domain.errors import FatalRunError
from tokensweep.ui.report import render_summary

if TYPE_CHECKING:
    from types import FrameType

    from tokensweep.domain.types import RunSummary

log = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_CONFIGURATION = 2
EXIT_COMPLETED_WITH_FAILURES = 3


def exit_code_for(summary: RunSummary) -> int:
    """Skipped tokens are expected; only failed ones mark the run as unclean."""

    return EXIT_COMPLETED_WITH_FAILURES if summary.has_failures else 0


def main() -> None:
    """Dissociate deleted, zero-balance tokens from the configured Hedera account."""
    configure_logging()
    try:
        summary = dissociate_deleted_tokens()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_CONFIGURATION)
    except FatalRunError:
        log.exception("Cleanup aborted")
        sys.exit(EXIT_FATAL)
    except Exception:
        log.exception("Unexpected error")
        sys.exit(EXIT_FATAL)

    print(render_summary(summary))
    code = exit_code_for(summary)
    if code:
        sys.exit(code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
