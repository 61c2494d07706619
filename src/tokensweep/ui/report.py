"""Human-readable rendering of a cleanup run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokensweep.config.ledger import TINYBARS_PER_HBAR

if TYPE_CHECKING:
    from tokensweep.domain.types import RunSummary


def format_hbar(tinybars: int) -> str:
    return f"{tinybars / TINYBARS_PER_HBAR:,.8f} ℏ"


def render_summary(summary: RunSummary) -> str:
    lines = [
        f"Cleanup summary for {summary.account_id}",
        "=" * 40,
    ]
    if summary.hbar_balance is not None:
        lines.append(f"HBAR balance:        {format_hbar(summary.hbar_balance)}")
    lines.extend(
        [
            f"Tokens inspected:    {summary.total_holdings}",
            f"Tokens dissociated:  {summary.dissociated_count}",
            f"Tokens skipped:      {summary.skipped_count}"
            f" (active: {summary.skipped_active},"
            f" non-zero balance: {summary.skipped_nonzero_balance})",
            f"Tokens failed:       {summary.failed_count}",
            f"Batches submitted:   {summary.batches_executed}",
        ]
    )
    if summary.remaining_associations is not None:
        lines.append(f"Associations left:   {summary.remaining_associations}")

    if summary.failures:
        lines.append("")
        lines.append("Failures:")
        lines.extend(
            f"  - {failure.asset_id} [{failure.stage}]: {failure.reason}"
            for failure in summary.failures
        )
    return "\n".join(lines)
