from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .results import ErrorRecord, ProcessResult, RunStats


@dataclass(frozen=True)
class BatchSummary:
    total_files: int
    processed: int
    skipped: int
    failed: int
    original_kb: float
    minified_kb: float
    reduction_percent: Optional[float]  # None when nothing was processed
    errors: List[ErrorRecord]

    @property
    def reduction_text(self) -> str:
        if self.reduction_percent is None:
            return "N/A"
        return f"{self.reduction_percent:.2f}%"


def build_summary(results: Sequence[ProcessResult], stats: RunStats) -> BatchSummary:
    skipped = sum(1 for r in results if r.skipped_reason == "unsupported_extension")
    failed = sum(1 for r in results if not r.written and r.skipped_reason != "unsupported_extension")

    return BatchSummary(
        total_files=len(results),
        processed=stats.files_processed,
        skipped=skipped,
        failed=failed,
        original_kb=round(stats.original_size_bytes / 1024, 2),
        minified_kb=round(stats.minified_size_bytes / 1024, 2),
        reduction_percent=(
            round(stats.reduction_percent, 2) if stats.reduction_percent is not None else None
        ),
        errors=list(stats.errors),
    )


def render_report(summary: BatchSummary) -> str:
    lines = [
        "=== Minification Results ===",
        f"Total found    : {summary.total_files}",
        f"Files Processed: {summary.processed}",
        f"Skipped        : {summary.skipped}",
        f"Failed         : {summary.failed}",
        f"Original Size  : {summary.original_kb:.2f} KB",
        f"Minified Size  : {summary.minified_kb:.2f} KB",
        f"Reduction      : {summary.reduction_text}",
    ]

    if summary.errors:
        lines.append("")
        lines.append("Errors:")
        for e in summary.errors:
            lines.append(f"  {e}")

    return "\n".join(lines)
