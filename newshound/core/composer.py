"""Report composition.

Merges reporter outputs into the two shapes Newshound emits: the digest
message for transports and the banner payload for the renderer.
"""

from collections.abc import Sequence
from datetime import date

from .models import (
    BannerPayload,
    BannerQueueStats,
    Block,
    DigestMessage,
    ReportRecord,
    SeverityBadge,
)

DIGEST_TITLE = "🐕 Daily Newshound Report"


def compose_digest(
    exception_blocks: Sequence[Block],
    warning_blocks: Sequence[Block] | None,
    job_blocks: Sequence[Block],
    report_date: date,
) -> DigestMessage:
    """Assemble the digest in fixed order: exceptions, warnings, jobs.

    Args:
        exception_blocks: Blocks from the exception reporter.
        warning_blocks: Blocks from the warning reporter, or None when no
            warning source is configured (the section is left out).
        job_blocks: Blocks from the job reporter.
        report_date: Date shown under the header.
    """
    blocks: list[Block] = [
        Block.header(DIGEST_TITLE),
        Block.section(f"*Date:* {report_date.strftime('%A, %B %d, %Y')}"),
        Block.divider(),
        *exception_blocks,
    ]
    if warning_blocks is not None:
        blocks.append(Block.divider())
        blocks.extend(warning_blocks)
    blocks.append(Block.divider())
    blocks.extend(job_blocks)

    return DigestMessage(
        blocks=tuple(blocks),
        text="Daily Newshound Report",
        subject=f"Newshound Daily Report - {report_date.isoformat()}",
    )


def severity_badge(
    exception_count: int,
    warning_count: int,
    failed_jobs: int,
    counts_warnings: bool = True,
) -> SeverityBadge:
    """Derive the banner badge.

    Exceptions or more than 10 failed jobs give an error badge. Otherwise
    more than 5 failed jobs (or any warning, when counts_warnings is set)
    give a warning badge. With counts_warnings unset, warnings never raise
    the tier on their own.
    """
    if exception_count > 0 or failed_jobs > 10:
        return SeverityBadge(
            "error", f"{exception_count} exceptions, {failed_jobs} failed jobs"
        )

    warned = counts_warnings and warning_count > 0
    if warned or failed_jobs > 5:
        parts = []
        if warned:
            parts.append(f"{warning_count} warnings")
        if failed_jobs > 5:
            parts.append(f"{failed_jobs} failed jobs")
        return SeverityBadge("warning", ", ".join(parts))

    return SeverityBadge("success", "All clear")


def compose_banner(
    exceptions: Sequence[ReportRecord],
    warnings: Sequence[ReportRecord],
    queue_stats: BannerQueueStats | None,
    counts_warnings: bool = True,
    window_hours: int = 24,
) -> BannerPayload:
    """Merge the three banner fragments and attach the severity badge."""
    failed_jobs = queue_stats.failed if queue_stats else 0
    return BannerPayload(
        exceptions=tuple(exceptions),
        warnings=tuple(warnings),
        queue_stats=queue_stats,
        badge=severity_badge(
            len(exceptions), len(warnings), failed_jobs, counts_warnings
        ),
        window_hours=window_hours,
    )
